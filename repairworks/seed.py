"""
repairworks/seed.py

Seed starter data.

Rules:
- Safe to run multiple times (idempotent).
- A table is seeded only when it is completely empty; existing rows are never
  touched or topped up.
- Orders are never seeded.
"""

from __future__ import annotations

import logging

from .models import Client, Contractor, Material, User, WorkObject
from .repositories import Store

logger = logging.getLogger(__name__)


DEFAULT_USERS = [
    # login, password, is_admin
    ("admin", "admin", True),
    ("user1", "user1", False),
]

DEFAULT_CLIENTS = [
    {"name": "Иванов Иван", "contact": "ivanov@example.com"},
    {"name": "Петров Петр", "contact": "petrov@example.com"},
]

DEFAULT_CONTRACTORS = [
    {"name": 'ООО "СтройМастер"', "contact": "stroy@example.com"},
    {"name": "ИП Сидоров", "contact": "sidorov@example.com"},
]

DEFAULT_MATERIALS = [
    {"name": "Краска", "cost": 1500},
    {"name": "Обои", "cost": 2500},
    {"name": "Ламинат", "cost": 3000},
]

DEFAULT_OBJECTS = [
    {"type": "Квартира", "address": "ул. Ленина, 10", "area": 50},
    {"type": "Офис", "address": "ул. Гагарина, 5", "area": 100},
]


def _default_users() -> list[User]:
    users = []
    for login, password, is_admin in DEFAULT_USERS:
        user = User(login=login, is_admin=is_admin)
        user.set_password(password)
        users.append(user)
    return users


def seed_defaults(session) -> list[str]:
    """
    Fill every empty table with its starter rows.

    Returns the names of the tables that were seeded.
    """
    store = Store(session)
    plan = [
        (store.users, _default_users),
        (store.clients, lambda: [Client(**row) for row in DEFAULT_CLIENTS]),
        (store.contractors, lambda: [Contractor(**row) for row in DEFAULT_CONTRACTORS]),
        (store.materials, lambda: [Material(**row) for row in DEFAULT_MATERIALS]),
        (store.objects, lambda: [WorkObject(**row) for row in DEFAULT_OBJECTS]),
    ]

    seeded = []
    for repo, build in plan:
        if repo.count() > 0:
            continue
        repo.add_all(build())
        table = repo.model.__tablename__
        seeded.append(table)
        logger.info("Initialized %s with default data", table)

    return seeded
