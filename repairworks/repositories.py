"""
Entity store.

One EntityRepository per table, built on an injected SQLAlchemy session.
Lookups by id accept whatever the client sent (str/int); ids that are not
integers simply do not match anything.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreError
from .models import Client, Contractor, Material, Order, User, WorkObject

logger = logging.getLogger(__name__)

# Primary keys are signed 64-bit integers in every backend we run on.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def parse_id(value: Any) -> Optional[int]:
    """Parse an id from request data. Returns None if empty/invalid/out of range."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        try:
            parsed = int(raw)
        except ValueError:
            return None
    if not MIN_ID <= parsed <= MAX_ID:
        return None
    return parsed


class EntityRepository:
    def __init__(self, session, model):
        self.session = session
        self.model = model

    def find_all(self, **filters) -> list:
        """All rows matching equality filters, in insertion order."""
        q = self.session.query(self.model)
        if filters:
            q = q.filter_by(**filters)
        return q.order_by(self.model.id.asc()).all()

    def find_one(self, **filters):
        return self.session.query(self.model).filter_by(**filters).first()

    def find_by_id(self, entity_id: Any):
        pk = parse_id(entity_id)
        if pk is None:
            return None
        return self.session.get(self.model, pk)

    def find_many(self, entity_ids: Iterable[Any]) -> list:
        """Rows for the ids that resolve; the rest are ignored."""
        pks = {pk for pk in (parse_id(i) for i in entity_ids) if pk is not None}
        if not pks:
            return []
        return (
            self.session.query(self.model)
            .filter(self.model.id.in_(pks))
            .order_by(self.model.id.asc())
            .all()
        )

    def count(self) -> int:
        return self.session.query(self.model).count()

    def insert(self, data: dict):
        entity = self.model(**data)
        return self.add(entity)

    def add(self, entity):
        self.session.add(entity)
        self._commit(f"insert into {self.model.__tablename__}")
        return entity

    def add_all(self, entities: list) -> list:
        self.session.add_all(entities)
        self._commit(f"bulk insert into {self.model.__tablename__}")
        return entities

    def delete_by_id(self, entity_id: Any) -> bool:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self._commit(f"delete from {self.model.__tablename__}")
        return True

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Store failure during %s", action)
            raise StoreError() from exc


class Store:
    """The six collections, bound to one session."""

    def __init__(self, session):
        self.session = session
        self.users = EntityRepository(session, User)
        self.clients = EntityRepository(session, Client)
        self.contractors = EntityRepository(session, Contractor)
        self.materials = EntityRepository(session, Material)
        self.objects = EntityRepository(session, WorkObject)
        self.orders = EntityRepository(session, Order)
