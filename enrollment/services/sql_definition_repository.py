"""SQLAlchemy-backed definition repository.

Rows are converted to the pydantic record types on the way out so callers
never hold on to a session-bound object.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from enrollment.services.definition_repository import sequence_is_valid
from enrollment.services.reorder import dense_orders

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)


class SqlAlchemyDefinitionRepository(Generic[D]):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        row_type: type,
        record_type: type[D],
        defaults: Iterable[dict] = (),
    ):
        self._session_factory = session_factory
        self._row_type = row_type
        self._record_type = record_type
        self._defaults = [dict(d) for d in defaults]

    def _to_record(self, row) -> D:
        return self._record_type.model_validate(row)

    def create(self, data: dict) -> D:
        payload = {k: v for k, v in data.items() if k != "id"}
        # Validate the shape before touching the database
        self._record_type.model_validate({**payload, "id": 0})
        with self._session_factory() as db:
            row = self._row_type(**payload)
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def get(self, definition_id: int) -> Optional[D]:
        with self._session_factory() as db:
            row = db.get(self._row_type, definition_id)
            return self._to_record(row) if row is not None else None

    def list(self) -> list[D]:
        with self._session_factory() as db:
            rows = db.query(self._row_type).order_by(self._row_type.id).all()
            return [self._to_record(r) for r in rows]

    def update(self, definition_id: int, changes: dict) -> Optional[D]:
        with self._session_factory() as db:
            row = db.get(self._row_type, definition_id)
            if row is None:
                return None
            merged = {**self._to_record(row).model_dump(mode="json"), **changes, "id": definition_id}
            record = self._record_type.model_validate(merged)
            for key, value in record.model_dump(mode="json", exclude={"id"}).items():
                setattr(row, key, value)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def delete(self, definition_id: int) -> bool:
        with self._session_factory() as db:
            row = db.get(self._row_type, definition_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    def set_sequence(self, ids: list[int]) -> Optional[list[D]]:
        with self._session_factory() as db:
            rows = db.query(self._row_type).filter(self._row_type.id.in_(ids)).all()
            by_id = {r.id: r for r in rows}
            if not sequence_is_valid(ids, by_id):
                return None
            try:
                for definition_id, order in dense_orders(ids):
                    by_id[definition_id].order = order
                db.commit()
            except Exception:
                db.rollback()
                raise
            return [self._to_record(by_id[i]) for i in ids]

    def is_empty(self) -> bool:
        with self._session_factory() as db:
            return db.query(self._row_type.id).first() is None

    def seed_defaults(self) -> int:
        with self._session_factory() as db:
            if db.query(self._row_type.id).first() is not None:
                return 0
            for data in self._defaults:
                db.add(self._row_type(**data))
            db.commit()
        logger.info(f"Seeded {len(self._defaults)} default {self._row_type.__tablename__} rows")
        return len(self._defaults)
