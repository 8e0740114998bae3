"""Storage and identity management for definition collections."""

from __future__ import annotations

import logging
import threading
from typing import Generic, Iterable, Optional, Protocol, TypeVar

from pydantic import BaseModel

from enrollment.services.reorder import dense_orders

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)


class DefinitionRepository(Protocol[D]):
    """What the form engine needs from a definition backend.

    Unknown ids are reported through ``None``/``False`` return values, never
    through exceptions.
    """

    def create(self, data: dict) -> D: ...

    def get(self, definition_id: int) -> Optional[D]: ...

    def list(self) -> list[D]: ...

    def update(self, definition_id: int, changes: dict) -> Optional[D]: ...

    def delete(self, definition_id: int) -> bool: ...

    def set_sequence(self, ids: list[int]) -> Optional[list[D]]: ...

    def is_empty(self) -> bool: ...

    def seed_defaults(self) -> int: ...


def sequence_is_valid(ids: Iterable[int], known: Iterable[int]) -> bool:
    ids = list(ids)
    known = set(known)
    return len(ids) == len(set(ids)) and all(i in known for i in ids)


class InMemoryDefinitionRepository(Generic[D]):
    """Dict-backed repository with a monotonically increasing id counter."""

    def __init__(self, record_type: type[D], defaults: Iterable[dict] = ()):
        self._record_type = record_type
        self._defaults = [dict(d) for d in defaults]
        self._records: dict[int, D] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, data: dict) -> D:
        with self._lock:
            return self._create_locked(data)

    def _create_locked(self, data: dict) -> D:
        payload = {k: v for k, v in data.items() if k != "id"}
        record = self._record_type.model_validate({**payload, "id": self._next_id})
        self._records[record.id] = record
        self._next_id += 1
        return record

    def get(self, definition_id: int) -> Optional[D]:
        return self._records.get(definition_id)

    def list(self) -> list[D]:
        with self._lock:
            return list(self._records.values())

    def update(self, definition_id: int, changes: dict) -> Optional[D]:
        with self._lock:
            existing = self._records.get(definition_id)
            if existing is None:
                return None
            merged = {**existing.model_dump(mode="json"), **changes, "id": definition_id}
            updated = self._record_type.model_validate(merged)
            self._records[definition_id] = updated
            return updated

    def delete(self, definition_id: int) -> bool:
        with self._lock:
            return self._records.pop(definition_id, None) is not None

    def set_sequence(self, ids: list[int]) -> Optional[list[D]]:
        with self._lock:
            if not sequence_is_valid(ids, self._records):
                return None
            reordered = []
            for definition_id, order in dense_orders(ids):
                record = self._records[definition_id].model_copy(update={"order": order})
                self._records[definition_id] = record
                reordered.append(record)
            return reordered

    def is_empty(self) -> bool:
        return not self._records

    def seed_defaults(self) -> int:
        with self._lock:
            if self._records:
                return 0
            for data in self._defaults:
                self._create_locked(data)
            logger.info(
                f"Seeded {len(self._defaults)} default {self._record_type.__name__} records"
            )
            return len(self._defaults)
