"""
In-memory store adapters - Implement the UserStore, OrganisationStore
and TeamStore protocols without a database.

Used for local development and tests. Each store enforces the same
unique fields as the PostgreSQL schema so that races and duplicates
surface as DuplicateRecordError, exactly like the database adapter.
"""

import copy
import dataclasses
import threading
from collections.abc import Mapping
from typing import Any
from uuid import UUID, uuid4

from src.domain.exceptions import DuplicateRecordError, RecordNotFound
from src.domain.models import Organisation, Team, User


class InMemoryStore:
    """
    Dict-backed store keyed by entity id.

    Subclasses set `entity_type` and `unique_fields`. All access is
    serialized with a lock; returned entities are copies, so callers
    cannot mutate stored state.
    """

    entity_type: type
    unique_fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._records: dict[UUID, Any] = {}
        self._lock = threading.Lock()
        self._fields = {f.name for f in dataclasses.fields(self.entity_type)}

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    def find_one(self, criteria: Mapping[str, Any]) -> Any | None:
        self._check_fields(criteria)
        with self._lock:
            for record in self._records.values():
                if self._matches(record, criteria):
                    return copy.deepcopy(record)
        return None

    def exists(self, criteria: Mapping[str, Any]) -> bool:
        self._check_fields(criteria)
        with self._lock:
            return any(self._matches(record, criteria) for record in self._records.values())

    def create(self, attributes: Mapping[str, Any]) -> Any:
        self._check_fields(attributes)
        with self._lock:
            self._check_unique(attributes, exclude=None)
            record = self.entity_type(id=uuid4(), **copy.deepcopy(dict(attributes)))
            self._records[record.id] = record
            return copy.deepcopy(record)

    def update(self, entity_id: UUID, attributes: Mapping[str, Any]) -> Any:
        self._check_fields(attributes)
        with self._lock:
            record = self._records.get(entity_id)
            if record is None:
                raise RecordNotFound(self.entity_name, entity_id)
            self._check_unique(attributes, exclude=entity_id)
            record = dataclasses.replace(record, **copy.deepcopy(dict(attributes)))
            self._records[entity_id] = record
            return copy.deepcopy(record)

    def delete(self, entity_id: UUID) -> None:
        with self._lock:
            self._records.pop(entity_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _check_fields(self, values: Mapping[str, Any]) -> None:
        unknown = set(values) - self._fields
        if unknown:
            raise ValueError(f"Unknown {self.entity_name} field(s): {sorted(unknown)}")

    def _check_unique(self, attributes: Mapping[str, Any], exclude: UUID | None) -> None:
        # Caller holds the lock
        for name in self.unique_fields:
            if name not in attributes:
                continue
            for record in self._records.values():
                if record.id != exclude and getattr(record, name) == attributes[name]:
                    raise DuplicateRecordError(self.entity_name, name)

    @staticmethod
    def _matches(record: Any, criteria: Mapping[str, Any]) -> bool:
        return all(getattr(record, name) == value for name, value in criteria.items())


class InMemoryUserStore(InMemoryStore):
    """Implements UserStore protocol in memory."""

    entity_type = User
    unique_fields = ("email", "display_name")


class InMemoryOrganisationStore(InMemoryStore):
    """Implements OrganisationStore protocol in memory."""

    entity_type = Organisation
    unique_fields = ("name",)


class InMemoryTeamStore(InMemoryStore):
    """Implements TeamStore protocol in memory."""

    entity_type = Team
