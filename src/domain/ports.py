"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols structurally;
they never inherit from them.
"""

from collections.abc import Mapping
from typing import Any, Protocol
from uuid import UUID

from .models import Organisation, Team, User


class UserStore(Protocol):
    """Port interface for user persistence."""

    def find_one(self, criteria: Mapping[str, Any]) -> User | None:
        """
        Return the first user whose fields equal every value in criteria.

        Args:
            criteria: Mapping of User field name to expected value

        Returns:
            Matching User, or None

        Raises:
            ValueError: If criteria names a field User does not have
        """
        ...

    def exists(self, criteria: Mapping[str, Any]) -> bool:
        """Return True if any user matches criteria."""
        ...

    def create(self, attributes: Mapping[str, Any]) -> User:
        """
        Persist a new user. The store assigns the id.

        Raises:
            DuplicateRecordError: If email or display_name is already taken
        """
        ...

    def update(self, entity_id: UUID, attributes: Mapping[str, Any]) -> User:
        """
        Overwrite the given fields of an existing user.

        Raises:
            RecordNotFound: If no user has entity_id
        """
        ...

    def delete(self, entity_id: UUID) -> None:
        """Remove a user. Deleting a missing id is a no-op."""
        ...


class OrganisationStore(Protocol):
    """Port interface for organisation persistence."""

    def find_one(self, criteria: Mapping[str, Any]) -> Organisation | None: ...

    def exists(self, criteria: Mapping[str, Any]) -> bool: ...

    def create(self, attributes: Mapping[str, Any]) -> Organisation:
        """
        Persist a new organisation. The store assigns the id.

        Raises:
            DuplicateRecordError: If name is already taken
        """
        ...

    def update(self, entity_id: UUID, attributes: Mapping[str, Any]) -> Organisation: ...

    def delete(self, entity_id: UUID) -> None: ...


class TeamStore(Protocol):
    """Port interface for team persistence."""

    def find_one(self, criteria: Mapping[str, Any]) -> Team | None: ...

    def exists(self, criteria: Mapping[str, Any]) -> bool: ...

    def create(self, attributes: Mapping[str, Any]) -> Team: ...

    def update(self, entity_id: UUID, attributes: Mapping[str, Any]) -> Team: ...

    def delete(self, entity_id: UUID) -> None: ...


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, plaintext: str, salt: str) -> str:
        """
        Derive a password hash.

        Must be deterministic for the same (plaintext, salt) pair.
        """
        ...


class SaltGenerator(Protocol):
    """Port interface for per-user salt generation."""

    def generate(self) -> str:
        """Return a fresh cryptographically random salt."""
        ...
