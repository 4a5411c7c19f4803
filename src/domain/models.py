"""
Domain models - Entities, request and result types for registration.

Entities are plain dataclasses populated by store adapters. They carry
identifiers only; cross-references (user -> organisation -> team) are
stored as ids, never as nested objects.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class RegistrationMessage(str, Enum):
    """
    User-facing registration outcome messages.

    Uses the str mixin so members compare equal to their text and
    serialize to JSON as plain strings.
    """

    FIELDS_REQUIRED = "Email, username and password are required"
    ORGANISATION_NAME_REQUIRED = "Organisation name is required"
    PASSWORD_MISMATCH = "Password do not match"
    USER_EXISTS = "User already exists"
    ORGANISATION_EXISTS = "Organisation already exists"
    REGISTERED = "Successfully registered"


@dataclass
class User:
    """A registered user. `password` holds the salted hash, never the raw value."""

    id: UUID
    email: str
    display_name: str
    password: str
    salt: str
    sign_in_count: int
    last_login: datetime | None
    organisations: list[UUID] = field(default_factory=list)
    teams: list[UUID] = field(default_factory=list)


@dataclass
class Organisation:
    """A tenant organisation. `owners` references the owning Team."""

    id: UUID
    name: str
    owners: UUID | None = None


@dataclass
class Team:
    """A team within an organisation."""

    id: UUID
    organisation: UUID
    name: str
    members: list[UUID] = field(default_factory=list)


# Accepted input keys per field, including the camelCase spellings sent by
# browser clients. When several are present, the first listed wins.
REQUEST_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "email": ("email",),
    "display_name": ("display_name", "displayName"),
    "password": ("password",),
    "confirm_password": ("confirm_password", "confirmPassword", "confirmPass"),
    "organisation_name": ("organisation_name", "organisationName"),
}


@dataclass(frozen=True)
class RegistrationRequest:
    """
    Raw registration input.

    Values are taken exactly as submitted: no trimming, no normalization.
    Any field may be absent (None).
    """

    email: str | None = None
    display_name: str | None = None
    password: str | None = None
    confirm_password: str | None = None
    organisation_name: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RegistrationRequest":
        """
        Build a request from a loosely shaped mapping.

        Accepts snake_case and camelCase keys (`displayName`,
        `confirmPassword`, `confirmPass`, `organisationName`).
        If a field is given under more than one key, the snake_case key
        wins, then the keys in REQUEST_KEY_ALIASES order, regardless of
        the mapping's own order. Unknown keys are ignored.
        """
        values: dict[str, Any] = {}
        for name, keys in REQUEST_KEY_ALIASES.items():
            for key in keys:
                if key in data:
                    values[name] = data[key]
                    break
        return cls(**values)


@dataclass(frozen=True)
class RegistrationResult:
    """
    Outcome of a registration attempt.

    A failed result is a normal outcome; entities are None on failure.
    """

    success: bool
    message: str
    user: User | None = None
    organisation: Organisation | None = None
    team: Team | None = None

    @classmethod
    def failed(cls, message: str) -> "RegistrationResult":
        return cls(success=False, message=message)

    @classmethod
    def registered(
        cls, user: User, organisation: Organisation, team: Team
    ) -> "RegistrationResult":
        return cls(
            success=True,
            message=RegistrationMessage.REGISTERED.value,
            user=user,
            organisation=organisation,
            team=team,
        )
