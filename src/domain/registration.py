"""
Registration domain service - Organisation onboarding.

This module contains the core business logic for registering a user
together with a new organisation and the organisation's owning team.

Validation Order (short-circuits on first failure)
==================================================

1. email, display_name or password missing  -> FIELDS_REQUIRED
2. organisation_name missing                -> ORGANISATION_NAME_REQUIRED
3. password != confirm_password             -> PASSWORD_MISMATCH
4. email already registered                 -> USER_EXISTS
5. display_name taken by a user or an org   -> USER_EXISTS
6. organisation_name taken by an org        -> ORGANISATION_EXISTS

Creation Sequence
=================

    Organisation(owners=None)
    -> Team(organisation=org.id)
    -> Organisation.owners = team.id
    -> User(organisations=[org.id], teams=[team.id])
    -> Team.members = [user.id]

Each step is a separate store write. If any write after the organisation
is created raises, the records created so far are deleted newest first
and the original exception is re-raised.

Note: uniqueness checks are read-then-act. A concurrent registration can
pass the same checks; the loser then fails with the store's
DuplicateRecordError instead of a friendly message.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from .models import RegistrationMessage, RegistrationRequest, RegistrationResult
from .ports import OrganisationStore, PasswordHasher, SaltGenerator, TeamStore, UserStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_missing(value: str | None) -> bool:
    """A field is missing iff it is absent (None) or the empty string."""
    return value is None or value == ""


def display_name_taken(
    users: UserStore, organisations: OrganisationStore, name: str
) -> bool:
    """
    Check a name against the shared user/organisation namespace.

    User display names and organisation names must not collide, so a
    name is taken if either store has it.
    """
    if users.exists({"display_name": name}):
        return True
    return organisations.exists({"name": name})


@dataclass
class RegistrationService:
    """
    Domain service for organisation onboarding.

    Orchestrates validation, uniqueness checks, credential preparation
    and creation of the user, organisation and owning team. Holds no
    state between calls beyond the injected collaborators.
    """

    users: UserStore
    organisations: OrganisationStore
    teams: TeamStore
    hasher: PasswordHasher
    salt_generator: SaltGenerator
    owners_team_name: str = "Owners"
    clock: Callable[[], datetime] = field(default=_utcnow)

    def register(self, request: RegistrationRequest) -> RegistrationResult:
        """
        Register a user with a new organisation.

        Args:
            request: Raw registration input

        Returns:
            RegistrationResult; success=False carries the validation message
            and no records are written in that case

        Raises:
            StoreError: Or any other exception raised by a collaborator,
                propagated unchanged after compensating cleanup
        """
        message = self._validate(request)
        if message is not None:
            logger.info("Registration rejected: %s", message.value)
            return RegistrationResult.failed(message.value)

        salt = self.salt_generator.generate()
        password_hash = self.hasher.hash(request.password, salt)

        organisation = self.organisations.create(
            {"name": request.organisation_name, "owners": None}
        )
        created: list[tuple[Any, UUID]] = [(self.organisations, organisation.id)]
        try:
            team = self.teams.create(
                {
                    "organisation": organisation.id,
                    "name": self.owners_team_name,
                    "members": [],
                }
            )
            created.append((self.teams, team.id))

            organisation = self.organisations.update(organisation.id, {"owners": team.id})

            user = self.users.create(
                {
                    "email": request.email,
                    "display_name": request.display_name,
                    "password": password_hash,
                    "salt": salt,
                    "sign_in_count": 1,
                    "last_login": self.clock(),
                    "organisations": [organisation.id],
                    "teams": [team.id],
                }
            )
            created.append((self.users, user.id))

            team = self.teams.update(team.id, {"members": [user.id]})
        except Exception:
            self._compensate(created)
            raise

        logger.info(
            "Registered user %s with organisation %s", user.id, organisation.id
        )
        return RegistrationResult.registered(user, organisation, team)

    def check_display_name_exists(self, name: str) -> bool:
        """
        Check whether a name is taken by a user or an organisation.

        Used by "is this name available" checks outside of registration.
        """
        return display_name_taken(self.users, self.organisations, name)

    def _validate(self, request: RegistrationRequest) -> RegistrationMessage | None:
        """Run validation in order; return the first failure message or None."""
        if (
            _is_missing(request.email)
            or _is_missing(request.display_name)
            or _is_missing(request.password)
        ):
            return RegistrationMessage.FIELDS_REQUIRED
        if _is_missing(request.organisation_name):
            return RegistrationMessage.ORGANISATION_NAME_REQUIRED
        if request.password != request.confirm_password:
            return RegistrationMessage.PASSWORD_MISMATCH
        if self.users.exists({"email": request.email}):
            return RegistrationMessage.USER_EXISTS
        if display_name_taken(self.users, self.organisations, request.display_name):
            return RegistrationMessage.USER_EXISTS
        if self.organisations.exists({"name": request.organisation_name}):
            return RegistrationMessage.ORGANISATION_EXISTS
        return None

    def _compensate(self, created: list[tuple[Any, UUID]]) -> None:
        """
        Delete records created by a failed registration, newest first.

        Cleanup failures are logged; the caller re-raises the original error.
        """
        for store, entity_id in reversed(created):
            try:
                store.delete(entity_id)
            except Exception:
                logger.warning(
                    "Cleanup failed for %s %s", type(store).__name__, entity_id, exc_info=True
                )
