"""
Shared fixtures for adversarial tests.

Provides stores that let a test interleave a competing registration
between another registration's uniqueness checks and its writes.
"""

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from src.adapters.repository.memory import InMemoryOrganisationStore, InMemoryUserStore
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher, BcryptSaltGenerator
from src.domain.ports import OrganisationStore, TeamStore, UserStore
from src.domain.registration import RegistrationService


class StaleUserStore(InMemoryUserStore):
    """User store whose existence checks always miss, like a read that lost a race."""

    def exists(self, criteria: Mapping[str, Any]) -> bool:
        return False


class InterleavingOrganisationStore(InMemoryOrganisationStore):
    """Runs a callback once, just before the first organisation write."""

    def __init__(self) -> None:
        super().__init__()
        self.before_first_create: Callable[[], None] | None = None

    def create(self, attributes: Mapping[str, Any]) -> Any:
        callback, self.before_first_create = self.before_first_create, None
        if callback is not None:
            callback()
        return super().create(attributes)


@pytest.fixture
def stale_users() -> StaleUserStore:
    return StaleUserStore()


@pytest.fixture
def interleaving_organisations() -> InterleavingOrganisationStore:
    return InterleavingOrganisationStore()


@pytest.fixture
def build_service() -> Callable[[UserStore, OrganisationStore, TeamStore], RegistrationService]:
    """Factory for services over arbitrary stores, with low-cost bcrypt."""

    def build(
        users: UserStore, organisations: OrganisationStore, teams: TeamStore
    ) -> RegistrationService:
        return RegistrationService(
            users=users,
            organisations=organisations,
            teams=teams,
            hasher=BcryptPasswordHasher(),
            salt_generator=BcryptSaltGenerator(rounds=4),
        )

    return build
