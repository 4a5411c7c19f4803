"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory stores (fresh per test)
- Registration service wired with low-cost bcrypt
- A valid registration request
- PostgreSQL connection pool (skipped when the database is unreachable)
"""

from collections.abc import Generator
from datetime import datetime, timezone

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.memory import (
    InMemoryOrganisationStore,
    InMemoryTeamStore,
    InMemoryUserStore,
)
from src.adapters.repository.postgres import run_migrations
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher, BcryptSaltGenerator
from src.config.settings import get_settings
from src.domain.models import RegistrationRequest
from src.domain.registration import RegistrationService

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def organisations() -> InMemoryOrganisationStore:
    return InMemoryOrganisationStore()


@pytest.fixture
def teams() -> InMemoryTeamStore:
    return InMemoryTeamStore()


@pytest.fixture
def service(
    users: InMemoryUserStore,
    organisations: InMemoryOrganisationStore,
    teams: InMemoryTeamStore,
) -> RegistrationService:
    """Registration service over in-memory stores (bcrypt cost 4 keeps tests fast)."""
    return RegistrationService(
        users=users,
        organisations=organisations,
        teams=teams,
        hasher=BcryptPasswordHasher(),
        salt_generator=BcryptSaltGenerator(rounds=4),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def now() -> datetime:
    """Timestamp returned by the service clock."""
    return FIXED_NOW


@pytest.fixture
def valid_request() -> RegistrationRequest:
    return RegistrationRequest(
        email="user@test.com",
        display_name="name",
        password="pass",
        confirm_password="pass",
        organisation_name="myOrg",
    )


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool for tests that need PostgreSQL.

    Skips the requesting test when the database is unreachable.
    Migrations are applied once per session.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=2.0)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not available at {settings.database_url}")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the account tables before each test."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE users, teams, organisations CASCADE")
        conn.commit()
    yield
