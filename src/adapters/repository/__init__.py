"""Repository adapters - Store implementations."""

from .memory import InMemoryOrganisationStore, InMemoryTeamStore, InMemoryUserStore
from .postgres import (
    PostgresOrganisationStore,
    PostgresTeamStore,
    PostgresUserStore,
    run_migrations,
)

__all__ = [
    "InMemoryOrganisationStore",
    "InMemoryTeamStore",
    "InMemoryUserStore",
    "PostgresOrganisationStore",
    "PostgresTeamStore",
    "PostgresUserStore",
    "run_migrations",
]
