"""
PostgreSQL store adapters - Implement the domain store protocols.

This module provides the PostgreSQL implementation of the domain's
UserStore, OrganisationStore and TeamStore ports using psycopg3.

Query Construction:
------------------
Criteria and attribute mappings use entity field names, which are also the
column names. Field names are checked against a per-table whitelist and
composed with psycopg.sql.Identifier; values are always bound parameters.

Uniqueness:
----------
users.email, users.display_name and organisations.name carry named UNIQUE
constraints (see migrations/). A violation is translated to the domain's
DuplicateRecordError; every other psycopg error propagates unchanged.
Display-name vs organisation-name collisions span two tables and are only
checked by the domain pre-check.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from uuid import UUID

from psycopg import sql
from psycopg.errors import UniqueViolation
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateRecordError, RecordNotFound
from src.domain.models import Organisation, Team, User

logger = logging.getLogger(__name__)


class PostgresStore:
    """
    Table-backed store. Subclasses describe the table and entity.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    table: str
    entity_type: type
    columns: tuple[str, ...]
    # constraint name -> field name, for DuplicateRecordError
    unique_constraints: dict[str, str] = {}

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    def find_one(self, criteria: Mapping[str, Any]) -> Any | None:
        query = sql.SQL("SELECT {columns} FROM {table} WHERE {where} LIMIT 1").format(
            columns=self._column_list(),
            table=sql.Identifier(self.table),
            where=self._where(criteria),
        )
        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(query, list(criteria.values()))
            row = cursor.fetchone()
        return None if row is None else self.entity_type(**row)

    def exists(self, criteria: Mapping[str, Any]) -> bool:
        query = sql.SQL("SELECT EXISTS (SELECT 1 FROM {table} WHERE {where})").format(
            table=sql.Identifier(self.table),
            where=self._where(criteria),
        )
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, list(criteria.values()))
            row = cursor.fetchone()
        return bool(row[0])

    def create(self, attributes: Mapping[str, Any]) -> Any:
        names = self._check_fields(attributes)
        query = sql.SQL("INSERT INTO {table} ({names}) VALUES ({values}) RETURNING {columns}").format(
            table=sql.Identifier(self.table),
            names=sql.SQL(", ").join(map(sql.Identifier, names)),
            values=sql.SQL(", ").join(sql.Placeholder() * len(names)),
            columns=self._column_list(),
        )
        row = self._write(query, list(attributes.values()))
        return self.entity_type(**row)

    def update(self, entity_id: UUID, attributes: Mapping[str, Any]) -> Any:
        names = self._check_fields(attributes)
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s RETURNING {columns}").format(
            table=sql.Identifier(self.table),
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(name)) for name in names
            ),
            columns=self._column_list(),
        )
        row = self._write(query, [*attributes.values(), entity_id])
        if row is None:
            raise RecordNotFound(self.entity_name, entity_id)
        return self.entity_type(**row)

    def delete(self, entity_id: UUID) -> None:
        query = sql.SQL("DELETE FROM {table} WHERE id = %s").format(
            table=sql.Identifier(self.table)
        )
        with self._pool.connection() as conn:
            conn.execute(query, (entity_id,))
            conn.commit()

    def _write(self, query: sql.Composed, params: list[Any]) -> dict[str, Any] | None:
        """Execute a RETURNING statement, translating unique violations."""
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
                conn.commit()
        except UniqueViolation as e:
            field = self.unique_constraints.get(e.diag.constraint_name or "", "value")
            raise DuplicateRecordError(self.entity_name, field) from e
        return row

    def _check_fields(self, values: Mapping[str, Any]) -> list[str]:
        unknown = set(values) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown {self.entity_name} field(s): {sorted(unknown)}")
        return list(values)

    def _where(self, criteria: Mapping[str, Any]) -> sql.Composable:
        names = self._check_fields(criteria)
        if not names:
            return sql.SQL("TRUE")
        return sql.SQL(" AND ").join(
            sql.SQL("{} = %s").format(sql.Identifier(name)) for name in names
        )

    def _column_list(self) -> sql.Composable:
        return sql.SQL(", ").join(map(sql.Identifier, self.columns))


class PostgresUserStore(PostgresStore):
    """Implements UserStore protocol via psycopg3."""

    table = "users"
    entity_type = User
    columns = (
        "id",
        "email",
        "display_name",
        "password",
        "salt",
        "sign_in_count",
        "last_login",
        "organisations",
        "teams",
    )
    unique_constraints = {
        "users_email_key": "email",
        "users_display_name_key": "display_name",
    }


class PostgresOrganisationStore(PostgresStore):
    """Implements OrganisationStore protocol via psycopg3."""

    table = "organisations"
    entity_type = Organisation
    columns = ("id", "name", "owners")
    unique_constraints = {"organisations_name_key": "name"}


class PostgresTeamStore(PostgresStore):
    """Implements TeamStore protocol via psycopg3."""

    table = "teams"
    entity_type = Team
    columns = ("id", "organisation", "name", "members")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)
                conn.commit()

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
