from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from books_setup.models.setup import (
    SetupReport,
    TableOutcome,
    TableStatus,
    UserOutcome,
    UserStatus,
)
from books_setup.services.setup.definitions import (
    DEFAULT_TABLES,
    DEFAULT_USERS,
    SeedUser,
    TableDefinition,
)
from books_setup.services.supabase_service import SupabaseService, SupabaseServiceError


logger = logging.getLogger(__name__)


class DatabaseSetupService:
    """Provisioning helper for the bookkeeping tables and default accounts.

    Every step is idempotent: tables are only created when the probe says they
    are missing, and users are only inserted when their username is not found.
    Nothing existing is ever updated or dropped.

    Backend failures are turned into outcome values per table / per user, so a
    single failure never stops the remaining steps. Status lines for the
    operator are printed as each step finishes.
    """

    USERS_TABLE_NAME = "users"

    def __init__(
        self,
        *,
        backend: SupabaseService,
        tables: Iterable[TableDefinition] = DEFAULT_TABLES,
        users: Iterable[SeedUser] = DEFAULT_USERS,
        password_encoder: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._backend = backend
        self._tables = tuple(tables)
        self._users = tuple(users)
        self._password_encoder = password_encoder

    def run(self) -> SetupReport:
        """Public entry point: ensure tables, then seed users.

        An exception escaping either loop aborts the rest of the run; the
        report records it instead of raising.
        """

        print("Starting Supabase database setup\n")
        report = SetupReport()
        try:
            report.tables.extend(self.setup_tables())
            report.users.extend(self.seed_users())
        except Exception as exc:
            logger.exception("Database setup aborted")
            report.aborted = True
            report.error = str(exc) or exc.__class__.__name__
        return report

    def setup_tables(self) -> list[TableOutcome]:
        outcomes: list[TableOutcome] = []
        for index, table in enumerate(self._tables):
            if index == 0:
                print(f"Step 1: Creating {table.name} table...")
            elif index == 1:
                print("\nStep 2: Creating other tables...")
            outcomes.append(self.ensure_table(table))
        return outcomes

    def seed_users(self) -> list[UserOutcome]:
        print("\nStep 3: Creating default users...")
        if self._password_encoder is None:
            logger.warning("Seed passwords are stored verbatim in %s.password_hash", self.USERS_TABLE_NAME)

        outcomes = [self.ensure_user(user) for user in self._users]

        created = sum(1 for o in outcomes if o.status == UserStatus.CREATED)
        exists = sum(1 for o in outcomes if o.status == UserStatus.EXISTS)
        print(f"\n   Created: {created}, Already exists: {exists}")
        return outcomes

    def ensure_table(self, table: TableDefinition) -> TableOutcome:
        try:
            if self._backend.table_exists(table_name=table.name):
                print(f"   ✓ {table.name} table exists")
                return TableOutcome(table_name=table.name, status=TableStatus.EXISTS)
        except Exception as exc:
            message = self._error_message(exc)
            print(f"   ⚠ Error with {table.name}: {message}")
            return TableOutcome(table_name=table.name, status=TableStatus.FAILED, error=message)

        print(f"   Creating {table.name} table...")
        try:
            self._backend.execute_sql(query=table.create_if_not_exists_sql())
        except Exception as exc:
            message = self._error_message(exc)
            logger.info("Falling back to manual SQL for %s: %s", table.name, message)
            print(f"   ⚠ Could not create {table.name} via RPC")
            print("   Run this SQL manually in Supabase:")
            print(table.create_sql)
            return TableOutcome(
                table_name=table.name,
                status=TableStatus.MANUAL_REQUIRED,
                sql=table.create_sql,
                error=message,
            )

        print(f"   ✓ {table.name} table created")
        return TableOutcome(table_name=table.name, status=TableStatus.CREATED)

    def ensure_user(self, user: SeedUser) -> UserOutcome:
        try:
            existing = self._backend.find_one(
                table_name=self.USERS_TABLE_NAME,
                column="username",
                value=user.username,
            )
        except Exception as exc:
            message = self._error_message(exc)
            print(f"   ⚠ Error with {user.username}: {message}")
            return UserOutcome(username=user.username, role=user.role, status=UserStatus.FAILED, error=message)

        if existing:
            print(f"   ✓ {user.username} already exists")
            return UserOutcome(username=user.username, role=user.role, status=UserStatus.EXISTS)

        try:
            self._backend.insert_row(table_name=self.USERS_TABLE_NAME, row=self.user_row(user))
        except Exception as exc:
            message = self._error_message(exc)
            print(f"   ✗ Failed to create {user.username}: {message}")
            return UserOutcome(username=user.username, role=user.role, status=UserStatus.FAILED, error=message)

        print(f"   ✓ Created {user.username} ({user.role})")
        return UserOutcome(username=user.username, role=user.role, status=UserStatus.CREATED)

    def user_row(self, user: SeedUser) -> dict[str, Any]:
        password = user.password
        if self._password_encoder is not None:
            password = self._password_encoder(password)

        return {
            "username": user.username,
            "full_name": user.full_name,
            "role": user.role,
            "password_hash": password,
            "is_active": True,
        }

    @staticmethod
    def _error_message(exc: Exception) -> str:
        if isinstance(exc, SupabaseServiceError):
            return exc.detail
        return str(exc) or exc.__class__.__name__
