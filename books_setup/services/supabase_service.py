from __future__ import annotations

import logging
from typing import Any, ClassVar, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from books_setup.services.config import SupabaseConfig


logger = logging.getLogger(__name__)


class SupabaseServiceError(RuntimeError):
    def __init__(self, message: str, *, code: Optional[str] = None, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
        self.detail = detail or message


class SupabaseService:
    """Minimal Supabase data-plane service over the PostgREST client.

    Only the four calls the setup needs are exposed: an existence probe, the
    generic SQL RPC, an equality lookup and a single-row insert. The client is
    passed in explicitly so tests can hand in a mock.
    """

    # 42P01 comes from Postgres itself; newer PostgREST answers PGRST205 from
    # its schema cache before the query ever reaches the database.
    RELATION_MISSING_CODES: ClassVar[frozenset[str]] = frozenset({"42P01", "PGRST205"})

    def __init__(self, client: Client, *, exec_sql_function: str = "exec_sql") -> None:
        self._client = client
        self._exec_sql_function = exec_sql_function

    @staticmethod
    def from_config(config: SupabaseConfig) -> "SupabaseService":
        client = create_client(config.url, config.service_key)
        return SupabaseService(client, exec_sql_function=config.exec_sql_function)

    @staticmethod
    def _validate_table_name(table_name: str) -> None:
        if not table_name or not table_name.strip():
            raise ValueError("table_name must be provided")

    @staticmethod
    def _wrap(exc: Exception, message: str) -> SupabaseServiceError:
        if isinstance(exc, APIError):
            detail = exc.message or str(exc)
            return SupabaseServiceError(f"{message}: {detail}", code=exc.code, detail=detail)
        return SupabaseServiceError(f"{message}: {exc}", detail=str(exc))

    def table_exists(self, *, table_name: str) -> bool:
        """Return True if the table answers a one-row select, False if it is missing."""

        self._validate_table_name(table_name)

        try:
            self._client.table(table_name).select("id").limit(1).execute()
        except APIError as exc:
            if exc.code in self.RELATION_MISSING_CODES:
                return False
            logger.warning("Supabase probe failed (table=%s code=%s): %s", table_name, exc.code, exc.message)
            raise self._wrap(exc, f"Failed checking table exists: {table_name}") from exc
        except Exception as exc:
            logger.warning("Supabase probe failed (table=%s): %s", table_name, exc)
            raise self._wrap(exc, f"Failed checking table exists: {table_name}") from exc

        return True

    def execute_sql(self, *, query: str) -> None:
        """Run a raw statement through the backend's SQL RPC."""

        if not query or not query.strip():
            raise ValueError("query must be provided")

        try:
            self._client.rpc(self._exec_sql_function, {"query": query}).execute()
        except Exception as exc:
            logger.warning("Supabase RPC %s failed: %s", self._exec_sql_function, exc)
            raise self._wrap(exc, f"RPC {self._exec_sql_function} failed") from exc

    def find_one(self, *, table_name: str, column: str, value: Any) -> Optional[dict[str, Any]]:
        self._validate_table_name(table_name)

        try:
            response = self._client.table(table_name).select("id").eq(column, value).limit(1).execute()
        except Exception as exc:
            logger.warning("Supabase lookup failed (table=%s %s=%r): %s", table_name, column, value, exc)
            raise self._wrap(exc, f"Failed looking up {table_name}.{column}={value!r}") from exc

        rows = response.data or []
        return rows[0] if rows else None

    def insert_row(self, *, table_name: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a single row and return what the backend stored.

        Falls back to the input row when the backend returns no representation.
        """

        self._validate_table_name(table_name)

        try:
            response = self._client.table(table_name).insert(row).execute()
        except Exception as exc:
            logger.warning("Supabase insert failed (table=%s): %s", table_name, exc)
            raise self._wrap(exc, f"Failed inserting into {table_name}") from exc

        rows = response.data or []
        return rows[0] if rows else row
