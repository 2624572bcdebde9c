"""Manual fallback script.

Renders the same schema and seed accounts the setup service provisions as one
plain SQL script, for pasting into the Supabase SQL Editor when the
`exec_sql` RPC is not installed or the automated run fails.
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional

from books_setup.services.setup.definitions import (
    DEFAULT_TABLES,
    DEFAULT_USERS,
    SeedUser,
    TableDefinition,
)


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _insert_user_sql(user: SeedUser, password: str) -> str:
    values = ", ".join(
        [_quote(user.username), _quote(user.full_name), _quote(user.role), _quote(password), "true"]
    )
    return (
        "INSERT INTO users (username, full_name, role, password_hash, is_active)\n"
        f"VALUES ({values})\n"
        "ON CONFLICT (username) DO NOTHING;"
    )


def render_setup_sql(
    tables: Iterable[TableDefinition] = DEFAULT_TABLES,
    users: Iterable[SeedUser] = DEFAULT_USERS,
    *,
    password_encoder: Optional[Callable[[str], str]] = None,
) -> str:
    parts: list[str] = ["-- Bookkeeping schema", ""]
    for table in tables:
        parts.append(table.create_if_not_exists_sql())
        parts.append("")

    users = tuple(users)
    if users:
        parts.append("-- Default accounts")
        parts.append("")
        for user in users:
            password = password_encoder(user.password) if password_encoder else user.password
            parts.append(_insert_user_sql(user, password))
            parts.append("")

    return "\n".join(parts).rstrip() + "\n"
