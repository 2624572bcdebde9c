from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class SupabaseConfig:
    """Runtime configuration for the hosted Supabase project.

    `url` is the project endpoint including scheme, e.g.
    "https://your-project.supabase.co". `service_key` must be the privileged
    service-role key; the anon key cannot create tables or bypass RLS.
    """

    url: str
    service_key: str
    _DEFAULT_EXEC_SQL_FUNCTION: ClassVar[str] = "exec_sql"
    exec_sql_function: str = _DEFAULT_EXEC_SQL_FUNCTION

    @staticmethod
    def from_env(
        *,
        url_env: str = "SUPABASE_URL",
        service_key_env: str = "SUPABASE_SERVICE_KEY",
        exec_sql_env: str = "SUPABASE_EXEC_SQL_FUNCTION",
    ) -> "SupabaseConfig":
        url = (os.getenv(url_env) or "").strip()
        if not url:
            raise ValueError(f"Missing required environment variable: {url_env}")

        service_key = (os.getenv(service_key_env) or "").strip()
        if not service_key:
            raise ValueError(f"Missing required environment variable: {service_key_env}")

        exec_sql_function = (os.getenv(exec_sql_env) or "").strip() or SupabaseConfig._DEFAULT_EXEC_SQL_FUNCTION

        return SupabaseConfig(
            url=url.rstrip("/"),
            service_key=service_key,
            exec_sql_function=exec_sql_function,
        )
