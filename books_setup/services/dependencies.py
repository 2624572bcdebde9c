from __future__ import annotations

from typing import Callable, Optional

from books_setup.services.config import SupabaseConfig
from books_setup.services.setup.database_setup_service import DatabaseSetupService
from books_setup.services.supabase_service import SupabaseService


def get_supabase_service(config: Optional[SupabaseConfig] = None) -> SupabaseService:
    """Provider for a SupabaseService built from the environment (or a given config)."""

    return SupabaseService.from_config(config or SupabaseConfig.from_env())


def get_database_setup_service(
    *,
    backend: SupabaseService,
    password_encoder: Optional[Callable[[str], str]] = None,
) -> DatabaseSetupService:
    """Provider for the setup service with the default tables and seed users."""

    return DatabaseSetupService(backend=backend, password_encoder=password_encoder)
