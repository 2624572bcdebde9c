"""Configuration package (Facade).

Re-exports the public config types so callers import from a single, stable
path instead of the module that happens to define them:

	from books_setup.services.config import SupabaseConfig
"""

from books_setup.services.config.supabase_config import SupabaseConfig

__all__ = ["SupabaseConfig"]
