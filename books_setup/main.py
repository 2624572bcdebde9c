from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from dotenv import load_dotenv
from werkzeug.security import generate_password_hash

from books_setup.models.setup import SetupReport
from books_setup.services.config import SupabaseConfig
from books_setup.services.dependencies import get_database_setup_service, get_supabase_service
from books_setup.services.setup.definitions import DEFAULT_USERS, ROLE_LABELS, SeedUser
from books_setup.services.setup.sql_script import render_setup_sql


logger = logging.getLogger(__name__)


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="books-setup",
        description="Create the bookkeeping tables and default users in a Supabase project.",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--print-sql",
        action="store_true",
        help="print the manual setup.sql script and exit without contacting Supabase",
    )
    output.add_argument(
        "--write-sql",
        metavar="PATH",
        type=Path,
        help="write the manual setup.sql script to PATH and exit without contacting Supabase",
    )
    parser.add_argument(
        "--hash-passwords",
        action="store_true",
        help="store a Werkzeug password hash instead of the plain seed password",
    )
    return parser.parse_args(argv)


def _print_missing_credentials(exc: ValueError) -> None:
    print("Missing Supabase credentials", file=sys.stderr)
    print(f"   {exc}", file=sys.stderr)
    print("Create a .env file with:", file=sys.stderr)
    print("SUPABASE_URL=https://your-project.supabase.co", file=sys.stderr)
    print("SUPABASE_ANON_KEY=your-anon-key", file=sys.stderr)
    print("SUPABASE_SERVICE_KEY=your-service-key", file=sys.stderr)


def _print_manual_setup_guidance(error: str) -> None:
    print(f"\nSetup failed: {error}")
    print("\nManual Setup Required:")
    print("   1. Go to Supabase SQL Editor")
    print("   2. Run the SQL commands from setup.sql (books-setup --write-sql setup.sql)")
    print("   3. Insert default users manually")


def _print_credentials(users: Iterable[SeedUser]) -> None:
    print("\nLogin Credentials:")
    for user in users:
        label = ROLE_LABELS.get(user.role, user.role.title())
        print(f"   {label}: {user.username} / {user.password}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    _ensure_logging()
    load_dotenv()

    password_encoder: Optional[Callable[[str], str]] = generate_password_hash if args.hash_passwords else None

    if args.print_sql or args.write_sql:
        script = render_setup_sql(password_encoder=password_encoder)
        if args.write_sql:
            try:
                args.write_sql.write_text(script, encoding="utf-8")
            except OSError as exc:
                print(f"Could not write {args.write_sql}: {exc}", file=sys.stderr)
                return 1
            logger.info("Wrote manual setup script to %s", args.write_sql)
        else:
            print(script, end="")
        return 0

    try:
        config = SupabaseConfig.from_env()
    except ValueError as exc:
        _print_missing_credentials(exc)
        return 1

    try:
        backend = get_supabase_service(config)
        report: SetupReport = get_database_setup_service(
            backend=backend,
            password_encoder=password_encoder,
        ).run()
    except Exception as exc:
        logger.exception("Supabase client setup failed")
        _print_manual_setup_guidance(str(exc) or exc.__class__.__name__)
        return 0

    if report.aborted:
        _print_manual_setup_guidance(report.error or "unknown error")
        return 0

    print("\nSetup completed successfully!")
    if report.manual_sql:
        print(f"   {len(report.manual_sql)} table(s) still need the SQL printed above")
    _print_credentials(DEFAULT_USERS)
    return 0


def run_cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run_cli()
