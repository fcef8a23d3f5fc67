"""Create (or reset) the contact store tables for the configured database."""
from __future__ import annotations

import argparse

from portfolio_backend.core.settings import settings
from portfolio_backend.db.session import Database


def init_db(url: str | None = None, *, drop_tables: bool = False) -> Database:
    """Create all tables, optionally dropping existing ones first."""
    if url is None and not settings.database_url:
        settings.resolved_db_path.parent.mkdir(parents=True, exist_ok=True)
    database = Database(url or settings.effective_database_url)
    if drop_tables:
        database.drop_tables()
    database.create_tables()
    return database


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the contact store tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop existing tables before creating them.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL or the DB_PATH SQLite file)",
    )
    args = parser.parse_args()

    database = init_db(args.url, drop_tables=args.drop_tables)
    try:
        print(f"[init_db] tables ready at {database.url}")
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
