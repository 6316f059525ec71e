"""Grocery store database management CLI.

Creates or drops the product, cart and order tables for the environment
selected by PROTEAN_ENV. The in-memory provider has no schema, so both
commands are no-ops unless a SQL provider is configured.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db
    PROTEAN_ENV=production python src/manage.py drop-db
    PROTEAN_ENV=production python src/manage.py reset-db
"""

import argparse
import sys


def _domain():
    from grocery.domain import grocery

    grocery.init()
    return grocery


def setup_database():
    from grocery.utils.db import setup_db

    grocery = _domain()
    print("Creating grocery database schema...")
    setup_db(grocery)
    print("Done.")


def drop_database():
    from grocery.utils.db import drop_db

    grocery = _domain()
    print("Dropping grocery database schema...")
    drop_db(grocery)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Grocery store database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("reset-db", help="Drop and recreate all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "reset-db":
        drop_database()
        setup_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
