"""Storefront management CLI.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py create-admin --name Admin --email admin@example.com --password secret
"""

import argparse
import sys


def _storefront():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    print("Creating storefront database schema...")
    setup_db(_storefront())
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    print("Dropping storefront database schema...")
    drop_db(_storefront())
    print("Done.")


def create_admin(name, email, password, phone=None):
    from storefront.identity.manager import IdentityActivationManager

    domain = _storefront()
    with domain.domain_context():
        result = IdentityActivationManager().create_admin(name, email, password, phone)
    print(f"Admin {result.account.email} created ({result.account.id}).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create the first admin account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--phone")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password, args.phone)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
