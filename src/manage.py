"""SoleStore database management CLI.

Provides commands to create and drop the database schema and to load demo
data. Reuses the setup_db/drop_db utilities of the storefront domain.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo accounts, categories and products
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed_database():
    """Load demo data into an existing schema."""
    from storefront.domain import storefront
    from storefront.utils.seed import USERS, seed_demo_data

    print("Initializing storefront domain...")
    storefront.init()
    with storefront.domain_context():
        created = seed_demo_data()

    print(f"  users: {created['users']}, categories: {created['categories']}, products: {created['products']}")
    for user in USERS:
        print(f"  {user['role'].lower()} login: {user['email']} / {user['password']}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="SoleStore database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load demo accounts, categories and products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
