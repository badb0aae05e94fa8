"""Storefront management CLI.

Usage:
    python -m storefront.manage setup-db                     # Create all tables
    python -m storefront.manage drop-db                      # Drop all tables
    python -m storefront.manage reset-admin EMAIL PASSWORD   # Create or promote an admin
    python -m storefront.manage expire-orders --hours 24     # Cancel stale pending orders
"""

import argparse
import sys


def _initialized_domain():
    from storefront.config import get_settings
    from storefront.domain import storefront
    from storefront.utils.db import configure_database

    configure_database(storefront, get_settings().database_url)
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def reset_admin(email, password, name="Admin"):
    from storefront.identity.administration import ResetAdminCredentials

    domain = _initialized_domain()
    with domain.domain_context():
        user_id = domain.process(
            ResetAdminCredentials(email=email, password=password, name=name),
            asynchronous=False,
        )
    print(f"Admin ready: {email.strip().lower()} ({user_id})")


def expire_orders(hours):
    from storefront.ordering.reconciliation import ExpireStalePendingOrders

    domain = _initialized_domain()
    with domain.domain_context():
        expired = domain.process(ExpireStalePendingOrders(older_than_hours=hours), asynchronous=False)
    print(f"Expired {expired} pending order(s) older than {hours}h.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("reset-admin", help="Create or promote an admin and set its password")
    admin_parser.add_argument("email")
    admin_parser.add_argument("password")
    admin_parser.add_argument("--name", default="Admin")

    expire_parser = subparsers.add_parser("expire-orders", help="Cancel pending orders older than the cutoff")
    expire_parser.add_argument("--hours", type=int, default=24)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "reset-admin":
        if len(args.password) < 8:
            parser.error("password must be at least 8 characters")
        reset_admin(args.email, args.password, args.name)
    elif args.command == "expire-orders":
        if args.hours < 1:
            parser.error("--hours must be at least 1")
        expire_orders(args.hours)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
