#!/usr/bin/env python3
# =============================================================================
# scripts/manage_admins.py - Admin Account Management
# =============================================================================
# Out-of-band admin bootstrapping. The API never checks for admins at
# startup; run this instead.
#
# Usage:
#   # Report admin accounts (prints setup instructions if there are none)
#   python scripts/manage_admins.py status
#
#   # Grant admin to an existing user
#   python scripts/manage_admins.py promote you@example.com
#
#   # Mirror an identity-provider user into public.users
#   python scripts/manage_admins.py sync-user --id <uuid> --username gabe --email gabe@example.com
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from pydantic import ValidationError

from core.models.user import UserCreate
from core.services.user_service import UserService
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger("manage_admins")

NO_ADMIN_INSTRUCTIONS = """
No admin users found.

To create an admin user:
  1. Register a new account in the application
  2. Run: python scripts/manage_admins.py promote your-email@example.com
     (or in the Supabase SQL editor:
      UPDATE users SET is_admin = true WHERE email = 'your-email@example.com';)
  3. Refresh the page to see admin features
"""


def cmd_status(args: argparse.Namespace) -> int:
    admins = UserService.list_admins()

    if not admins:
        logger.warning(NO_ADMIN_INSTRUCTIONS)
        return 1

    logger.info(f"Admin users found: {len(admins)}")
    for admin in admins:
        logger.info(f"  {admin.get('username')} <{admin.get('email')}>")
    return 0


def cmd_promote(args: argparse.Namespace) -> int:
    user = UserService.promote(args.email)
    if user is None:
        logger.error(f"No user with email {args.email}. Register the account first.")
        return 1
    return 0


def cmd_sync_user(args: argparse.Namespace) -> int:
    try:
        user = UserCreate(
            id=args.id,
            username=args.username,
            email=args.email,
            is_admin=args.admin,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            logger.error(f"{field}: {err['msg']}")
        return 2

    UserService.sync_user(user)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage SteamFamily admin accounts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="List admin users")
    status.set_defaults(func=cmd_status)

    promote = subparsers.add_parser("promote", help="Grant admin to a user by email")
    promote.add_argument("email")
    promote.set_defaults(func=cmd_promote)

    sync = subparsers.add_parser("sync-user", help="Mirror an auth user into public.users")
    sync.add_argument("--id", required=True, help="auth.users id")
    sync.add_argument("--username", required=True)
    sync.add_argument("--email", required=True)
    sync.add_argument("--admin", action="store_true", help="Also set the admin flag")
    sync.set_defaults(func=cmd_sync_user)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        return args.func(args)
    except SupabaseClientError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
