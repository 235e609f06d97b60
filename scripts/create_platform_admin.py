"""Utility script to create the first platform account in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from estategate.application.use_cases.users import create_platform_user
from estategate.domain.entities import PLATFORM_ROLES, Role
from estategate.domain.errors import ValidationError
from estategate.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for account creation."""

    parser = argparse.ArgumentParser(
        description="Create a super admin or developer account for Estate Gate.",
    )
    parser.add_argument(
        "--name",
        default="Platform Admin",
        help="Full name of the account holder (default: Platform Admin)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address used to sign in (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        choices=sorted(role.value for role in PLATFORM_ROLES),
        default=Role.SUPER_ADMIN.value,
        help="Platform role to grant (default: super_admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted for interactively when omitted.",
    )
    parser.add_argument(
        "--must-change-password",
        action="store_true",
        help="Require a password change on first sign in.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an account using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new account: ")
    if not password:
        raise SystemExit("No password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_platform_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=Role.parse(args.role),
            must_change_password=args.must_change_password,
        )
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the account: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the account in the database: {exc}") from exc
    else:
        print(
            "Account created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.value}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
