"""Operator command line.

Bootstraps the first admin or manager, since a login never changes a role::

    fieldops-admin set-role someone@example.com admin
"""

import argparse
import asyncio
import sys

from fieldops.application.services.user_directory import UserDirectory
from fieldops.config import get_settings
from fieldops.domain.entities import UserRole
from fieldops.domain.errors import AppError, UserNotFoundError
from fieldops.infrastructure.database import close_db, get_db_session
from fieldops.infrastructure.repositories import UserRepositoryImpl
from fieldops.infrastructure.telemetry import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fieldops-admin",
        description="Field operations API administration",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    set_role = commands.add_parser("set-role", help="Change the role of an existing user")
    set_role.add_argument("email", help="Email address of the user")
    set_role.add_argument(
        "role",
        choices=[role.value for role in UserRole],
        help="New role",
    )
    return parser.parse_args(argv)


async def set_role(email: str, role: UserRole) -> int:
    settings = get_settings()
    try:
        async with get_db_session() as session:
            directory = UserDirectory(
                UserRepositoryImpl(session),
                operation_timeout=settings.db_operation_timeout_seconds,
            )
            user = await directory.update_user_role(email, role)
    except UserNotFoundError:
        print(f"Error: no user with email {email}", file=sys.stderr)
        return 1
    except AppError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        await close_db()

    print(f"{user.email} is now {user.role.value}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        format_type="text",
        service_name=settings.service_name,
    )

    if args.command == "set-role":
        return asyncio.run(set_role(args.email.strip(), UserRole(args.role)))
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
