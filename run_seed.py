#!/usr/bin/env python3
"""
Provision seeded accounts.

Seeded accounts are created verified, with an ``sb_``-prefixed external id,
and never touch Supabase Auth. They log in with the magic code ``000000``
and receive locally signed tokens.

Usage:
    uv run python run_seed.py --email demo@example.com --first-name Demo --last-name User
    uv run python run_seed.py --count 20                   # demo users at example.com
    uv run python run_seed.py --count 5 --role organizer
"""

import argparse
import asyncio
from uuid import uuid4

from rich.console import Console
from rich.table import Table

from modules.users.exceptions import UserAlreadyExistsError
from modules.users.interfaces import IUserRepository
from modules.users.models import NewUser, User, UserRole, new_seeded_external_id

console = Console()


def build_seeded_user(
    email: str,
    first_name: str,
    last_name: str,
    role: UserRole = UserRole.USER,
) -> NewUser:
    """Column values for a verified, provider-bypassing account."""
    return NewUser(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        verified=True,
        external_user_id=new_seeded_external_id(),
    )


def demo_users(count: int, role: UserRole) -> list[NewUser]:
    """Generate ``count`` seeded users with unique example.com addresses."""
    users = []
    for i in range(1, count + 1):
        suffix = uuid4().hex[:8]
        users.append(
            build_seeded_user(
                email=f"seed.{role.value}.{i}+{suffix}@example.com",
                first_name="Seed",
                last_name=f"{role.value.title()} {i}",
                role=role,
            )
        )
    return users


async def seed_users(
    repository: IUserRepository, users: list[NewUser]
) -> tuple[list[User], list[str]]:
    """
    Insert seeded users one by one.

    Returns:
        (created users, emails skipped because they already exist)
    """
    created: list[User] = []
    skipped: list[str] = []
    for user in users:
        try:
            created.append(await repository.insert(user))
        except UserAlreadyExistsError:
            skipped.append(user.email)
    return created, skipped


async def _run(args: argparse.Namespace) -> None:
    from modules.users.repository import UserRepository
    from shared.database import get_supabase_client

    role = UserRole(args.role)
    if args.email:
        users = [
            build_seeded_user(email, args.first_name, args.last_name, role)
            for email in args.email
        ]
    else:
        users = demo_users(args.count, role)

    repository = UserRepository(await get_supabase_client())
    created, skipped = await seed_users(repository, users)

    table = Table(title="Seeded Accounts")
    table.add_column("Email", style="cyan")
    table.add_column("Role")
    table.add_column("External ID")
    for user in created:
        table.add_row(user.email, user.role.value, user.external_user_id or "")
    console.print(table)

    for email in skipped:
        console.print(f"[yellow]Skipped:[/yellow] {email} already exists")


def main():
    parser = argparse.ArgumentParser(description="Provision seeded accounts")
    parser.add_argument(
        "--email", action="append", help="Email to seed (repeatable)"
    )
    parser.add_argument("--first-name", default="Seed", help="First name for --email users")
    parser.add_argument("--last-name", default="User", help="Last name for --email users")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.USER.value,
        help="Role for every seeded account",
    )
    parser.add_argument(
        "--count", type=int, default=10, help="Number of demo users when no --email is given"
    )
    args = parser.parse_args()

    console.print("[bold]Tessera Account Seeding[/bold]")
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
