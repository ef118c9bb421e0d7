"""Utility script to create a user and print an access token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from taskmaster.domain.entities import User
from taskmaster.infrastructure.database import SessionLocal, initialize_database
from taskmaster.infrastructure.repositories import UserRepository
from taskmaster.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a TaskMaster user and print a bearer token for it.",
    )
    parser.add_argument("--email", default="admin@example.com", help="User email address")
    parser.add_argument("--first-name", default="Admin", help="First name used in @mentions")
    parser.add_argument("--last-name", default="User", help="Last name used in @mentions")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        repository = UserRepository(session)
        user = repository.get_by_email(args.email)
        if user is None:
            user = repository.create(
                User(
                    id=None,
                    email=args.email,
                    first_name=args.first_name,
                    last_name=args.last_name,
                )
            )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User ready:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.full_name}\n"
        f"  Email: {user.email}\n"
        f"  Token: {create_access_token({'sub': user.id})}"
    )


if __name__ == "__main__":
    main()
