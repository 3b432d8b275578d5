"""Utility script to register a user with roles and print a bearer token."""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from issue_notifier.domain.entities import APP_ROLES
from issue_notifier.infrastructure.database import SessionLocal, initialize_database
from issue_notifier.infrastructure.models import ProfileModel, UserModel, UserRoleModel
from issue_notifier.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Create (or reuse) a user and print an access token for the notify API.",
    )
    parser.add_argument("--email", required=True, help="Email address of the user")
    parser.add_argument("--name", default=None, help="Full name stored on the profile")
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        choices=APP_ROLES,
        help="Role to grant; may be repeated (default: user)",
    )
    parser.add_argument(
        "--no-email-notifications",
        action="store_true",
        help="Opt the user out of notification emails.",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    """Persist the user described on the command line and print a token."""

    args = parse_args()
    roles = args.role or ["user"]

    initialize_database()

    session = SessionLocal()
    try:
        user = session.query(UserModel).filter_by(email=args.email).first()
        if user is None:
            user = UserModel(email=args.email)
            session.add(user)
            session.flush()

        profile = session.query(ProfileModel).filter_by(user_id=user.id).first()
        if profile is None:
            profile = ProfileModel(user_id=user.id)
            session.add(profile)
        profile.full_name = args.name or profile.full_name
        profile.notification_email = not args.no_email_notifications

        existing_roles = {
            role for (role,) in session.query(UserRoleModel.role).filter_by(user_id=user.id)
        }
        for role in roles:
            if role not in existing_roles:
                session.add(UserRoleModel(user_id=user.id, role=role))
        session.commit()
        user_id = user.id
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user: {exc}") from exc
    finally:
        session.close()

    expires_delta = None
    if args.expires_minutes is not None:
        expires_delta = timedelta(minutes=args.expires_minutes)

    token = create_access_token({"sub": user_id, "email": args.email}, expires_delta)
    print(
        "User ready:\n"
        f"  ID: {user_id}\n"
        f"  Email: {args.email}\n"
        f"  Roles: {', '.join(sorted(set(roles) | existing_roles))}\n"
        f"  Token: {token}"
    )


if __name__ == "__main__":
    main()
