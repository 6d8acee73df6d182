"""Print a bearer token for an existing user to stdout.

Usage:
    python -m booking.issue_token <user_id> [expires_minutes]
"""
import sys

from booking.auth.jwt_handler import create_access_token
from booking.database import SessionLocal
from booking.models.user import User


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if not args or not all(arg.isdigit() for arg in args[:2]):
        print("Usage: python -m booking.issue_token <user_id> [expires_minutes]", file=sys.stderr)
        sys.exit(2)

    user_id = int(args[0])
    expires_minutes = int(args[1]) if len(args) > 1 else None

    db = SessionLocal()
    try:
        exists = db.query(User.id).filter(User.id == user_id).scalar() is not None
    finally:
        db.close()
    if not exists:
        print(f"User {user_id} not found", file=sys.stderr)
        sys.exit(1)

    print(create_access_token(user_id, expires_minutes=expires_minutes))


if __name__ == "__main__":
    main()
