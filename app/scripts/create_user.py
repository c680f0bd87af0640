"""
Create a user without going through the HTTP API. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user "Ada Lovelace" ada@example.com your-secure-password
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import Conflict
from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.services.auth import AuthService, normalize_email


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Kanban user.")
    parser.add_argument("name", help=f"Display name ({NAME_MIN_LEN}-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument(
        "password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)"
    )
    args = parser.parse_args()

    name = args.name.strip()
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    email = normalize_email(args.email)
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1

    try:
        result = AuthService(SessionLocal).register(name, email, args.password)
    except Conflict:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{email}' with id {result.user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
