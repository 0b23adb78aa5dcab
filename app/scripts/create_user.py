"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Ada Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.models import Role
from app.services.users import create_user, find_user_by_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Taskboard user from the command line.")
    parser.add_argument("name", help=f"Display name ({NAME_MIN_LEN}-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    name = args.name.strip()
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in args.email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if find_user_by_email(db, args.email) is not None:
            print(f"User '{args.email}' already exists.", file=sys.stderr)
            return 1
        user = create_user(db, name, args.email, args.password, Role(args.role))
        print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
