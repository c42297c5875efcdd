"""
Create a user (e.g. the first admin). Run from project root:
  python -m portal.scripts.create_user EMAIL PASSWORD [role] [--inactive] [--reset-password]
Example:
  python -m portal.scripts.create_user admin@example.com your-secure-password admin
Use --reset-password to overwrite the hash, role and active flag of an existing user.
"""
import argparse
import logging
import sys

from portal.core.database import SessionLocal
from portal.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from portal.schemas.auth import Role
from portal.services.errors import TransientStoreError
from portal.services.users import upsert_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a portal user (no registration UI).")
    parser.add_argument("email", help="Login email (stored exactly as given)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.MEMBER.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--inactive", action="store_true", help="Create the account disabled")
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Update the user if the email already exists",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    email = args.email.strip()
    if not email or "@" not in email or len(email) > 320:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        user, created = upsert_user(
            db,
            email=email,
            password_hash=hash_password(args.password),
            role=Role(args.role),
            is_active=not args.inactive,
            replace_existing=args.reset_password,
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    except TransientStoreError:
        logger.exception("Could not write user '%s'", email)
        return 1
    finally:
        db.close()

    verb = "Created" if created else "Updated"
    print(f"{verb} user '{user.email}' with role '{user.role}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
