"""
Create a user (e.g. first admin). Run from project root:
  python -m mindfulme.scripts.create_user EMAIL PASSWORD "DISPLAY NAME" [role] [--org-code CODE]
Example:
  python -m mindfulme.scripts.create_user admin@example.com your-secure-password "Site Admin" admin
"""
import argparse
import sys

from dotenv import load_dotenv

from mindfulme.core.config import load_settings
from mindfulme.core.errors import MindfulMeError
from mindfulme.core.policy import ROLE_VALUES
from mindfulme.core.security import hash_password
from mindfulme.services.auth import (
    AuthService,
    validate_display_name,
    validate_email,
    validate_password,
)
from mindfulme.storage import create_storage


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a MindfulMe user from the command line.")
    parser.add_argument("email", help="Email address (login name)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("display_name", help="Display name (2-50 chars)")
    parser.add_argument("role", nargs="?", default="individual", choices=sorted(ROLE_VALUES))
    parser.add_argument("--org-code", default=None, help="Organization code to join")
    args = parser.parse_args()

    load_dotenv()
    settings = load_settings()
    storage = create_storage(settings)
    try:
        if args.org_code:
            AuthService(storage, settings).register(
                args.email, args.password, args.display_name, role=args.role, org_code=args.org_code
            )
        else:
            # Operator-created accounts skip the organization-code gate.
            validate_password(args.password)
            storage.create_user(
                email=validate_email(args.email),
                password_hash=hash_password(args.password, rounds=settings.BCRYPT_ROUNDS),
                display_name=validate_display_name(args.display_name),
                role=args.role,
            )
    except MindfulMeError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        storage.close()
    print(f"Created user '{args.email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
