"""
Print a bearer token for a caller id, standing in for the identity provider
during local development.

Usage:
    python scripts/create_dev_token.py alice
    python scripts/create_dev_token.py alice --minutes 60
"""

import argparse
import sys
from datetime import timedelta

sys.path.insert(0, ".")

from opsroom.services.auth_service import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a development bearer token")
    parser.add_argument("caller_id", help="Caller id to put in the token subject")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to JWT_EXPIRATION_MINUTES)",
    )
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(args.caller_id, expires_delta=expires))


if __name__ == "__main__":
    main()
