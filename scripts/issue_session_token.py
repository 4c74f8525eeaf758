"""Utility script to issue a session token for local development."""

from __future__ import annotations

import argparse
from datetime import timedelta

from compliance_feed.domain.entities import (
    ROLE_BUYER_ADMIN,
    ROLE_SYSTEM_ADMIN,
    ROLE_VENDOR_ADMIN,
)
from compliance_feed.infrastructure.security import create_session_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Issue a session token accepted by the notification feed API.",
    )
    parser.add_argument("--user-id", default=None, help="Stable user identifier (optional)")
    parser.add_argument(
        "--email",
        default="vendor@example.com",
        help="Email of the user (default: vendor@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_VENDOR_ADMIN,
        choices=[ROLE_VENDOR_ADMIN, ROLE_BUYER_ADMIN, ROLE_SYSTEM_ADMIN],
        help="Role carried by the session",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=12,
        help="Validity of the token in hours (default: 12)",
    )
    return parser.parse_args()


def main() -> None:
    """Print a signed token for the provided identity."""

    args = parse_args()
    if args.hours <= 0:
        raise SystemExit("The validity must be a positive number of hours.")

    token = create_session_token(
        user_id=args.user_id,
        email=args.email,
        role=args.role,
        expires_delta=timedelta(hours=args.hours),
    )
    print(token)


if __name__ == "__main__":
    main()
