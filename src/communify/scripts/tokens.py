# src/communify/scripts/tokens.py
"""
Mint a development bearer token for a user email.

Production tokens come from the hosting platform; this helper signs tokens
with the locally configured ``SECRET_KEY`` so the API can be exercised by hand:

    python -m communify.scripts.tokens alice@example.com --name "Alice"
"""

from __future__ import annotations

import argparse

from communify.core.security import create_access_token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mint a Communify access token")
    parser.add_argument("email", help="User email to place in the token subject")
    parser.add_argument("--name", default=None, help="Optional full name claim")
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Override ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    token = create_access_token(
        args.email,
        full_name=args.name,
        expires_minutes=args.expires_minutes,
    )
    print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
