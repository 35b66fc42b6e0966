#!/usr/bin/env python3
"""
Issue a bearer token for a principal, for local development against the API.

Example:
    python scripts/issue_token.py u1 --minutes 60
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from asset_server.core.config import get_settings
from asset_server.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("principal_id", help="opaque principal id to put in the token subject")
    parser.add_argument("--minutes", type=int, default=None, help="token lifetime in minutes")
    args = parser.parse_args()

    settings = get_settings()
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token(args.principal_id, settings, expires)

    print("=" * 50)
    print(f"principal: {args.principal_id}")
    print(f"Authorization: Bearer {token}")
    print("=" * 50)


if __name__ == "__main__":
    main()
