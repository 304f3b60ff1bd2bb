#!/usr/bin/env python3
"""
Storefront startup script.

Usage:
    # Run with defaults (DATABASE_URL from .env or sqlite:///./storefront.db)
    python run_storefront.py

    # Run against a specific database on a custom port
    python run_storefront.py --database-url sqlite:///./data/shop.db --port 8001

    # Run with reload for development
    python run_storefront.py --reload
"""

import argparse
import os


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the storefront API")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to run on (default: 8000)",
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy URL, overrides DATABASE_URL",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    return parser


def prepare_environment(database_url: str = None) -> None:
    """Export DATABASE_URL and create the sqlite directory if needed."""
    if database_url:
        os.environ["DATABASE_URL"] = database_url
    database_url = os.environ.get("DATABASE_URL", "")

    if database_url.startswith("sqlite:///./"):
        db_dir = os.path.dirname(database_url.replace("sqlite:///./", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)


def main():
    args = build_parser().parse_args()
    prepare_environment(args.database_url)

    import uvicorn

    # The app reads DATABASE_URL at import time, so import it by path
    uvicorn.run(
        "storefront.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
