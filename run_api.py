#!/usr/bin/env python
"""
Run the Tessera Accounts API server.

Defaults come from Settings (``HOST``, ``PORT`` = 3001, ``RELOAD``,
``LOG_LEVEL``); flags override them for a single run.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload            # Development mode
    uv run python run_api.py --port 3002 --log-level debug
"""

import argparse

import uvicorn
from rich.console import Console

from shared.config import Settings, get_settings

console = Console()

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """CLI whose defaults mirror the configured settings."""
    parser = argparse.ArgumentParser(description="Run Tessera Accounts API server")
    parser.add_argument(
        "--reload",
        action="store_true",
        default=settings.reload,
        help="Enable auto-reload",
    )
    parser.add_argument(
        "--host", default=settings.host, help="Host to bind to (default: %(default)s)"
    )
    parser.add_argument(
        "--port", type=int, default=settings.port, help="Port to bind to (default: %(default)s)"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=settings.log_level.lower(),
        help="Uvicorn log level (default: %(default)s)",
    )
    return parser


def main():
    settings = get_settings()
    args = build_parser(settings).parse_args()

    console.print(
        f"[bold]{settings.app_name}[/bold] v{settings.app_version} "
        f"on [cyan]http://{args.host}:{args.port}/api[/cyan]"
    )
    if not settings.jwt_secret:
        console.print("[yellow]Warning:[/yellow] JWT_SECRET is not set; seeded logins will fail.")

    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
