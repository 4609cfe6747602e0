#!/usr/bin/env python3
"""
Command-line interface for DailyBrief.

Subcommands:
    run        Run the daily job once and print the outcome
    serve      Start the HTTP trigger server
    authorize  Obtain a Google refresh token through the browser
"""

import argparse
import os
import sys

from .config import load_settings
from .dates import parse_date
from .errors import ConfigurationError, DailyBriefError
from .logging_setup import configure_logging
from .oauth import run_local_authorization
from .pipeline import run_with_google
from .server import serve


def _run(args) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    today = None
    if args.date:
        today = parse_date(args.date)
        if not today:
            print(f"Error: invalid --date {args.date!r} ({today.reason})", file=sys.stderr)
            return 2

    result = run_with_google(settings, today=today)
    print(result.message)
    if result.summary:
        print(f"\n{result.summary}")
    return 0


def _authorize(args) -> int:
    client_id = os.getenv("GOOGLE_CLIENT_ID")
    client_secret = os.getenv("GOOGLE_CLIENT_SECRET")
    if not client_id or not client_secret:
        raise ConfigurationError(
            "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set to authorize",
            missing=[name for name, value in (
                ("GOOGLE_CLIENT_ID", client_id),
                ("GOOGLE_CLIENT_SECRET", client_secret),
            ) if not value],
        )

    credentials = run_local_authorization(client_id, client_secret, port=args.port)
    print("Authorization complete. Set this in the service environment:\n")
    print(f"GOOGLE_REFRESH_TOKEN={credentials.refresh_token}")
    return 0


def _serve(args) -> int:
    serve(host=args.host, port=args.port)
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Summarize today's task assignments from Google Sheets and email them"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the daily job once")
    run_parser.add_argument(
        "--date",
        help="Target date (YYYY-MM-DD) instead of today plus DAY_OFFSET"
    )
    run_parser.set_defaults(handler=_run)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP trigger server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: PORT or 8080)")
    serve_parser.set_defaults(handler=_serve)

    auth_parser = subparsers.add_parser("authorize", help="Get a Google refresh token")
    auth_parser.add_argument("--port", type=int, default=0, help="Local redirect port (default: any free port)")
    auth_parser.set_defaults(handler=_authorize)

    args = parser.parse_args(argv)

    try:
        sys.exit(args.handler(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except DailyBriefError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
