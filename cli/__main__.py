"""Entry point for running the CLI as a module."""

import argparse
import asyncio
import sys

from .bearing_cli import main
from .config import DEFAULT_API_PATH


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Interactive CLI for the bearing assistant API",
    )
    parser.add_argument("--host", type=str, default="localhost", help="Server host")
    parser.add_argument("--port", type=int, default=8080, help="Server port")
    parser.add_argument(
        "--api-path",
        type=str,
        default=DEFAULT_API_PATH,
        help=f"API path (default: {DEFAULT_API_PATH})",
    )
    parser.add_argument(
        "--timeout", type=float, default=120.0, help="Request timeout in seconds"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--show-meta",
        action="store_true",
        help="Print query type and data source under each answer",
    )
    return parser.parse_args()


def cli_entry() -> None:
    args = parse_args()
    try:
        asyncio.run(
            main(
                host=args.host,
                port=args.port,
                api_path=args.api_path,
                timeout=args.timeout,
                debug=args.debug,
                show_meta=args.show_meta,
            )
        )
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()
