#!/usr/bin/env python3
"""bulk-content-mcp MCP Server entry point.

Run:
  uvx python -m bulk_content_mcp                # start server (stdio)
  uvx python -m bulk_content_mcp --debug        # verbose logging to stderr
  uvx python -m bulk_content_mcp --test         # run lightweight self-tests then exit
"""

import argparse
import asyncio
import logging
import os
import sys

from bulk_content_mcp.config import parse_bool
from bulk_content_mcp.server import run_server, test_server


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the server. Logs go to stderr; stdout carries the protocol."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(prog="bulk_content_mcp", add_help=True)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run built-in server self tests (tool & resource listing) then exit.",
    )
    return parser.parse_args(argv)


def main() -> None:
    """CLI dispatcher for the MCP server."""
    args = parse_args(sys.argv[1:])
    setup_logging(args.debug or parse_bool(os.getenv("BULK_CONTENT_MCP_DEBUG")))

    try:
        if args.test:
            asyncio.run(test_server())
        else:
            asyncio.run(run_server())
    except KeyboardInterrupt:
        logging.info("Server shutdown requested")
    except Exception as e:  # pylint: disable=broad-exception-caught
        logging.error(f"Server failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
