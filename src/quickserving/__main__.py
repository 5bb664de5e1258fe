"""
=============================================================================
QUICKSERVING CLI ENTRY POINT
=============================================================================

=============================================================================
USAGE
=============================================================================

    # Serve the current directory on port 8080
    python -m quickserving

    # Serve ./public on port 3000
    quickserving --port 3000 --dir ./public

    # Custom index and not-found pages
    quickserving -d site -i home.html -n errors/404.html

    # Settings from a JSON file, overridden by flags
    quickserving --config quickserving.json --port 9000

=============================================================================
EXIT STATUS
=============================================================================

    0   Stopped with Ctrl+C
    1   Invalid configuration, or the port could not be bound

While it is serving, the process does not exit on its own.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_FORMATS, LOG_LEVELS, Config, ConfigError, load_file
from .core import BindError
from .log import setup_logging
from .server import StaticServer


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser. Flags default to None so unset ones don't override."""
    parser = argparse.ArgumentParser(
        prog="quickserving",
        description="Minimal single-threaded static file HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  quickserving                          # Serve . on port 8080
  quickserving -p 3000 -d ./public      # Custom port and directory
  quickserving --config site.json       # Settings from a JSON file

Environment variables QUICKSERVING_PORT, QUICKSERVING_DIRECTORY, ... are
applied after the config file and before command-line flags.
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--dir", "-d",
        dest="directory",
        help="Document root to serve (default: .)",
    )
    parser.add_argument(
        "--index", "-i",
        dest="index_file",
        help="File served for paths ending in / (default: index.html)",
    )
    parser.add_argument(
        "--not-found", "-n",
        dest="not_found_uri",
        help="Page sent with 404 responses, relative to the document root (default: 404.html)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--port", "-p",
        type=int,
        help="Port to listen on (default: 8080)",
    )
    parser.add_argument(
        "--host",
        help="Address to bind (default: 0.0.0.0)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOUR / LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--reject-traversal",
        action="store_const",
        const=True,
        help="Refuse request paths whose .. segments leave the document root",
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        help="Log line format (default: text)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--config", "-c",
        help="JSON configuration file",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"Quickserving {__version__}",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """
    Build the Config from, in increasing priority: defaults, config file,
    environment, command-line flags.
    """
    config = Config()
    if args.config:
        config = config.merge(**load_file(args.config))
    config = config.merge(**Config.env_overrides())
    config = config.merge(
        directory=args.directory,
        index_file=args.index_file,
        not_found_uri=args.not_found_uri,
        port=args.port,
        host=args.host,
        reject_traversal=args.reject_traversal,
        log_level=args.log_level,
        log_format=args.log_format,
    )
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status. Only returns on failure or Ctrl+C.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(config.level, config.log_format)
    server = StaticServer(config, logger=logger)

    try:
        server.run()
    except BindError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting")
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    sys.exit(main())
