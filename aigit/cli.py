#!/usr/bin/env python3
"""
aigit CLI Interface

Stages every change, asks Groq for a Conventional-Commit message, commits
and pushes. Running it without arguments performs the whole workflow.

Usage:
    aigit [options]

Options:
    -v, --verbose        Enable debug logging and full tracebacks
    --no-color           Disable colored output
    --version            Show version information
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__, credentials, utils, workflow
from .config import ENDPOINT_ENV, MODEL_ENV, Config


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="aigit",
        description="aigit: git add/commit/push with an AI-written commit message",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="The Groq API key is read from GROQ_API_KEY or asked for once "
               "and saved to your shell profile.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information"
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=utils.err_console, show_path=verbose)],
        force=True,
    )


def configure_console(no_color: bool) -> None:
    """Swap the shared consoles for plain ones when color is disabled."""
    if not no_color:
        return
    plain = Console(force_terminal=False, color_system=None)
    plain_err = Console(stderr=True, force_terminal=False, color_system=None)
    for module in (utils, credentials, workflow):
        module.console = plain
    utils.err_console = plain_err
    workflow.err_console = plain_err


def main_cli(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_console(args.no_color)
    configure_logging(args.verbose)

    config = Config.from_env()
    if not config.is_valid():
        utils.err_console.print(
            f"[red]Invalid configuration:[/red] check {MODEL_ENV} and {ENDPOINT_ENV} "
            f"(endpoint {escape(config.endpoint)!r}, model {escape(config.model)!r})",
            highlight=False,
        )
        return 1

    return workflow.main(config, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main_cli())
