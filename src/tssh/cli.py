"""Command-line entry point: pick a Tailscale host by category and ssh to it."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import load_config
from .errors import TsshError
from .peers import PeerLister, allowed_names
from .picker import RichPicker
from .selection import Selector
from .session import SessionLauncher

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tssh",
        description="Pick a Tailscale host by category and open an SSH session to it.",
    )
    parser.add_argument(
        "category",
        nargs="?",
        default=None,
        help="Category to open directly (exact name from the config file)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: per-user config directory)",
    )
    parser.add_argument(
        "-u",
        "--user",
        default=None,
        help="SSH user for this run (overrides 'user' from the config file)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run tssh and return the process exit status."""
    args = build_parser().parse_args(argv)

    console = Console()
    err_console = Console(stderr=True)
    setup_logging(args.verbose, err_console)

    try:
        config = load_config(args.config)
        hosts = PeerLister().list_hosts(allowed_names(config.categories))

        if not hosts:
            console.print(
                "No Tailscale servers found. Check 'tailscale status' and config.",
                markup=False,
            )
            return EXIT_OK

        selector = Selector(config, hosts, RichPicker(console), console=console)
        host = selector.run(args.category)
        if host is None:
            return EXIT_OK

        user = args.user if args.user is not None else config.default_user
        SessionLauncher(console=console).connect(host, user)
    except TsshError as e:
        logger.debug("Fatal error", exc_info=True)
        err_console.print(
            f"[bold red]Error:[/bold red] {escape(str(e))}",
            highlight=False,
            soft_wrap=True,
        )
        return EXIT_ERROR
    except KeyboardInterrupt:
        err_console.print("Interrupted.")
        return EXIT_INTERRUPTED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
