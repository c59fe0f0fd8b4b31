"""
tclshell Command-Line Interface.

Usage:
    tclshell                        # Interactive shell
    tclshell script.tcl             # Run a script (echoing commands), then the shell
    tclshell -q --batch script.tcl  # Run a script quietly and exit
    tclshell --editor readline      # Choose the line editor
    tclshell --config shell.toml    # Use a configuration file
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tclshell import __version__
from tclshell.config import EDITOR_KINDS, load_config
from tclshell.shell import Colors, TclShell
from tclshell.utils.errors import ConfigError

logger = logging.getLogger("tclshell")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tclshell",
        description="Interactive Tcl shell with context-sensitive tab completion",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "script",
        nargs="?",
        type=Path,
        default=None,
        help="Tcl script to execute before entering the interactive shell",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not echo script commands and their results",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help="Exit after running the script instead of starting the shell",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: ./tclshell.toml if present)",
    )
    parser.add_argument(
        "--editor",
        choices=EDITOR_KINDS,
        default=None,
        help="Line editor to use (default: from configuration, prompt_toolkit)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.batch and args.script is None:
        parser.error("--batch requires a script")

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("tclshell").setLevel(getattr(logging, args.log_level.upper()))

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 2

    if args.editor:
        config.editor = args.editor

    shell = TclShell(config=config)
    shell.provide_completion_command()

    if args.script is not None:
        logger.info("running script %s", args.script)
        ok = shell.run_file(args.script, verbose=not args.quiet)
        if args.batch or shell.exit_requested:
            if not ok and not shell.exit_requested:
                return 1
            return shell.return_code

    return shell.run()


if __name__ == "__main__":
    sys.exit(main())
