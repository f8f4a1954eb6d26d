"""
Command-line entry point for permshell.

Usage:
    permshell [--root DIR] [--permissions-file NAME] [--no-color]
              [--log-level LEVEL] [--guard-destinations]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigLoader
from .logging_config import configure_from_config
from .shell import Shell


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="permshell",
        description="Interactive file explorer with simulated Unix permissions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Explore the current directory
  permshell

  # Explore another tree without colors
  permshell --root ~/projects --no-color

  # Keep permissions in a different sidecar file
  permshell --permissions-file .perms
        """,
    )

    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Directory to explore (default: current directory)",
    )
    parser.add_argument(
        "--permissions-file",
        type=str,
        default=None,
        help="Sidecar file name, relative to the root",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["TRACE", "DEBUG", "INFO", "WARN", "ERROR"],
        help="Session log level",
    )
    parser.add_argument(
        "--guard-destinations",
        action="store_true",
        help="Refuse to overwrite cp/mv destinations without write permission",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 on normal quit).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser() if args.root else Path.cwd()
    if not root.is_dir():
        print(f"Not a directory: {root}", file=sys.stderr)
        return 1

    config = ConfigLoader(root=str(root)).load(overrides={
        "permissions_file": args.permissions_file,
        "log_level": args.log_level,
        "color": False if args.no_color else None,
        "guard_destinations": True if args.guard_destinations else None,
    })
    configure_from_config(config)

    shell = Shell(root, config)
    try:
        return shell.run()
    except KeyboardInterrupt:
        print()
        return 0


if __name__ == "__main__":
    sys.exit(main())
