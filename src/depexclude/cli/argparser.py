"""Command-line argument parsing for depexclude.

This module defines the command-line interface for depexclude,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from depexclude import __version__
from depexclude.defaults import FIXED_PATHS_FILE, SENTINELS_FILE, SKIP_PATHS_FILE


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with depexclude's options.
    """
    description = f"""
    depexclude: Exclude reproducible dependency directories from backups.

    This tool walks your home directory once and excludes every dependency directory it
    can prove is tool-managed from Time Machine backups: a directory is matched when its
    name is listed in the sentinels file and the corresponding marker file sits right
    next to it (for example node_modules beside package.json). Those bytes can always be
    restored by reinstalling dependencies, so there is no need to back them up.

    Rules live in the configuration directory (default: $XDG_CONFIG_HOME/depexclude or
    ~/.config/depexclude), one entry per line:
    - {SKIP_PATHS_FILE}: paths below the root that are never scanned (created on first run)
    - {SENTINELS_FILE}: "<directory> <marker file> [# comment]" pairs (created on first run)
    - {FIXED_PATHS_FILE}: paths below the root that are always excluded (optional)
    """

    epilog = """
    Examples:
      # Exclude dependency directories below your home directory
      depexclude

      # Show what would be excluded without changing anything
      depexclude -n

      # Only list matched directories, without querying Time Machine
      depexclude -l

      # Scan a different root and render the matches as a tree
      depexclude -r ~/Projects -T

      # Use another configuration directory and print a summary to stderr
      depexclude -c ~/dotfiles/depexclude -s

      # Stop on the first unreadable directory
      depexclude -P fail

      # Display version information and exit
      depexclude -V
    """

    parser = argparse.ArgumentParser(
        prog="depexclude",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"depexclude {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        metavar="DIR",
        help="Directory to scan. Rule paths are relative to it (default: your home directory).",
    )
    parser.add_argument(
        "-c",
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Directory holding the rule files. Created with defaults if missing.",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Report what would be excluded without adding any exclusion.",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Only print matched directories. Does not query or change exclusions.",
    )
    parser.add_argument(
        "-T",
        "--tree",
        action="store_true",
        help="After the run, print the matched directories as a tree.",
    )
    parser.add_argument(
        "-S",
        "--no-size",
        action="store_true",
        help="Do not measure the disk usage of excluded directories.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print a summary report to stderr.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help="How to handle directories that cannot be read (default: warn).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.list and args.dry_run:
        raise ValueError("-l/--list and -n/--dry-run cannot be combined")
