"""Command-line interface for depexclude.

This module provides the command-line interface for depexclude. It loads the rule files,
walks the root directory once, and applies a backup exclusion to every matched
directory as soon as it is found, printing one status line per match.

Key Features:
    - First-run creation of the rule files with built-in defaults
    - Single pruning walk with skip, sentinel and fixed path rules
    - Time Machine exclusions through tmutil, with disk usage of excluded directories
    - Dry-run and list-only modes
    - Tree report of matches and summary counts
    - Signal handling (SIGPIPE on Unix systems, SIGINT)
    - Permission error handling
    - Version information display

Signal Handling Notes:
    - SIGPIPE: Handled when output pipe is closed (e.g., when piping to `head`)
    - SIGINT: Stops the walk after the current directory; matches already found keep
      their exclusions, and the run exits with 130

Exit Codes:
    0: Successful completion (including unreadable directories and failed exclusions)
    1: Configuration error, unreadable root, or other runtime error
    2: Command-line syntax error
    126: Permission denied with -P fail
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Exclude dependency directories below the home directory
    $ depexclude

    # Preview without changing anything
    $ depexclude --dry-run --tree
"""

import sys
from collections import Counter
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, List, Optional

from depexclude.cli.argparser import create_parser, validate_args
from depexclude.cli.signal_handler import setup_signal_handling, signal_handler
from depexclude.defaults import default_config_dir
from depexclude.exceptions import EntryAccessError
from depexclude.exclusion.applier import ExclusionApplier, ExclusionOutcome, ExclusionStatus
from depexclude.exclusion.backends import TimeMachineBackend
from depexclude.exclusion.disk_usage import format_size
from depexclude.report import build_match_tree, render_match_tree
from depexclude.rule_store import load_config
from depexclude.rules.rule_set import RuleSet
from depexclude.walker.match_result import MatchResult
from depexclude.walker.permission_action import PermissionAction
from depexclude.walker.pruning_walker import PruningWalker


def format_outcome(outcome: ExclusionOutcome) -> str:
    """Format the status line for one exclusion outcome.

    Args:
        outcome: The outcome returned by the applier.

    Returns:
        A human-readable status line.
    """
    size = f" ({format_size(outcome.size_bytes)})" if outcome.size_bytes is not None else ""
    if outcome.status == ExclusionStatus.EXCLUDED:
        return f"Excluded {outcome.path}{size}"
    if outcome.status == ExclusionStatus.WOULD_EXCLUDE:
        return f"Would exclude {outcome.path}{size}"
    if outcome.status == ExclusionStatus.ALREADY_EXCLUDED:
        return f"Already excluded {outcome.path}"
    return f"Failed to exclude {outcome.path}: {outcome.reason}"


def format_summary(counts: Mapping[str, Optional[int]], backend_name: Optional[str] = None) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing various count metrics.
        backend_name: Name of the backup mechanism exclusions were applied to, if any.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    result = [
        f"Directories scanned: {counts['scanned']}",
        f"Unreadable directories: {counts['unreadable']}",
        f"Matches: {counts['matches']}",
    ]

    if counts["excluded"] is not None:
        if backend_name is not None:
            result.append(f"Backup: {backend_name}")
        result.extend(
            [
                f"Excluded: {counts['excluded']}",
                f"Already excluded: {counts['already_excluded']}",
                f"Failed: {counts['failed']}",
            ]
        )
    if counts["bytes"] is not None:
        result.append(f"Space excluded: {format_size(counts['bytes'])}")

    return "\n".join(result)


def report_entry_error(error: EntryAccessError) -> None:
    print(f"Warning: {error}", file=sys.stderr)


def main() -> None:
    """Main entry point for the depexclude command-line interface.

    Exit codes:
        0: Successful completion
        1: Configuration error, unreadable root, or other runtime error
        2: Command-line syntax error
        126: Permission denied with -P fail
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args()

    try:
        validate_args(args)

        root = args.root if args.root is not None else Path.home()
        config_dir = args.config_dir if args.config_dir is not None else default_config_dir()
        config = load_config(config_dir, root)

        applier: Optional[ExclusionApplier] = None
        if not args.list:
            if not TimeMachineBackend.is_available():
                raise RuntimeError("tmutil was not found; Time Machine exclusions require macOS (use -l to list only)")
            applier = ExclusionApplier(TimeMachineBackend(), dry_run=args.dry_run, measure_size=not args.no_size)

        # Map CLI permission actions to internal enum
        perm_action = {
            "ignore": PermissionAction.IGNORE,
            "warn": PermissionAction.IGNORE,
            "fail": PermissionAction.RAISE,
        }[args.permission_action]

        rule_set = RuleSet.from_config(config)
        if not rule_set.has_match_rules():
            print("Warning: No sentinel or fixed path rules are configured; nothing can match.", file=sys.stderr)

        walker = PruningWalker(
            root,
            rule_set,
            permission_action=perm_action,
            cancel_event=signal_handler.cancel_event,
            on_error=report_entry_error if args.permission_action == "warn" else None,
        )

        matches: List[MatchResult] = []
        sizes: Dict[str, int] = {}
        tally: Counter = Counter()

        try:
            for match in walker.iterate_matches():
                matches.append(match)
                if applier is None:
                    print(match.path, flush=True)
                    continue

                outcome = applier.apply(match.path)
                tally[outcome.status] += 1
                if outcome.failed:
                    print(f"Warning: {format_outcome(outcome)}", file=sys.stderr)
                    continue

                print(format_outcome(outcome), flush=True)
                if outcome.size_bytes is not None:
                    sizes[match.relative_path] = outcome.size_bytes

            if args.tree and matches:
                print()
                for line in render_match_tree(build_match_tree(walker.root_path, matches, sizes)):
                    print(line)

        except BrokenPipeError:
            pass

        if walker.cancelled:
            print("Warning: Interrupted; only part of the tree was scanned.", file=sys.stderr)

        if args.summary:
            applied = applier is not None
            counts = {
                "scanned": walker.visited_count,
                "unreadable": len(walker.errors),
                "matches": walker.match_count,
                "excluded": tally[ExclusionStatus.EXCLUDED] + tally[ExclusionStatus.WOULD_EXCLUDE] if applied else None,
                "already_excluded": tally[ExclusionStatus.ALREADY_EXCLUDED] if applied else None,
                "failed": tally[ExclusionStatus.FAILED] if applied else None,
                "bytes": sum(sizes.values()) if applied and not args.no_size else None,
            }
            backend_name = applier.backend.name if applier is not None else None
            print(format_summary(counts, backend_name), file=sys.stderr)

    except EntryAccessError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
