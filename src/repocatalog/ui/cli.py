# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from repocatalog.app import combine_catalog, list_generations, open_source_groups, publish_index
from repocatalog.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Not an integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build and publish the repository file catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    combine = subparsers.add_parser("combine", help="Combine grouped source files")
    combine.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON Lines file with one group of source files per line",
    )
    combine.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip groups that cannot be combined instead of aborting",
    )
    combine.add_argument(
        "--real-ids",
        action="store_true",
        help="Issue missing ids through the identifier service instead of hashing",
    )
    combine.add_argument(
        "--workers",
        type=_positive_int,
        default=1,
        help="Number of worker threads combining groups (default: %(default)s)",
    )

    publish = subparsers.add_parser("publish", help="Publish the catalog to a new generation")
    publish.add_argument("--alias", type=str, help="Index alias (defaults to config)")
    publish.add_argument(
        "--keep",
        type=_positive_int,
        help="Number of generations to keep (defaults to config)",
    )
    publish.add_argument(
        "--archive",
        type=Path,
        nargs="?",
        const=True,
        help="Also write every document to a .tar.gz archive "
        "(without a path: <data dir>/archives/<alias>.tar.gz)",
    )

    generations = subparsers.add_parser("generations", help="List generations of an alias")
    generations.add_argument("--alias", type=str, help="Index alias (defaults to config)")

    return parser.parse_args(list(argv))


def _run(args: argparse.Namespace) -> None:
    if args.command == "combine":
        if not args.input.is_file():
            raise ConfigurationError(f"Input file not found: {args.input}", setting="--input")
        with open_source_groups(args.input, real_ids=args.real_ids) as groups:
            report = combine_catalog(
                groups,
                on_invalid="skip" if args.skip_invalid else "raise",
                workers=args.workers,
            )
        print(
            f"groups={report.groups} combined={report.combined} skipped={report.skipped} "
            f"disagreements={report.total_disagreements}"
        )
    elif args.command == "publish":
        result = publish_index(alias=args.alias, keep=args.keep, archive=args.archive)
        print(
            f"alias={result.alias} index={result.index} documents={result.total_documents} "
            f"pruned={len(result.pruned)} prune_failures={len(result.prune_failures)}"
        )
    elif args.command == "generations":
        for generation in list_generations(alias=args.alias):
            print(f"{generation.name}\t{generation.state}\t{generation.created_at.isoformat()}")
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except ConfigurationError as exc:
        log.exception("Configuration error (setting: %s)", exc.setting or "-")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C); an interrupted publish leaves the alias unchanged."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
