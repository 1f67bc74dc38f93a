# ruff: noqa: T201

"""Command line lookup of the works citing, or cited by, a DOI.

Results go to stdout, one entry per line, with ``[*]`` marking entries already
known via ``--known``. Exit codes: 0 on success (including an empty result), 1
when the lookup failed, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, assert_never

from dotenv import load_dotenv

from citerel.app import lookup_related_entries
from citerel.config import ConfigurationError, configure_logging
from citerel.domain.errors import NoIdentifierError
from citerel.domain.identity import normalize_doi
from citerel.domain.model import RelationDirection
from citerel.domain.view_state import ViewKind, view_state

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from citerel.domain.model import RelatedEntry

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="citerel",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("doi", help="DOI of the pivot entry")
    parser.add_argument(
        "--references",
        action="store_true",
        help="List works cited by the pivot instead of works citing it",
    )
    parser.add_argument(
        "--known",
        action="append",
        default=[],
        metavar="DOI",
        help="DOI already in your library; may be given several times",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Give up after this many seconds (defaults to CITEREL_FETCH_TIMEOUT)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def format_entry(related: RelatedEntry) -> str:
    entry = related.entry
    marker = "*" if related.is_local else " "
    parts = [entry.get("author"), entry.get("year"), entry.title]
    text = " | ".join(part for part in parts if part)
    doi = related.identifier
    return f"[{marker}] {text} (doi:{doi})" if doi else f"[{marker}] {text}"


def _run(args: argparse.Namespace) -> int:
    if normalize_doi(args.doi) is None:
        raise NoIdentifierError("The selected entry does not have a DOI linked to it")
    if args.timeout is not None and args.timeout <= 0:
        raise ValueError("Timeout must be positive")
    direction = RelationDirection.REFERENCES if args.references else RelationDirection.CITATIONS

    state = asyncio.run(
        lookup_related_entries(
            args.doi,
            direction=direction,
            known_dois=args.known,
            timeout_seconds=args.timeout,
        )
    )
    view = view_state(state)
    match view.kind:
        case ViewKind.ENTRIES:
            for related in view.entries:
                print(format_entry(related))
            return EXIT_OK
        case ViewKind.EMPTY:
            print("No publications found")
            return EXIT_OK
        case ViewKind.ERROR:
            print(f"Error while fetching {direction}: {view.error_message}", file=sys.stderr)
            return EXIT_FAILURE
        case ViewKind.IDLE | ViewKind.LOADING | ViewKind.NO_IDENTIFIER:
            print("Lookup did not complete", file=sys.stderr)
            return EXIT_FAILURE
        case _:
            assert_never(view.kind)


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""

    load_dotenv()
    signal(SIGINT, _sigint_handler)
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(verbose=args.verbose)

    try:
        code = _run(args)
    except (NoIdentifierError, ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    sys.exit(code)


def _sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
