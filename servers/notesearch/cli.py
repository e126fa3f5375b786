"""Command-line front end for note search."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backends.formatter import serialize
from servers.notesearch.config import SearchConfig
from servers.notesearch.service import NoteSearchService


def _prompt_for_terms() -> List[str]:
    raw = input("Search terms (comma separated): ")
    return [term.strip() for term in raw.split(",") if term.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notesearch",
        description="Search notes with ripgrep and print matching snippets as JSON.",
    )
    parser.add_argument("terms", nargs="*", help="search terms; prompted for when omitted")
    parser.add_argument(
        "-C", "--context", type=int, default=None, help="lines of context around each match"
    )
    parser.add_argument("-d", "--directory", default=None, help="directory to search")
    parser.add_argument("-v", "--verbose", action="store_true", help="log search progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a search and print the result.

    Returns:
        0 when the search produced a document, 1 when it failed
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    config = SearchConfig()
    if args.directory:
        config.notes_directory = Path(args.directory).expanduser()

    terms = args.terms or _prompt_for_terms()
    service = NoteSearchService(config=config)
    result = service.search(terms, args.context)
    if isinstance(result, str):
        print(result, file=sys.stderr)
        return 1

    print(serialize(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
