"""Runs a search client over several terms and groups the matches by file."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from backends.events import TERM_COMPLETED, TERM_STARTED, SearchObserver, notify
from backends.models import FileGroup, MatchRecord
from backends.search import AbstractSearchClient

logger = logging.getLogger(__name__)


class SearchAggregator:
    """Searches terms one at a time and merges their matches per file."""

    def __init__(
        self,
        search_client: AbstractSearchClient,
        max_terms: int,
        observer: Optional[SearchObserver] = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            search_client: Client used to run each term
            max_terms: Terms beyond this count are ignored
            observer: Receives term start/completion events
        """
        self.search_client = search_client
        self.max_terms = max_terms
        self.observer = observer

    def aggregate(
        self,
        terms: Sequence[str],
        context_lines: int,
        scope_directory: Union[str, Path],
        result_cap: int,
    ) -> List[FileGroup]:
        """Search every retained term and group all matches by file.

        Args:
            terms: Search terms, in the order they should run
            context_lines: Lines of context on each side of a match
            scope_directory: Directory to search in
            result_cap: Maximum matches kept per term

        Returns:
            File groups in the order their files were first seen
        """
        retained = list(terms[: max(self.max_terms, 0)])
        if len(retained) < len(terms):
            logger.debug(f"Dropping {len(terms) - len(retained)} terms over the limit of {self.max_terms}")

        records: List[MatchRecord] = []
        for term in retained:
            notify(self.observer, TERM_STARTED, term)
            found = self.search_client.run_term(term, context_lines, scope_directory, result_cap)
            notify(self.observer, TERM_COMPLETED, term, count=len(found))
            records.extend(found)

        return group_by_file(records)


def group_by_file(records: Sequence[MatchRecord]) -> List[FileGroup]:
    """Group records by file, keeping first-seen file order."""
    groups: Dict[str, FileGroup] = {}
    for record in records:
        group = groups.get(record.file)
        if group is None:
            group = groups[record.file] = FileGroup(file=record.file)
        group.matches.append(record)
    return list(groups.values())
