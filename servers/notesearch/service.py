"""Entry point that turns a tool call into a search document."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from backends.aggregator import SearchAggregator
from backends.events import LoggingObserver, SearchObserver
from backends.formatter import format_groups
from backends.search import AbstractSearchClient, SearchClientFactory
from core.request import SearchRequest
from servers.notesearch.config import SearchConfig

logger = logging.getLogger(__name__)


class NoteSearchService:
    """Runs note searches with configured defaults and a single error boundary."""

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        search_client: Optional[AbstractSearchClient] = None,
        observer: Optional[SearchObserver] = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Search configuration, read from the environment if omitted
            search_client: Client to use instead of the configured backend
            observer: Receives search events, defaults to logging them
        """
        self.config = config or SearchConfig()
        self.observer = observer or LoggingObserver(logger)
        if search_client is None:
            search_client = SearchClientFactory.create_client(
                backend=self.config.search_backend,
                observer=self.observer,
                **self.config.get_client_kwargs(),
            )
        self.search_client = search_client
        self.aggregator = SearchAggregator(
            search_client=self.search_client,
            max_terms=self.config.max_terms,
            observer=self.observer,
        )

    @property
    def scope_directory(self) -> Path:
        return self.config.notes_directory

    def search(
        self,
        terms: Union[str, List[str]],
        context_lines: Optional[int] = None,
    ) -> Union[Dict[str, str], str]:
        """Search the notes for every term.

        Args:
            terms: One term or a list of terms
            context_lines: Lines of context, the configured default if None

        Returns:
            Mapping of file path to snippets, or an error message string
        """
        try:
            request = SearchRequest(terms=terms, context_lines=context_lines)
            if request.context_lines is None:
                context = self.config.default_context_lines
            else:
                context = request.context_lines

            groups = self.aggregator.aggregate(
                request.terms,
                context_lines=context,
                scope_directory=self.scope_directory,
                result_cap=self.config.max_results_per_term,
            )
            result = format_groups(groups)
            logger.info(f"Found matches in {len(result)} files for {len(request.terms)} terms")
            return result
        except Exception as exc:
            logger.error(f"Unexpected error during note search: {exc}")
            return f"Error searching notes: {exc}"
