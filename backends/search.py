"""Search backends that shell out to a line-oriented search tool."""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Union

from backends.events import TERM_FAILED, SearchObserver, notify
from backends.models import MatchRecord, ProcessResult
from backends.parser import RipgrepOutputParser

logger = logging.getLogger(__name__)

# ripgrep exits with 1 when nothing matched
SUCCESS_EXIT_CODES = (0, 1)

ProcessRunner = Callable[[str, int, Union[str, Path]], ProcessResult]


class AbstractSearchClient(ABC):
    """Abstract base class for search clients."""

    observer: Optional[SearchObserver] = None

    @abstractmethod
    def search(self, term: str, context_lines: int, scope_directory: Union[str, Path]) -> ProcessResult:
        """Run the external search for one term.

        Args:
            term: Search term, passed through verbatim
            context_lines: Lines of context on each side of a match
            scope_directory: Directory to search in

        Returns:
            Exit status and captured output
        """
        pass

    @abstractmethod
    def format_results(self, output: str, term: str, num_results: int) -> List[MatchRecord]:
        """Decode raw output into at most ``num_results`` match records.

        Args:
            output: Captured stdout of the search
            term: Term the output belongs to
            num_results: Maximum number of records to keep

        Returns:
            List of match records
        """
        pass

    def run_term(
        self,
        term: str,
        context_lines: int,
        scope_directory: Union[str, Path],
        result_cap: int,
    ) -> List[MatchRecord]:
        """Search for one term and return its capped match records.

        Failures never propagate: a bad exit status or an exception while
        running the process yields an empty list.
        """
        try:
            result = self.search(term, context_lines, scope_directory)
        except Exception as exc:
            logger.warning(f"Search for {term!r} raised: {exc}")
            notify(self.observer, TERM_FAILED, term, error=str(exc))
            return []

        if result.returncode not in SUCCESS_EXIT_CODES:
            logger.warning(
                f"Search for {term!r} exited with status {result.returncode}: {result.stderr.strip()}"
            )
            notify(
                self.observer,
                TERM_FAILED,
                term,
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
            return []

        return self.format_results(result.stdout, term, result_cap)


class RipgrepSearchClient(AbstractSearchClient):
    """ripgrep search client implementation."""

    def __init__(
        self,
        executable: str = "rg",
        file_glob: str = "",
        timeout: Optional[float] = None,
        runner: Optional[ProcessRunner] = None,
        observer: Optional[SearchObserver] = None,
    ) -> None:
        """Initialize ripgrep client.

        Args:
            executable: ripgrep binary name or path
            file_glob: Optional glob restricting which files are searched
            timeout: Seconds before an invocation is abandoned, None for no limit
            runner: Replacement for the subprocess call, used in tests
            observer: Receives search events
        """
        self.executable = executable
        self.file_glob = file_glob
        self.timeout = timeout
        self.runner = runner
        self.observer = observer
        self._parser = RipgrepOutputParser(observer=observer)

    def build_command(self, term: str, context_lines: int, scope_directory: Union[str, Path]) -> List[str]:
        """Build the ripgrep argument list for one term."""
        command = [
            self.executable,
            "--heading",
            "--line-number",
            "--ignore-case",
            "--color",
            "never",
            "--context",
            str(context_lines),
        ]
        if self.file_glob:
            command.extend(["--glob", self.file_glob])
        command.extend(["--", term, str(scope_directory)])
        return command

    def search(self, term: str, context_lines: int, scope_directory: Union[str, Path]) -> ProcessResult:
        """Search using ripgrep."""
        if self.runner is not None:
            return self.runner(term, context_lines, scope_directory)

        completed = subprocess.run(
            self.build_command(term, context_lines, scope_directory),
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=self.timeout,
            check=False,
        )
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def format_results(self, output: str, term: str, num_results: int) -> List[MatchRecord]:
        """Format ripgrep results."""
        records = self._parser.parse(output, term)
        return records[: max(num_results, 0)]


class SearchClientFactory:
    """Factory for creating search clients."""

    @staticmethod
    def create_client(backend: str, **kwargs) -> AbstractSearchClient:
        """Create a search client for the given backend.

        Args:
            backend: Backend name (only 'ripgrep' is available)
            **kwargs: Backend-specific configuration

        Returns:
            Search client instance

        Raises:
            ValueError: If backend is not supported
        """
        backend = backend.lower()
        if backend == "ripgrep":
            return RipgrepSearchClient(
                executable=kwargs.get("executable", "rg"),
                file_glob=kwargs.get("file_glob", ""),
                timeout=kwargs.get("timeout"),
                runner=kwargs.get("runner"),
                observer=kwargs.get("observer"),
            )
        else:
            raise ValueError(f"Unsupported backend: {backend}")
