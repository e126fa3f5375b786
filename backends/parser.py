"""Parser for ripgrep's grouped (``--heading``) output with context lines."""

import re
from typing import List, Optional

from backends.events import PARSE_ANOMALY, SearchObserver, notify
from backends.models import MatchRecord

GROUP_SEPARATOR = "--"

_MATCH_LINE = re.compile(r"^(\d+):(.*)$")
_CONTEXT_LINE = re.compile(r"^(\d+)-(.*)$")


class RipgrepOutputParser:
    """Decodes the raw output of one search into match records.

    Ripgrep run with ``--heading --line-number --context N`` prints a file
    header line, then ``N:text`` for matching lines and ``N-text`` for context
    lines. Discontiguous blocks are separated by ``--`` and files by a blank
    line. Each match is returned with every line seen since the last reset,
    so later matches in the same block carry the earlier lines as well.
    """

    def __init__(self, observer: Optional[SearchObserver] = None) -> None:
        self.observer = observer

    def parse(self, raw_output: str, search_term: str) -> List[MatchRecord]:
        """Parse ``raw_output`` produced for ``search_term``.

        Args:
            raw_output: Captured stdout of the search process
            search_term: Term the output was produced for

        Returns:
            Match records in output order
        """
        records: List[MatchRecord] = []
        current_file = ""
        context: List[str] = []

        for raw_line in raw_output.split("\n"):
            line = raw_line.rstrip("\r\n")

            if line == "" or line == GROUP_SEPARATOR:
                context = []
                continue

            match = _MATCH_LINE.match(line)
            if match:
                line_number = self._line_number(match.group(1), line, search_term)
                if line_number is None:
                    continue
                context.append(f"{match.group(1)}:{match.group(2)}")
                records.append(
                    MatchRecord(
                        file=current_file,
                        line_number=line_number,
                        search_term=search_term,
                        match_text=match.group(2),
                        context=list(context),
                    )
                )
                continue

            match = _CONTEXT_LINE.match(line)
            if match:
                if self._line_number(match.group(1), line, search_term) is None:
                    continue
                context.append(f"{match.group(1)}-{match.group(2)}")
                continue

            current_file = line.strip()
            context = []

        return records

    def _line_number(self, digits: str, line: str, search_term: str) -> Optional[int]:
        """Convert a numeric prefix, reporting prefixes that are not line numbers."""
        try:
            value = int(digits)
        except ValueError:
            value = 0
        if value < 1:
            notify(self.observer, PARSE_ANOMALY, search_term, line=line)
            return None
        return value


def parse_output(
    raw_output: str, search_term: str, observer: Optional[SearchObserver] = None
) -> List[MatchRecord]:
    """Parse ripgrep output for one term."""
    return RipgrepOutputParser(observer=observer).parse(raw_output, search_term)
