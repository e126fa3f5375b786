"""Backend models for note search."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class MatchRecord:
    """Represents one located occurrence of a search term."""

    file: str
    line_number: int
    search_term: str
    match_text: str = ""
    context: List[str] = field(default_factory=list)


@dataclass
class FileGroup:
    """All matches for a single source file, in discovery order."""

    file: str
    matches: List[MatchRecord] = field(default_factory=list)


@dataclass
class ProcessResult:
    """Outcome of one external search invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
