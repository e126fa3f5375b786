"""Backend implementations for note search."""

from .aggregator import SearchAggregator, group_by_file
from .events import (
    CompositeObserver,
    LoggingObserver,
    SearchEvent,
    SearchObserver,
    TracingObserver,
)
from .formatter import UNKNOWN_FILE, format_groups, serialize, serialize_groups
from .models import FileGroup, MatchRecord, ProcessResult
from .parser import RipgrepOutputParser, parse_output
from .search import (
    AbstractSearchClient,
    RipgrepSearchClient,
    SearchClientFactory,
)

__all__ = [
    "AbstractSearchClient",
    "SearchClientFactory",
    "RipgrepSearchClient",
    "RipgrepOutputParser",
    "parse_output",
    "SearchAggregator",
    "group_by_file",
    "format_groups",
    "serialize",
    "serialize_groups",
    "UNKNOWN_FILE",
    "SearchEvent",
    "SearchObserver",
    "LoggingObserver",
    "TracingObserver",
    "CompositeObserver",
    "FileGroup",
    "MatchRecord",
    "ProcessResult",
]
