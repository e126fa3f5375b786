"""Search events and the observers that receive them."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from opentelemetry import trace

logger = logging.getLogger(__name__)

TERM_STARTED = "term_started"
TERM_COMPLETED = "term_completed"
TERM_FAILED = "term_failed"
PARSE_ANOMALY = "parse_anomaly"


@dataclass
class SearchEvent:
    """Structured event emitted while searching."""

    kind: str
    term: str
    detail: Dict[str, Any] = field(default_factory=dict)


SearchObserver = Callable[[SearchEvent], None]


def notify(observer: Optional[SearchObserver], kind: str, term: str, **detail: Any) -> None:
    """Send an event to ``observer`` if one was given."""
    if observer is None:
        return
    observer(SearchEvent(kind=kind, term=term, detail=detail))


class LoggingObserver:
    """Writes search events to a logger."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def __call__(self, event: SearchEvent) -> None:
        if event.kind == TERM_FAILED:
            self.log.warning(f"Search failed for term {event.term!r}: {event.detail}")
        elif event.kind == PARSE_ANOMALY:
            self.log.debug(f"Skipped output line for term {event.term!r}: {event.detail}")
        else:
            self.log.info(f"{event.kind} {event.term!r} {event.detail}")


class TracingObserver:
    """Records search events on the current OpenTelemetry span."""

    def __call__(self, event: SearchEvent) -> None:
        span = trace.get_current_span()
        attributes = {"search.term": event.term}
        for key, value in event.detail.items():
            attributes[f"search.{key}"] = value if isinstance(value, (int, str)) else str(value)
        span.add_event(event.kind, attributes=attributes)


class CompositeObserver:
    """Fans an event out to several observers."""

    def __init__(self, *observers: SearchObserver) -> None:
        self.observers = list(observers)

    def __call__(self, event: SearchEvent) -> None:
        for observer in self.observers:
            observer(event)
