"""Shared fixtures for note search tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

import pytest

from backends.events import SearchEvent
from backends.models import ProcessResult
from backends.search import RipgrepSearchClient


class FakeRunner:
    """Stands in for the ripgrep subprocess, answering per term."""

    def __init__(self, outputs: Dict[str, ProcessResult]) -> None:
        self.outputs = outputs
        self.calls: List[Tuple[str, int, str]] = []

    def __call__(self, term: str, context_lines: int, scope_directory) -> ProcessResult:
        self.calls.append((term, context_lines, str(scope_directory)))
        result = self.outputs.get(term)
        if isinstance(result, Exception):
            raise result
        if result is None:
            return ProcessResult(returncode=1)
        return result


@pytest.fixture
def events() -> List[SearchEvent]:
    return []


@pytest.fixture
def make_client(events: List[SearchEvent]) -> Callable[[dict], Tuple[RipgrepSearchClient, FakeRunner]]:
    def _make(outputs: dict) -> Tuple[RipgrepSearchClient, FakeRunner]:
        runner = FakeRunner(outputs)
        return RipgrepSearchClient(runner=runner, observer=events.append), runner

    return _make
