"""Tests for cross-term aggregation."""

from __future__ import annotations

from backends.aggregator import SearchAggregator, group_by_file
from backends.events import TERM_COMPLETED, TERM_FAILED, TERM_STARTED
from backends.models import MatchRecord, ProcessResult


def _outputs() -> dict:
    return {
        "alpha": ProcessResult(0, "a.org\n1:alpha\n\nb.org\n2:alpha\n"),
        "beta": ProcessResult(0, "b.org\n7:beta\n\nc.org\n3:beta\n"),
        "broken": ProcessResult(2, "", "error"),
        "gamma": ProcessResult(0, "a.org\n9:gamma\n"),
    }


class TestAggregate:
    """Tests for SearchAggregator.aggregate."""

    def test_groups_in_first_seen_file_order(self, make_client) -> None:
        client, _ = make_client(_outputs())
        aggregator = SearchAggregator(client, max_terms=5)

        groups = aggregator.aggregate(["alpha", "beta", "gamma"], 2, "/notes", 10)

        assert [g.file for g in groups] == ["a.org", "b.org", "c.org"]
        assert [(m.search_term, m.line_number) for m in groups[0].matches] == [
            ("alpha", 1),
            ("gamma", 9),
        ]
        assert [(m.search_term, m.line_number) for m in groups[1].matches] == [
            ("alpha", 2),
            ("beta", 7),
        ]

    def test_terms_run_sequentially_in_order(self, make_client) -> None:
        client, runner = make_client(_outputs())
        aggregator = SearchAggregator(client, max_terms=5)

        aggregator.aggregate(["gamma", "alpha"], 1, "/notes", 10)

        assert [call[0] for call in runner.calls] == ["gamma", "alpha"]

    def test_terms_over_limit_are_dropped(self, make_client) -> None:
        client, runner = make_client(_outputs())
        aggregator = SearchAggregator(client, max_terms=2)

        groups = aggregator.aggregate(["alpha", "beta", "gamma"], 2, "/notes", 10)

        assert [call[0] for call in runner.calls] == ["alpha", "beta"]
        assert all(m.search_term != "gamma" for g in groups for m in g.matches)

    def test_failed_term_does_not_stop_later_terms(self, make_client, events) -> None:
        client, _ = make_client(_outputs())
        aggregator = SearchAggregator(client, max_terms=5, observer=events.append)

        groups = aggregator.aggregate(["broken", "gamma"], 2, "/notes", 10)

        assert [g.file for g in groups] == ["a.org"]
        assert [e.kind for e in events] == [
            TERM_STARTED,
            TERM_FAILED,
            TERM_COMPLETED,
            TERM_STARTED,
            TERM_COMPLETED,
        ]
        assert events[2].detail == {"count": 0}
        assert events[4].detail == {"count": 1}

    def test_no_terms(self, make_client) -> None:
        client, runner = make_client(_outputs())

        assert SearchAggregator(client, max_terms=5).aggregate([], 2, "/notes", 10) == []
        assert runner.calls == []

    def test_zero_term_limit(self, make_client) -> None:
        client, runner = make_client(_outputs())

        assert SearchAggregator(client, max_terms=0).aggregate(["alpha"], 2, "/notes", 10) == []
        assert runner.calls == []

    def test_every_record_lands_in_exactly_one_group(self, make_client) -> None:
        client, _ = make_client(_outputs())
        groups = SearchAggregator(client, max_terms=5).aggregate(
            ["alpha", "beta", "gamma"], 2, "/notes", 10
        )

        grouped = [(g.file, m.file) for g in groups for m in g.matches]
        assert len(grouped) == 5
        assert all(group_file == record_file for group_file, record_file in grouped)


class TestGroupByFile:
    """Tests for group_by_file."""

    def test_unnamed_file_forms_its_own_group(self) -> None:
        records = [
            MatchRecord(file="", line_number=1, search_term="x"),
            MatchRecord(file="a.org", line_number=2, search_term="x"),
            MatchRecord(file="", line_number=3, search_term="y"),
        ]

        groups = group_by_file(records)

        assert [g.file for g in groups] == ["", "a.org"]
        assert [m.line_number for m in groups[0].matches] == [1, 3]
