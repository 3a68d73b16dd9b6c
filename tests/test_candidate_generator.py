from __future__ import annotations

import pytest

from symbol_search.candidate_generator import CandidateGenerator, match
from symbol_search.index_builder import IndexNotBuiltError, IndexSnapshot, build_from_entries


def _labels(records: list) -> list:
    return [record.label for record in records]


def test_empty_query_matches_nothing(snapshot: IndexSnapshot) -> None:
    assert match(snapshot, "") == []
    assert match(snapshot, "   ") == []


def test_substring_match_is_case_insensitive(snapshot: IndexSnapshot) -> None:
    labels = _labels(match(snapshot, "EDGE"))

    assert labels == ["CannyEdgeDetector", "GrayscaleEdgeDetector"]


def test_results_come_back_in_snapshot_order(snapshot: IndexSnapshot) -> None:
    result = match(snapshot, "detector")
    positions = [snapshot.records.index(record) for record in result]

    assert positions == sorted(positions)


def test_short_query_uses_scan(snapshot: IndexSnapshot) -> None:
    labels = _labels(match(snapshot, "gr"))

    assert "Graph" in labels
    assert "GradientCornerDetector" in labels
    assert "getCorners()" not in labels


def test_query_whitespace_is_normalized(snapshot: IndexSnapshot) -> None:
    assert _labels(match(snapshot, "  all    CLASSES ")) == ["All Classes"]


def test_camel_case_initials_match() -> None:
    snapshot = build_from_entries(
        [
            {"label": "GradientCornerDetector"},
            {"label": "GrayscaleEdgeDetector"},
            {"label": "Graph"},
        ]
    )

    assert _labels(match(snapshot, "gcd")) == ["GradientCornerDetector"]
    assert _labels(match(snapshot, "ED")) == ["GrayscaleEdgeDetector"]
    assert _labels(match(snapshot, "g c d")) == ["GradientCornerDetector"]


def test_camel_case_requires_consecutive_initials() -> None:
    snapshot = build_from_entries([{"label": "GradientCornerDetector"}])

    assert match(snapshot, "gd") == []


def test_all_query_characters_must_match(snapshot: IndexSnapshot) -> None:
    assert match(snapshot, "graphx") == []
    assert match(snapshot, "zzz") == []


def test_signature_queries_match_members(snapshot: IndexSnapshot) -> None:
    assert _labels(match(snapshot, "corners()")) == ["getCorners()"]


def test_shared_labels_all_match(snapshot: IndexSnapshot) -> None:
    owners = [record.owner_name for record in match(snapshot, "parameters")]

    assert owners == ["CannyEdgeDetector", "GradientCornerDetector"]


def test_query_before_build_is_a_distinct_error() -> None:
    with pytest.raises(IndexNotBuiltError):
        match(None, "graph")


def test_timings_recorded(snapshot: IndexSnapshot) -> None:
    generator = CandidateGenerator(snapshot)
    generator.generate_candidates("gra")

    assert {"substring", "abbreviation", "total"} <= set(generator.get_last_timings())
