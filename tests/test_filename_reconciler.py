"""Tests for filename normalization and spreadsheet-vs-storage reconciliation.

Each case pins one normalization rule or one partitioning guarantee so a
regression points straight at the rule that broke.
"""

from __future__ import annotations

import pytest

from backend.core.filename_reconciler import find_collisions, normalize, reconcile


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Report.PDF", "report.pdf"),
        ("Smith’s Study?.pdf", "smith_s study_.pdf"),
        ("paper.pdf.pdf", "paper.pdf"),
        ("notes", "notes.pdf"),
        ("  Padded Name.pdf \t", "padded name.pdf"),
        ("“Quoted” ‘Title’.pdf", "_quoted_ _title_.pdf"),
        ("what??.pdf", "what__.pdf"),
        ("back`tick's.pdf", "back_tick_s.pdf"),
        ("Paper.PDF.PDF", "paper.pdf"),
    ],
)
def test_normalize_applies_each_rule(raw: str, expected: str) -> None:
    """Trim, lowercase, per-character replacement, suffix collapse and append."""
    assert normalize(raw) == expected


def test_normalize_empty_and_blank_strings_become_bare_extension() -> None:
    """Empty input is defined to normalize to '.pdf'."""
    assert normalize("") == ".pdf"
    assert normalize("   ") == ".pdf"


def test_normalize_replacements_are_not_collapsed() -> None:
    """Consecutive unsafe characters each become their own underscore."""
    assert normalize("a’’?b.pdf") == "a___b.pdf"


@pytest.mark.parametrize(
    "raw",
    ["Report.PDF", "x.pdf.pdf.pdf", "", "  ", "notes", "Smith’s?", ".pdf.pdf", "a b.PdF .pdf"],
)
def test_normalize_is_idempotent(raw: str) -> None:
    """Normalizing a normalized key returns the same key."""
    once = normalize(raw)
    assert normalize(once) == once


def test_reconcile_matches_case_insensitively() -> None:
    """Names differing only by case are one key, reported with source A's spelling."""
    result = reconcile(["a.pdf"], ["A.PDF"])
    assert result.matched == ["a.pdf"]
    assert result.only_in_a == []
    assert result.only_in_b == []


def test_reconcile_partitions_matched_and_one_sided_names() -> None:
    """Shared names land in matched, the rest on their own side."""
    result = reconcile(["x.pdf", "y.pdf"], ["y.pdf", "z.pdf"])
    assert result.matched == ["y.pdf"]
    assert result.only_in_a == ["x.pdf"]
    assert result.only_in_b == ["z.pdf"]
    assert result.matched_count == 1
    assert not result.is_perfect_match


def test_reconcile_skips_empty_entries_everywhere() -> None:
    """Blank entries never reach counts or output collections."""
    result = reconcile(["", "a.pdf", "   "], ["a.pdf", "", "\t"])
    assert result.total_a == 1
    assert result.total_b == 1
    assert result.matched == ["a.pdf"]
    assert result.is_perfect_match


def test_reconcile_counts_duplicates_before_and_after_dedup() -> None:
    """total_* counts raw non-empty entries; unique_* counts normalized keys."""
    result = reconcile(["A.pdf", "a.pdf", "b"], ["b.pdf", "B.PDF.pdf"])
    assert result.total_a == 3
    assert result.unique_a == 2
    assert result.total_b == 2
    assert result.unique_b == 1
    assert result.only_in_a == ["a.pdf"]
    assert result.matched == ["b"]


def test_reconcile_keeps_last_original_on_collision() -> None:
    """When two originals share a key the later one is reported."""
    result = reconcile(["Smith's.pdf", "Smith’s.pdf"], ["smith_s.pdf"])
    assert result.matched == ["Smith’s.pdf"]
    assert result.unique_a == 1


def test_reconcile_matches_smart_quotes_against_sanitized_storage_names() -> None:
    """Smart quotes and question marks in the sheet match underscore names in storage."""
    result = reconcile(["Why_“AI”?.pdf"], ["why__ai__.pdf"])
    assert result.matched == ["Why_“AI”?.pdf"]


def test_reconcile_accepts_generators_and_empty_inputs() -> None:
    """Any iterable works; two empty sources give an empty, perfect result."""
    result = reconcile((name for name in []), iter([]))
    assert result.to_dict() == {
        "matched": [],
        "only_in_a": [],
        "only_in_b": [],
        "total_a": 0,
        "unique_a": 0,
        "total_b": 0,
        "unique_b": 0,
        "matched_count": 0,
    }
    assert result.is_perfect_match


@pytest.mark.parametrize(
    ("source_a", "source_b"),
    [
        (["a.pdf", "B.pdf", "c", "c.pdf.pdf", ""], ["A.PDF", "d.pdf", "d", "  "]),
        (["one?.pdf", "two’s.pdf"], ["one_.pdf", "two's.pdf", "three.pdf"]),
        ([], ["only.pdf"]),
    ],
)
def test_reconcile_unique_counts_equal_partition_sizes(source_a: list[str], source_b: list[str]) -> None:
    """unique_a and unique_b are fully accounted for by the three collections."""
    result = reconcile(source_a, source_b)
    assert result.unique_a == len(result.matched) + len(result.only_in_a)
    assert result.unique_b == len(result.matched) + len(result.only_in_b)


def test_find_collisions_reports_distinct_originals_only() -> None:
    """Exact repeats are not collisions; distinct spellings of one key are."""
    collisions = find_collisions(["Paper.pdf", "paper.pdf", "Paper.pdf", "other.pdf", "OTHER.pdf", "solo.pdf", ""])
    assert collisions == {
        "paper.pdf": ["Paper.pdf", "paper.pdf"],
        "other.pdf": ["other.pdf", "OTHER.pdf"],
    }


def test_find_collisions_empty_when_keys_are_unique() -> None:
    assert find_collisions(["a.pdf", "a.pdf", "b.pdf"]) == {}
