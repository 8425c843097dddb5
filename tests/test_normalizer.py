"""
Unit tests for participant normalization.
"""
from __future__ import annotations

from lunch_governance.normalizer import normalize_participants


def test_trims_and_dedupes_keeping_first_occurrence() -> None:
    assert normalize_participants([" Alice ", "Bob", "Alice"]) == ["Alice", "Bob"]


def test_drops_empty_and_whitespace_entries() -> None:
    assert normalize_participants(["", "   ", "\tCarol\n", ""]) == ["Carol"]


def test_empty_input_gives_empty_output() -> None:
    assert normalize_participants([]) == []


def test_dedupe_is_case_sensitive() -> None:
    assert normalize_participants(["alice", "Alice", " alice"]) == ["alice", "Alice"]


def test_output_is_unique_subsequence_of_trimmed_input() -> None:
    raw = ["  Zed", "Amy ", "Zed", "", "Bo", "Amy", " Cy "]
    out = normalize_participants(raw)
    trimmed = [r.strip() for r in raw]
    assert len(out) == len(set(out))
    assert "" not in out
    positions = [trimmed.index(name) for name in out]
    assert positions == sorted(positions)
    assert out == ["Zed", "Amy", "Bo", "Cy"]
