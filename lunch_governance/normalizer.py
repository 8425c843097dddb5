"""
Participant normalization - employee stage of the pipeline.
"""

from typing import Iterable


def normalize_participants(raw_participants: Iterable[str]) -> list[str]:
    """
    Clean a raw participant list.

    Trims whitespace, drops entries that end up empty, and removes
    duplicates (exact match after trimming) keeping the first occurrence.

    Example:
        [" Alice ", "Bob", "Alice", "  "] -> ["Alice", "Bob"]
    """
    seen = set()
    normalized = []
    for entry in raw_participants:
        name = entry.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        normalized.append(name)
    return normalized
