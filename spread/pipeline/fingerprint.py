"""
Cheap change detection for entry sequences.

The fingerprint samples the count and three paths (first, middle, last)
and never touches file content, so it costs the same for ten entries or
fifty thousand.

Known limitation: it is an approximate identity. Two sequences with the
same length and the same first/middle/last paths compare equal even if
interior entries differ (for example two interior entries swapped), and
such a data update does not re-render.
"""
from typing import Any, Sequence


def _path_at(entries: Sequence[Any], index: int) -> str:
    entry = entries[index]
    file = getattr(entry, "file", None) if entry is not None else None
    if file is None:
        return ""
    return getattr(file, "path", "") or ""


def compute_fingerprint(entries: Sequence[Any]) -> str:
    """
    Fingerprint of an entry sequence.

    Returns:
        "" for an empty sequence, else "{count}|{first}|{middle}|{last}"
        where missing entries or files contribute an empty path.
    """
    count = len(entries)
    if not count:
        return ""
    first = _path_at(entries, 0)
    middle = _path_at(entries, count // 2)
    last = _path_at(entries, count - 1)
    return f"{count}|{first}|{middle}|{last}"
