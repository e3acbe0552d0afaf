"""
Row packing for the card grid.

Cards are bucketed greedily into rows of a fixed count derived from the
available width. A row is as tall as its tallest card, which turns the
grid into a 1-D list of rows with known heights that can be windowed.
"""
from typing import Sequence

from spread.core.models import ProcessedEntry, Row
from spread.pipeline.layout import CARD_GAP, CARD_MIN_WIDTH


def cards_per_row(available_width: float) -> int:
    """Number of minimum-width cards (plus gaps) that fit; at least 1."""
    return max(1, int((available_width + CARD_GAP) // (CARD_MIN_WIDTH + CARD_GAP)))


def card_width(available_width: float) -> int:
    """
    Width of each card when ``cards_per_row`` columns share the space.

    Below ``CARD_MIN_WIDTH`` the single card shrinks to the container.
    """
    per_row = cards_per_row(available_width)
    width = (available_width - CARD_GAP * (per_row - 1)) / per_row
    return max(1, int(width))


def pack_rows(entries: Sequence[ProcessedEntry], available_width: float) -> list[Row]:
    """
    Group entries into rows, preserving order.

    Args:
        entries: Processed entries in display order
        available_width: Container width in pixels

    Returns:
        Rows; the last row may hold fewer entries. Empty input gives [].
    """
    per_row = cards_per_row(available_width)
    rows: list[Row] = []
    for start in range(0, len(entries), per_row):
        chunk = tuple(entries[start:start + per_row])
        rows.append(Row(
            index=len(rows),
            entries=chunk,
            height=max(entry.height for entry in chunk),
        ))
    return rows
