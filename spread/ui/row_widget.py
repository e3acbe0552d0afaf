"""
RowWidget - A horizontal run of cards for one packed Row.
"""
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget

from spread.core.config import SpreadSettings
from spread.core.models import Row
from spread.pipeline.layout import CARD_GAP
from spread.ui.card_widget import CardWidget


class RowWidget(QWidget):
    """
    Absolutely positions the cards of a Row, left to right.

    Card widgets are kept across rebinds; a row with fewer entries than
    the previous binding hides the surplus.

    Signals:
        open_requested(path: str): forwarded from any card
    """

    open_requested = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._row: Optional[Row] = None
        self._cards: list[CardWidget] = []

    @property
    def row(self) -> Optional[Row]:
        return self._row

    @property
    def cards(self) -> list[CardWidget]:
        """Cards currently showing an entry."""
        return [card for card in self._cards if card.entry is not None]

    def bind_row(self, row: Row, settings: SpreadSettings, card_width: int):
        """
        Show ``row`` with every card ``card_width`` wide and row-tall.
        """
        self._row = row
        while len(self._cards) < len(row.entries):
            card = CardWidget(self)
            card.open_requested.connect(self.open_requested.emit)
            self._cards.append(card)

        for i, card in enumerate(self._cards):
            if i < len(row.entries):
                card.bind_entry(row.entries[i], settings)
                card.setFixedSize(card_width, row.height)
                card.move(i * (card_width + CARD_GAP), 0)
                card.show()
            else:
                card.reset()
                card.hide()

        count = len(row.entries)
        self.setFixedSize(count * card_width + max(0, count - 1) * CARD_GAP, row.height)

    def reset(self):
        self._row = None
        for card in self._cards:
            card.reset()
            card.hide()
