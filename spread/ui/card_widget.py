"""
CardWidget - One text-preview card.

Layout (top to bottom): optional header with the file name as a link,
then the plain-text preview. The card is as tall as its row.
"""
import html
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QFontDatabase, QKeyEvent
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget, QSizePolicy

from spread.core.config import SpreadSettings
from spread.core.models import ProcessedEntry
from spread.pipeline.layout import HEADER_HEIGHT, LINE_HEIGHT, PREVIEW_PADDING

_CARD_STYLE = """
    QFrame#spreadCard {
        background-color: palette(base);
        border: 1px solid palette(mid);
        border-radius: 6px;
    }
    QFrame#spreadCard:focus {
        border-color: palette(highlight);
    }
    QLabel#spreadCardHeader {
        border-bottom: 1px solid palette(midlight);
        font-weight: 600;
    }
"""


class CardWidget(QFrame):
    """
    Text-preview card bound to a ProcessedEntry.

    Signals:
        open_requested(path: str): header link clicked, or Enter/Space
            pressed while the card has focus

    Recycled by RowWidget through ``bind_entry`` / ``reset``.
    """

    open_requested = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._entry: Optional[ProcessedEntry] = None
        self._mono = False
        self.setObjectName("spreadCard")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setStyleSheet(_CARD_STYLE)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(1, 1, 1, 1)
        layout.setSpacing(0)

        self._header = QLabel()
        self._header.setObjectName("spreadCardHeader")
        self._header.setTextFormat(Qt.TextFormat.RichText)
        self._header.setTextInteractionFlags(Qt.TextInteractionFlag.LinksAccessibleByMouse)
        self._header.setFixedHeight(HEADER_HEIGHT)
        self._header.setContentsMargins(12, 0, 12, 0)
        self._header.linkActivated.connect(self._on_link_activated)
        layout.addWidget(self._header)

        self._preview = QLabel()
        self._preview.setObjectName("spreadCardPreview")
        self._preview.setTextFormat(Qt.TextFormat.PlainText)
        self._preview.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self._preview.setWordWrap(False)
        pad = PREVIEW_PADDING // 2
        self._preview.setContentsMargins(12, pad, 12, pad)
        layout.addWidget(self._preview, 1)

        self._default_font = QFont(self._preview.font())
        self._mono_font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)

    @property
    def entry(self) -> Optional[ProcessedEntry]:
        return self._entry

    @property
    def path(self) -> Optional[str]:
        return self._entry.file.path if self._entry else None

    @property
    def preview_text(self) -> str:
        return self._preview.text()

    @property
    def header_visible(self) -> bool:
        return not self._header.isHidden()

    @property
    def uses_mono_font(self) -> bool:
        return self._mono

    def bind_entry(self, entry: ProcessedEntry, settings: SpreadSettings):
        """Show ``entry`` using the given settings."""
        self._entry = entry
        self._mono = settings.mono_font

        if settings.show_file_name:
            file = entry.file
            self._header.setText(
                f'<a href="{html.escape(file.path, quote=True)}">{html.escape(file.basename)}</a>'
            )
            self._header.setToolTip(file.path)
            self._header.show()
        else:
            self._header.clear()
            self._header.hide()

        font = QFont(self._mono_font if settings.mono_font else self._default_font)
        font.setPixelSize(LINE_HEIGHT * 7 // 10)
        self._preview.setFont(font)
        self._preview.setText(entry.preview)

    def reset(self):
        self._entry = None
        self._header.clear()
        self._preview.clear()

    def activate(self):
        """Request navigation to the bound file."""
        if self._entry is not None:
            self.open_requested.emit(self._entry.file.path)

    def _on_link_activated(self, _href: str):
        self.activate()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self.activate()
            event.accept()
            return
        super().keyPressEvent(event)
