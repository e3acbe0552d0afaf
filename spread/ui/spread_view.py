"""
SpreadView - Windowed grid of text-preview cards.

Render pass (data change):
    entries -> fingerprint check -> concurrent preview extraction
    -> row packing -> virtualizer sizes -> materialize visible rows

Layout pass (width change): repack the current processed entries.
Scroll: re-window only.

Only the rows in the current window (visible plus overscan) own a
RowWidget. The content widget is as tall as all rows together so the
scrollbar reflects the full list; the rows layer is moved down by the
height of every row above the window.
"""
import asyncio
import time
from enum import Enum
from typing import Any, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QResizeEvent
from PySide6.QtWidgets import QFrame, QLabel, QScrollArea, QVBoxLayout, QWidget
from loguru import logger

from spread.core.config import SpreadSettings, build_view_options, read_settings
from spread.core.logging import DiagnosticLog
from spread.core.models import ProcessedEntry, Row
from spread.core.protocols import ContentReader, DataSource, Navigator, SettingsStore
from spread.pipeline.extractor import PreviewExtractor
from spread.pipeline.fingerprint import compute_fingerprint
from spread.pipeline.packer import card_width, pack_rows
from spread.ui.row_widget import RowWidget
from spread.ui.scheduler import (
    DATA_DEBOUNCE_MS, RESIZE_DEBOUNCE_MS, SCROLL_DEBOUNCE_MS, RenderScheduler, log_task_failure
)
from spread.ui.virtualizer import RowVirtualizer, VirtualWindow
from spread.ui.widget_pool import WidgetPool

OVERSCAN_ROWS = 3
DEFAULT_CONTAINER_WIDTH = 800
EMPTY_TEXT = "No files to display"


class ViewState(str, Enum):
    IDLE = "idle"            # no rows; placeholder or nothing shown
    MEASURING = "measuring"  # rows packed for the current width
    WINDOWED = "windowed"    # visible subset materialized


class SpreadView(QWidget):
    """
    Virtualized card grid bound to a host data source.

    Lifecycle:
        attach()            start: load settings, subscribe, first render
        on_data_updated()   debounced re-render
        on_settings_changed()  reload settings, forced re-render
        detach()            stop timers and subscriptions, drop state

    Args:
        data_source: Supplies the ordered entries
        reader: Reads file content for previews
        navigator: Opens a file when its card is activated
        settings_store: Host settings (camelCase keys)
        diagnostics: Per-view diagnostic log
    """

    VIEW_TYPE = "spread-view"

    # Signals
    state_changed = Signal(str)
    render_completed = Signal(int, int)  # processed entries, rows
    file_open_requested = Signal(str)

    def __init__(
        self,
        data_source: DataSource,
        reader: ContentReader,
        navigator: Optional[Navigator] = None,
        settings_store: Optional[SettingsStore] = None,
        diagnostics: Optional[DiagnosticLog] = None,
        parent: QWidget | None = None
    ):
        super().__init__(parent)

        # Collaborators
        self._data_source = data_source
        self._navigator = navigator
        self._settings_store = settings_store
        self._diag = diagnostics or DiagnosticLog(view_name=self.VIEW_TYPE)
        self._extractor = PreviewExtractor(reader)

        # Settings
        self._settings = SpreadSettings()

        # Render generation state
        self._processed: list[ProcessedEntry] = []
        self._rows: list[Row] = []
        self._last_fingerprint: Optional[str] = None
        self._generation = 0
        self._layout_width = 0
        self._card_width = 0

        # Windowing
        self._virtualizer = RowVirtualizer(overscan=OVERSCAN_ROWS)
        self._window = VirtualWindow()
        self._state = ViewState.IDLE

        # Lifecycle
        self._attached = False
        self._scroll_connected = False
        self._tasks: set[asyncio.Future] = set()

        # Debounced triggers
        self._render_scheduler = RenderScheduler(DATA_DEBOUNCE_MS, self.render, self, "data")
        self._resize_scheduler = RenderScheduler(RESIZE_DEBOUNCE_MS, self._relayout, self, "resize")
        self._scroll_scheduler = RenderScheduler(SCROLL_DEBOUNCE_MS, self._update_visible_rows, self, "scroll")

        self._setup_ui()

        self._pool: WidgetPool[RowWidget] = WidgetPool(
            factory=self._create_row_widget,
            soft_limit=64
        )

    def _setup_ui(self):
        """Build the UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Scroll area
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll_area.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)

        # Content widget: full virtual height
        self.container = QWidget()
        self.container.setObjectName("spreadVirtualContent")
        self.container.setFixedHeight(0)

        # Rows layer: holds only materialized rows, translated by the window offset
        self.rows_layer = QWidget(self.container)
        self.rows_layer.setObjectName("spreadVirtualRows")
        self.rows_layer.move(0, 0)

        self.scroll_area.setWidget(self.container)
        layout.addWidget(self.scroll_area)

        # Empty-state placeholder
        self.empty_label = QLabel(EMPTY_TEXT)
        self.empty_label.setObjectName("spreadEmpty")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.hide()
        layout.addWidget(self.empty_label)

    def _create_row_widget(self) -> RowWidget:
        """Factory for pooled row widgets."""
        widget = RowWidget(self.rows_layer)
        widget.open_requested.connect(self._open_path)
        widget.hide()
        return widget

    @staticmethod
    def get_view_options() -> list[dict[str, Any]]:
        """Option schema for the host's settings UI."""
        return [option.to_schema() for option in build_view_options()]

    # --- Properties ---

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def settings(self) -> SpreadSettings:
        return self._settings

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    @property
    def processed_entries(self) -> list[ProcessedEntry]:
        return list(self._processed)

    @property
    def virtual_window(self) -> VirtualWindow:
        return self._window

    @property
    def total_size(self) -> int:
        """Scrollable extent of all rows, materialized or not."""
        return self._virtualizer.total_size

    @property
    def materialized_rows(self) -> list[int]:
        return sorted(self._pool.active_keys)

    @property
    def is_attached(self) -> bool:
        return self._attached

    @property
    def diagnostics(self) -> DiagnosticLog:
        return self._diag

    # --- Lifecycle ---

    def attach(self):
        """Start the view: subscribe to scrolling and render immediately."""
        if self._attached:
            return
        self._attached = True
        self._diag.start()
        self._diag.log("attach")
        self._load_settings()

        self.scroll_area.verticalScrollBar().valueChanged.connect(self._on_scroll_changed)
        self._scroll_connected = True

        self._spawn(self.render())
        logger.info("SpreadView attached")

    def detach(self):
        """
        Stop the view. No timer, subscription or in-flight pass survives.
        """
        if not self._attached:
            return
        self._attached = False

        self._render_scheduler.cancel()
        self._resize_scheduler.cancel()
        self._scroll_scheduler.cancel()

        if self._scroll_connected:
            self.scroll_area.verticalScrollBar().valueChanged.disconnect(self._on_scroll_changed)
            self._scroll_connected = False

        # In-flight passes compare against this and drop their result
        self._generation += 1
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

        self._pool.clear()
        self._processed = []
        self._rows = []
        self._last_fingerprint = None
        self._virtualizer.set_sizes([])
        self._window = VirtualWindow()
        self.container.setFixedHeight(0)
        self._set_state(ViewState.IDLE)

        self._diag.log("detach")
        logger.info("SpreadView detached")

    def on_data_updated(self):
        """Host notification: the entry set may have changed."""
        if not self._attached:
            return
        self._diag.log("on_data_updated")
        self._load_settings()
        self._render_scheduler.schedule()

    def on_settings_changed(self):
        """Host notification: view settings changed; fingerprint is bypassed."""
        if not self._attached:
            return
        self._load_settings()
        self._last_fingerprint = None
        self._render_scheduler.schedule()

    def _load_settings(self):
        self._settings = read_settings(self._settings_store, self._settings)

    def _spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Future):
        self._tasks.discard(task)
        log_task_failure(task, "SpreadView render")

    # --- Render Pass ---

    async def render(self):
        """
        Full render pass. Skipped when the entry fingerprint is unchanged.
        """
        entries = list(self._data_source.entries() or [])
        fingerprint = compute_fingerprint(entries)
        if fingerprint == self._last_fingerprint:
            self._diag.log(f"render: skipped, fingerprint unchanged ({len(entries)} entries)")
            return
        self._last_fingerprint = fingerprint

        self._load_settings()
        settings = self._settings
        self._generation += 1
        generation = self._generation
        started = time.perf_counter()
        self._diag.log(f"render: starting {len(entries)} entries")

        if not entries:
            self._show_empty()
            return

        width = self._available_width()
        processed = await self._extractor.process_entries(entries, settings)
        if generation != self._generation:
            self._diag.log("render: superseded by a newer pass, result dropped")
            return
        self._diag.log(f"render: preprocessed {len(processed)} entries")

        if not processed:
            self._show_empty()
            return

        rows = pack_rows(processed, width)
        self._processed = processed
        self._rows = rows
        self._layout_width = width
        self._card_width = card_width(width)
        self._diag.log(f"render: grouped into {len(rows)} rows")

        self._set_state(ViewState.MEASURING)
        self._apply_rows()

        # Width moved while reads were pending
        if self._available_width() != width:
            self._resize_scheduler.schedule()

        elapsed = (time.perf_counter() - started) * 1000
        self._diag.log(f"render: COMPLETE in {elapsed:.0f}ms")
        logger.info(f"SpreadView: {len(processed)} entries -> {len(rows)} rows in {elapsed:.0f}ms")
        self.render_completed.emit(len(processed), len(rows))

    def _show_empty(self):
        self._pool.clear()
        self._processed = []
        self._rows = []
        self._virtualizer.set_sizes([])
        self._window = VirtualWindow()
        self.container.setFixedHeight(0)
        self.scroll_area.hide()
        self.empty_label.show()
        self._set_state(ViewState.IDLE)
        self.render_completed.emit(0, 0)

    def _apply_rows(self):
        """Feed row heights to the virtualizer and materialize the window."""
        self._virtualizer.set_sizes([row.height for row in self._rows])
        self.container.setFixedHeight(self._virtualizer.total_size)
        self.empty_label.hide()
        self.scroll_area.show()

        # Every row object is new: rebind all materialized rows
        self._pool.clear()
        self._window = VirtualWindow()
        self._update_visible_rows()
        self._set_state(ViewState.WINDOWED)

    # --- Layout Pass ---

    def _relayout(self):
        """Repack for a new width, or just re-window on a height change."""
        if not self._processed:
            return
        width = self._available_width()
        if width == self._layout_width:
            self._update_visible_rows()
            return

        self._set_state(ViewState.MEASURING)
        self._rows = pack_rows(self._processed, width)
        self._layout_width = width
        self._card_width = card_width(width)
        self._diag.log(f"resize: {width}px -> {len(self._rows)} rows")
        self._apply_rows()

    # --- Windowing ---

    def _update_visible_rows(self):
        """Materialize the rows of the current window, recycling the rest."""
        if not self._rows:
            return

        window = self._virtualizer.get_window(self._scroll_offset(), self._viewport_height())
        if (window.start, window.end) == (self._window.start, self._window.end) \
                and self._pool.active_count:
            return
        self._window = window

        self._pool.release_outside(set(window.indexes))
        self.rows_layer.move(0, window.offset)

        for item in window.items:
            row = self._rows[item.index]
            widget = self._pool.acquire(item.index)
            if widget.row is not row:
                widget.bind_row(row, self._settings, self._card_width)
            widget.move(0, item.start - window.offset)
            widget.show()

        last = window.items[-1]
        self.rows_layer.resize(max(self._layout_width, 1), last.end - window.offset)
        logger.trace(f"Visible rows: {window.start}-{window.end}, widgets: {self._pool.active_count}")

    def _scroll_offset(self) -> int:
        return self.scroll_area.verticalScrollBar().value()

    def _viewport_height(self) -> int:
        if not self.scroll_area.isVisible():
            return 0
        return self.scroll_area.viewport().height()

    def _available_width(self) -> int:
        if self.scroll_area.isVisible():
            width = self.scroll_area.viewport().width()
        elif self.isVisible():
            width = self.width()
        else:
            width = 0
        return width or DEFAULT_CONTAINER_WIDTH

    # --- State ---

    def _set_state(self, state: ViewState):
        if state == self._state:
            return
        logger.debug(f"SpreadView: {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state.value)

    # --- Events ---

    def _open_path(self, path: str):
        self._diag.log(f"open: {path}")
        self.file_open_requested.emit(path)
        if self._navigator is not None:
            self._navigator.open(path)

    def _on_scroll_changed(self, _value: int):
        self._scroll_scheduler.schedule()

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        if self._attached:
            self._resize_scheduler.schedule()
