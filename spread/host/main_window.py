"""
MainWindow - Standalone host window around one SpreadView.
"""
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import (
    QCheckBox, QFormLayout, QMainWindow, QSpinBox, QToolBar, QWidget
)
from loguru import logger

from spread.core.config import ConfigManager, SpreadSettings, read_settings
from spread.host.folder_source import FolderDataSource
from spread.ui.spread_view import SpreadView


class MainWindow(QMainWindow):
    """
    Hosts a SpreadView, a settings toolbar generated from the view's
    option schema, and a status bar with the entry count.
    """

    def __init__(self, view: SpreadView, source: FolderDataSource, config: ConfigManager):
        super().__init__()
        self._view = view
        self._source = source
        self._config = config

        self.setWindowTitle(f"Spread - {source.root}")
        self.resize(config.data.window.width, config.data.window.height)
        self.setCentralWidget(view)

        self._build_toolbar()
        self._build_actions()

        view.render_completed.connect(self._on_render_completed)
        config.on_changed.connect(self._on_config_changed)
        self._unsubscribe_source = source.updated.connect(view.on_data_updated)

    def _build_toolbar(self):
        """Build one control per option in the view's schema."""
        toolbar = QToolBar("Preview")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        # Raw config values may be malformed; controls start from validated settings
        current = read_settings(self._config.settings_store(), SpreadSettings()).to_store()
        for group in self._view.get_view_options():
            for option in group.get("items", [group]):
                toolbar.addWidget(self._option_widget(option, current.get(option["key"])))

    def _option_widget(self, option: dict, current) -> QWidget:
        key = option["key"]
        if current is None:
            current = option.get("default")

        if option["type"] == "slider":
            box = QSpinBox()
            box.setRange(option.get("min", 1), option.get("max", 20))
            box.setSingleStep(option.get("step", 1))
            box.setValue(int(current))
            box.valueChanged.connect(lambda value, k=key: self._config.update("view", k, value))
            wrapper = QWidget()
            form = QFormLayout(wrapper)
            form.setContentsMargins(4, 0, 8, 0)
            form.addRow(option["displayName"], box)
            return wrapper

        check = QCheckBox(option["displayName"])
        check.setChecked(bool(current))
        check.toggled.connect(lambda value, k=key: self._config.update("view", k, value))
        return check

    def _build_actions(self):
        refresh = QAction("Refresh", self)
        refresh.setShortcut(QKeySequence.StandardKey.Refresh)
        refresh.triggered.connect(self._source.refresh)
        self.addAction(refresh)

    def _on_config_changed(self, section: str, key: str, value):
        if section == "view":
            logger.debug(f"View setting {key} = {value}")
            self._view.on_settings_changed()

    def _on_render_completed(self, entries: int, rows: int):
        self.statusBar().showMessage(f"{entries} files, {rows} rows")

    def closeEvent(self, event: QCloseEvent):
        self._config.on_changed.disconnect(self._on_config_changed)
        self._unsubscribe_source()
        self._view.detach()
        self._source.stop_watching()
        super().closeEvent(event)
