"""
Tests for the standalone host window and CLI wiring.
"""
import json

import pytest
from PySide6.QtWidgets import QCheckBox, QSpinBox

from spread.core.config import ConfigManager
from spread.host.app import build_parser, create_view
from spread.host.filesystem import FileLogWriter
from spread.host.folder_source import FolderDataSource
from spread.host.main_window import MainWindow
from spread.ui.registry import ViewRegistry, register_spread_view
from spread.ui.spread_view import SpreadView


@pytest.fixture
def config(tmp_path):
    return ConfigManager(str(tmp_path / "spread.json"))


@pytest.fixture
def window(qapp, tmp_path, config):
    library = tmp_path / "library"
    library.mkdir()
    (library / "a.md").write_text("# A", encoding="utf-8")
    source = FolderDataSource(library)
    registry = ViewRegistry()
    register_spread_view(registry)
    view = create_view(registry, source, config)
    window = MainWindow(view, source, config)
    yield window
    window.close()


class TestMainWindow:

    def test_toolbar_built_from_options(self, window):
        spin = window.findChild(QSpinBox)
        checks = {check.text(): check for check in window.findChildren(QCheckBox)}

        assert spin.minimum() == 1
        assert spin.maximum() == 20
        assert spin.value() == 5
        assert set(checks) == {"Show file name", "Strip frontmatter", "Monospace font"}
        assert checks["Show file name"].isChecked()
        assert not checks["Monospace font"].isChecked()

    def test_controls_persist_and_notify_view(self, window, config, monkeypatch):
        calls = []
        monkeypatch.setattr(window._view, "on_settings_changed", lambda: calls.append(1))

        window.findChild(QSpinBox).setValue(9)
        [mono] = [c for c in window.findChildren(QCheckBox) if c.text() == "Monospace font"]
        mono.setChecked(True)

        assert config.get("view", "previewLines") == 9
        assert config.get("view", "monoFont") is True
        assert calls == [1, 1]

    def test_non_view_changes_ignored(self, window, config, monkeypatch):
        calls = []
        monkeypatch.setattr(window._view, "on_settings_changed", lambda: calls.append(1))

        config.update("window", "width", 500)

        assert calls == []

    def test_status_bar_after_render(self, window):
        window._view.render_completed.emit(12, 4)
        assert window.statusBar().currentMessage() == "12 files, 4 rows"

    def test_malformed_view_values_fall_back(self, qapp, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"view": {"previewLines": "many", "monoFont": "false"}}), encoding="utf-8")
        config = ConfigManager(str(path))
        source = FolderDataSource(tmp_path)
        registry = ViewRegistry()
        register_spread_view(registry)

        window = MainWindow(create_view(registry, source, config), source, config)

        checks = {check.text(): check for check in window.findChildren(QCheckBox)}
        assert window.findChild(QSpinBox).value() == 5
        assert not checks["Monospace font"].isChecked()
        assert checks["Show file name"].isChecked()
        window.close()

    def test_close_disconnects_source(self, window):
        source = window._source
        assert source.updated.subscriber_count == 1

        window.show()
        window.close()
        source.refresh()

        assert source.updated.subscriber_count == 0
        assert not window._view._render_scheduler.pending


class TestApp:

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.folder is None
        assert args.config == "spread.json"
        assert not args.no_watch
        assert not args.flat
        assert not args.debug

    def test_parser_flags(self):
        args = build_parser().parse_args(["~/notes", "--no-watch", "--flat", "--debug"])
        assert args.folder == "~/notes"
        assert args.no_watch and args.flat and args.debug

    def test_create_view_diagnostic_writer(self, qapp, tmp_path, config):
        config.update("general", "diagnostic_log", True)
        source = FolderDataSource(tmp_path)
        registry = ViewRegistry()
        register_spread_view(registry)

        view = create_view(registry, source, config)

        assert isinstance(view, SpreadView)
        assert isinstance(view.diagnostics._writer, FileLogWriter)
        view.diagnostics.start()
        assert (tmp_path / ".spread-debug.log").exists()
