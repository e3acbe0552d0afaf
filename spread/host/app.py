"""
Standalone Spread host.

    python -m spread [FOLDER] [--config PATH] [--no-watch] [--debug]

Shows every file under FOLDER as a preview card. Settings changed from
the toolbar are persisted in the JSON config.
"""
import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from PySide6.QtWidgets import QApplication
import qasync

from spread.core.config import ConfigManager
from spread.core.logging import DiagnosticLog, setup_logging
from spread.host.filesystem import DesktopNavigator, FileLogWriter, FileSystemReader
from spread.host.folder_source import FolderDataSource
from spread.host.main_window import MainWindow
from spread.ui.registry import ViewRegistry, register_spread_view
from spread.ui.spread_view import SpreadView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spread",
        description="Browse a folder as a scrollable grid of text-preview cards."
    )
    parser.add_argument("folder", nargs="?", default=None,
                        help="Folder to show. Defaults to library.root from the config.")
    parser.add_argument("--config", default="spread.json", help="Path to the JSON config file.")
    parser.add_argument("--no-watch", action="store_true", help="Do not watch the folder for changes.")
    parser.add_argument("--flat", action="store_true", help="Only list the folder's direct children.")
    parser.add_argument("--debug", action="store_true", help="Verbose console logging.")
    return parser


def create_view(
    registry: ViewRegistry,
    source: FolderDataSource,
    config: ConfigManager
) -> SpreadView:
    """Create the view through the registry with filesystem collaborators."""
    writer = FileLogWriter(source.root) if config.data.general.diagnostic_log else None
    return registry.create(
        SpreadView.VIEW_TYPE,
        data_source=source,
        reader=FileSystemReader(source.root),
        navigator=DesktopNavigator(source.root),
        settings_store=config.settings_store(),
        diagnostics=DiagnosticLog(writer, view_name=f"spread:{source.root.name}"),
    )


async def run(args: argparse.Namespace, config: ConfigManager) -> MainWindow:
    root = Path(args.folder) if args.folder else Path(config.data.library.root)
    recursive = config.data.library.recursive and not args.flat
    source = FolderDataSource(root, recursive=recursive)

    registry = ViewRegistry()
    register_spread_view(registry)
    view = create_view(registry, source, config)

    window = MainWindow(view, source, config)
    window.show()

    view.attach()
    if config.data.library.watch and not args.no_watch:
        source.start_watching()

    logger.info(f"Spread started on {source.root}")
    return window


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ConfigManager(args.config)
    setup_logging(debug_mode=args.debug or config.data.general.debug_mode,
                  log_dir=config.data.general.log_dir)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Spread")
    app.setStyle("Fusion")

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    with loop:
        # Keep a reference to the window for the lifetime of the loop
        window = loop.run_until_complete(run(args, config))
        app.lastWindowClosed.connect(loop.stop)
        loop.run_forever()
        logger.debug(f"Closed {window.windowTitle()}")
    return 0
