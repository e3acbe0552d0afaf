"""
FolderDataSource - Entries for every file under a directory.

Scans lazily: a change notification only marks the listing dirty and
emits ``updated``; the next ``entries()`` call rescans. With watching
enabled, watchdog events arrive on the observer thread and are posted to
the asyncio loop before anything is touched.
"""
import asyncio
import os
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from spread.core.events import Signal
from spread.core.models import Entry, FileRef


class _FolderEventHandler(FileSystemEventHandler):
    def __init__(self, source: "FolderDataSource", loop: asyncio.AbstractEventLoop):
        self._source = source
        self._loop = loop

    def on_any_event(self, event: FileSystemEvent):
        if event.is_directory and event.event_type == "modified":
            return
        paths = [event.src_path, getattr(event, "dest_path", "")]
        if all(not p or self._source.is_ignored(os.fsdecode(p)) for p in paths):
            return
        self._loop.call_soon_threadsafe(self._source.refresh)


class FolderDataSource:
    """
    DataSource over a directory tree.

    Hidden files and directories (leading dot) are skipped, which also
    keeps the diagnostic log out of the listing. Entries are sorted by
    relative path.

    Example:
        source = FolderDataSource("~/notes", recursive=True)
        source.updated.connect(view.on_data_updated)
        source.start_watching()
    """

    def __init__(self, root: Union[str, Path], recursive: bool = True):
        self.root = Path(root).expanduser().resolve()
        self.recursive = recursive
        self.updated = Signal("FolderUpdated")
        self._entries: list[Entry] = []
        self._dirty = True
        self._observer: Optional[Observer] = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def entries(self) -> list[Entry]:
        if self._dirty:
            self._entries = self.scan()
            self._dirty = False
        return self._entries

    def scan(self) -> list[Entry]:
        """List files under the root now."""
        if not self.root.is_dir():
            logger.warning(f"Library root is not a directory: {self.root}")
            return []

        pattern = "**/*" if self.recursive else "*"
        refs = [
            FileRef.from_path(path, self.root)
            for path in self.root.glob(pattern)
            if path.is_file() and not self.is_ignored(path)
        ]
        refs.sort(key=lambda ref: ref.path)
        logger.debug(f"Scanned {len(refs)} files under {self.root}")
        return [Entry(file=ref) for ref in refs]

    def is_ignored(self, path: Union[str, Path]) -> bool:
        try:
            rel = Path(path).relative_to(self.root)
        except ValueError:
            return True
        return any(part.startswith(".") for part in rel.parts)

    def refresh(self):
        """Mark the listing stale and notify subscribers."""
        self._dirty = True
        self.updated.emit()

    # --- Watching ---

    def start_watching(self):
        """Watch the root for changes. Must be called with a running loop."""
        if self._observer is not None:
            return
        loop = asyncio.get_running_loop()
        observer = Observer()
        observer.schedule(_FolderEventHandler(self, loop), str(self.root), recursive=self.recursive)
        observer.start()
        self._observer = observer
        logger.info(f"Watching: {self.root}")

    def stop_watching(self):
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        logger.info(f"Stopped watching: {self.root}")
