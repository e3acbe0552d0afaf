"""
Filesystem-backed host collaborators for the standalone app.
"""
import asyncio
from pathlib import Path
from typing import Union

from loguru import logger
from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

from spread.core.models import FileRef


class FileSystemReader:
    """
    Reads files under a library root off the UI thread.

    Content is decoded as strict UTF-8, so binary files that slipped past
    the extension check fail the read instead of producing garbage.
    """

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    def resolve(self, file: FileRef) -> Path:
        return self._root / file.path

    async def read(self, file: FileRef) -> str:
        path = self.resolve(file)
        return await asyncio.to_thread(path.read_text, encoding="utf-8")


class DesktopNavigator:
    """Opens library files with the desktop's default handler."""

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    def open(self, path: str) -> None:
        target = (self._root / path).resolve()
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(str(target))):
            logger.warning(f"No handler could open {target}")


class FileLogWriter:
    """LogWriter that writes diagnostic files relative to a directory."""

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    def write(self, path: str, text: str) -> None:
        (self._root / path).write_text(text, encoding="utf-8")
