"""
Standalone desktop host: filesystem collaborators, folder data source
and the application entry point.
"""
from spread.host.filesystem import DesktopNavigator, FileLogWriter, FileSystemReader
from spread.host.folder_source import FolderDataSource

__all__ = [
    "DesktopNavigator",
    "FileLogWriter",
    "FileSystemReader",
    "FolderDataSource",
]
