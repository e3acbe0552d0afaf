"""
Spread core: data models, settings, host protocols and logging helpers.
"""
from spread.core.models import FileRef, Entry, ProcessedEntry, Row
from spread.core.config import SpreadSettings, read_settings, build_view_options
from spread.core.events import Signal

__all__ = [
    "FileRef",
    "Entry",
    "ProcessedEntry",
    "Row",
    "SpreadSettings",
    "read_settings",
    "build_view_options",
    "Signal",
]
