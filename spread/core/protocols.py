"""
Protocol definitions for the collaborators a SpreadView depends on.

The view never talks to a concrete host. Anything with the right methods
can be passed in: the standalone folder host in ``spread.host``, a test
double, or an adapter around another application's APIs.
"""
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from spread.core.models import Entry, FileRef


@runtime_checkable
class ContentReader(Protocol):
    """
    Reads file content.

    ``read`` may raise for any reason (missing file, permissions,
    undecodable bytes). Callers treat every failure the same way.
    """

    async def read(self, file: FileRef) -> str:
        """Return the full text content of ``file``."""
        ...


@runtime_checkable
class Navigator(Protocol):
    """Opens a file in the host. Fire-and-forget."""

    def open(self, path: str) -> None:
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """
    Key/value view settings persisted by the host.

    Returns None for absent keys. Values are not guaranteed to have the
    expected type.
    """

    def get(self, key: str) -> Optional[Any]:
        ...


@runtime_checkable
class DataSource(Protocol):
    """Supplies the ordered entries for one view. May be empty."""

    def entries(self) -> Sequence[Optional[Entry]]:
        ...


@runtime_checkable
class LogWriter(Protocol):
    """Best-effort text persistence used by the diagnostic log."""

    def write(self, path: str, text: str) -> None:
        ...
