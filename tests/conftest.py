import os

# Must be set before the first QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from spread.core.models import Entry, FileRef


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_ref(path: str) -> FileRef:
    name = path.rsplit("/", 1)[-1]
    stem, _, ext = name.rpartition(".")
    if not stem:
        stem, ext = name, ""
    return FileRef(path=path, basename=stem, extension=ext.lower())


def make_entries(paths) -> list[Entry]:
    return [Entry(file=make_ref(p)) for p in paths]


class FakeReader:
    """ContentReader serving in-memory content; missing paths raise."""

    def __init__(self, contents: dict[str, str] | None = None, default: str | None = None):
        self.contents = contents or {}
        self.default = default
        self.calls: list[str] = []

    async def read(self, file: FileRef) -> str:
        self.calls.append(file.path)
        if file.path in self.contents:
            return self.contents[file.path]
        if self.default is not None:
            return self.default
        raise FileNotFoundError(file.path)


class FakeSource:
    def __init__(self, entries=None):
        self.items = list(entries or [])

    def entries(self):
        return self.items


class DictStore:
    def __init__(self, values: dict | None = None):
        self.values = values or {}

    def get(self, key):
        return self.values.get(key)


@pytest.fixture
def reader():
    return FakeReader(default="line one\nline two")
