"""
Tests for FolderDataSource scanning and change notification.
"""
import asyncio

import pytest

from spread.host.folder_source import FolderDataSource


@pytest.fixture
def library(tmp_path):
    (tmp_path / "b.md").write_text("b", encoding="utf-8")
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.md").write_text("c", encoding="utf-8")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "secret.md").write_text("s", encoding="utf-8")
    (tmp_path / ".spread-debug.log").write_text("log", encoding="utf-8")
    return tmp_path


class TestScan:

    def test_recursive_sorted_and_hidden_skipped(self, library):
        source = FolderDataSource(library)

        paths = [entry.file.path for entry in source.entries()]

        assert paths == ["a.txt", "b.md", "sub/c.md"]

    def test_flat(self, library):
        source = FolderDataSource(library, recursive=False)
        assert [e.file.path for e in source.entries()] == ["a.txt", "b.md"]

    def test_refs(self, library):
        [ref] = [e.file for e in FolderDataSource(library).entries() if e.file.path == "sub/c.md"]
        assert ref.basename == "c"
        assert ref.extension == "md"

    def test_missing_root(self, tmp_path):
        assert FolderDataSource(tmp_path / "nope").entries() == []

    def test_is_ignored(self, library):
        source = FolderDataSource(library)
        assert source.is_ignored(library / ".hidden" / "secret.md")
        assert source.is_ignored("/somewhere/else.md")
        assert not source.is_ignored(library / "sub" / "c.md")


class TestRefresh:

    def test_entries_cached_until_refresh(self, library):
        source = FolderDataSource(library)
        first = source.entries()
        (library / "new.md").write_text("n", encoding="utf-8")

        assert source.entries() is first

        notified = []
        source.updated.connect(lambda: notified.append(True))
        source.refresh()

        assert notified == [True]
        assert "new.md" in [e.file.path for e in source.entries()]

    @pytest.mark.asyncio
    async def test_watching_posts_refresh(self, library):
        source = FolderDataSource(library)
        notified = asyncio.Event()
        source.updated.connect(notified.set)

        source.start_watching()
        try:
            assert source.is_watching
            (library / "watched.md").write_text("w", encoding="utf-8")
            await asyncio.wait_for(notified.wait(), timeout=5)
        finally:
            source.stop_watching()

        assert not source.is_watching
        assert "watched.md" in [e.file.path for e in source.entries()]
