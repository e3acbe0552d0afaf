"""
PreviewExtractor - Turns files into bounded plain-text previews.

Reads go through the host's ContentReader. A whole render pass is
processed concurrently: every read is issued at once and results are
collected with ``asyncio.gather``, which keeps input order regardless of
completion order.
"""
import asyncio
from typing import Optional, Sequence

from loguru import logger

from spread.core.config import SpreadSettings
from spread.core.models import Entry, FileRef, ProcessedEntry
from spread.core.protocols import ContentReader
from spread.pipeline.layout import card_height
from spread.pipeline.normalizer import strip_frontmatter, strip_markup

BINARY_EXTENSIONS = frozenset({
    "png", "jpg", "jpeg", "gif", "webp", "svg", "ico", "bmp",
    "mp3", "wav", "ogg", "flac", "m4a",
    "mp4", "webm", "mkv", "avi", "mov",
    "pdf", "zip", "tar", "gz", "7z", "rar",
    "exe", "dll", "so", "dylib",
    "woff", "woff2", "ttf", "otf", "eot",
})

MARKUP_EXTENSIONS = frozenset({"md", "markdown"})

UNREADABLE_PREVIEW = "[unable to read]"
EMPTY_PREVIEW = "[empty]"


def binary_preview(extension: str) -> str:
    return f"[{extension} file]"


def is_binary(file: FileRef) -> bool:
    return file.extension.lower() in BINARY_EXTENSIONS


def bound_lines(text: str, max_lines: int) -> str:
    """Keep the first ``max_lines`` non-empty, trimmed lines."""
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        if line:
            lines.append(line)
            if len(lines) >= max_lines:
                break
    return "\n".join(lines)


class PreviewExtractor:
    """
    Builds previews and processed entries for a SpreadView.

    Example:
        extractor = PreviewExtractor(reader)
        preview = await extractor.extract(file, settings)
        processed = await extractor.process_entries(entries, settings)
    """

    def __init__(self, reader: ContentReader):
        """
        Args:
            reader: Host content reader; may raise on any read
        """
        self._reader = reader

    async def extract(self, file: FileRef, settings: SpreadSettings) -> str:
        """
        Preview text for one file. Never raises.

        Binary types short-circuit before any read. Read failures and
        empty results resolve to sentinel strings.
        """
        ext = file.extension.lower()
        if ext in BINARY_EXTENSIONS:
            return binary_preview(ext)

        try:
            content = await self._reader.read(file)
        except Exception as e:
            logger.debug(f"Preview read failed for {file.path}: {e}")
            return UNREADABLE_PREVIEW

        if settings.strip_frontmatter:
            content = strip_frontmatter(content)
        if ext in MARKUP_EXTENSIONS:
            content = strip_markup(content)

        return bound_lines(content, settings.preview_lines) or EMPTY_PREVIEW

    async def process_entries(
        self,
        entries: Sequence[Optional[Entry]],
        settings: SpreadSettings
    ) -> list[ProcessedEntry]:
        """
        Extract previews for all present entries concurrently.

        Args:
            entries: Data source entries; None entries and entries
                without a file are skipped
            settings: Settings snapshot for this pass

        Returns:
            ProcessedEntry list in input order
        """
        files = [
            entry.file for entry in entries
            if entry is not None and getattr(entry, "file", None) is not None
        ]
        previews = await asyncio.gather(*(self.extract(f, settings) for f in files))

        processed = []
        for file, preview in zip(files, previews):
            line_count = preview.count("\n") + 1
            processed.append(ProcessedEntry(
                file=file,
                preview=preview,
                line_count=line_count,
                height=card_height(line_count, settings),
            ))

        skipped = len(entries) - len(files)
        if skipped:
            logger.debug(f"Skipped {skipped} entries without a file")
        return processed
