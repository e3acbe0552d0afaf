"""
Spread data models.

Pydantic models shared by the preview pipeline and the windowed view.
All of them are frozen: a render pass builds fresh objects and the next
pass discards them wholesale.
"""
from pathlib import Path, PurePath
from typing import Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


class FileRef(BaseModel):
    """
    Handle to a file supplied by the host.

    Attributes:
        path: Unique, stable identifier (vault-relative POSIX path)
        basename: Display name (file name without extension)
        extension: Lowercased type tag without the leading dot

    Example:
        ref = FileRef.from_path("/notes/daily/2024-01-01.md", root="/notes")
        ref.path       # "daily/2024-01-01.md"
        ref.basename   # "2024-01-01"
        ref.extension  # "md"
    """
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Unique identifier")
    basename: str = Field(..., description="Display name")
    extension: str = Field("", description="Lowercased type tag")

    @classmethod
    def from_path(
        cls,
        path: Union[str, PurePath],
        root: Union[str, PurePath, None] = None
    ) -> "FileRef":
        """
        Build a FileRef from a filesystem path.

        Args:
            path: File path
            root: Optional library root; ``path`` is stored relative to it

        Returns:
            FileRef for the path
        """
        path = Path(path)
        rel = path.relative_to(root) if root is not None else path
        return cls(
            path=rel.as_posix(),
            basename=path.stem,
            extension=path.suffix[1:].lower(),
        )


class Entry(BaseModel):
    """One item from a data source. ``file`` may be missing."""
    model_config = ConfigDict(frozen=True)

    file: Optional[FileRef] = None


class ProcessedEntry(BaseModel):
    """
    A file with its extracted preview and computed card height.

    Attributes:
        file: Source file reference
        preview: Bounded plain-text preview (or a sentinel string)
        line_count: Number of lines in ``preview``
        height: Card height in pixels
    """
    model_config = ConfigDict(frozen=True)

    file: FileRef
    preview: str
    line_count: int = Field(..., ge=0)
    height: int = Field(..., ge=0)


class Row(BaseModel):
    """
    A horizontal group of cards; the unit of virtualization.

    ``height`` is always the tallest entry's height.
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    entries: Tuple[ProcessedEntry, ...]
    height: int = Field(..., ge=0)

    @property
    def paths(self) -> list[str]:
        return [entry.file.path for entry in self.entries]
