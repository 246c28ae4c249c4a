"""Data models for Title Tagger."""

import mimetypes
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class TrackMetadata:
    """Tag values for a single track."""
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    track_number: Optional[int] = None
    total_tracks: Optional[int] = None

    def changes_from(self, current: "TrackMetadata") -> List[str]:
        """
        List fields whose wanted value differs from the current one.

        Fields left unset on self are not wanted and never count as changes.

        Args:
            current: Metadata currently stored in the file

        Returns:
            Names of fields that need updating, in declaration order.
        """
        changed = []
        for f in fields(self):
            wanted = getattr(self, f.name)
            if wanted is not None and wanted != getattr(current, f.name):
                changed.append(f.name)
        return changed

    def override(self, current: "TrackMetadata") -> "TrackMetadata":
        """Create new metadata where wanted values replace current ones."""
        return TrackMetadata(**{
            f.name: getattr(self, f.name) if getattr(self, f.name) is not None
            else getattr(current, f.name)
            for f in fields(self)
        })

    def is_empty(self) -> bool:
        """Check if no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class CoverArt:
    """Front cover image to embed in a tag."""
    data: bytes
    mime_type: str = "image/jpeg"
    description: str = ""

    @classmethod
    def from_file(cls, file_path: str) -> "CoverArt":
        """
        Load cover image from disk.

        Args:
            file_path: Path to image file

        Returns:
            CoverArt with mime type guessed from the extension
            (image/jpeg when unknown).

        Raises:
            OSError: If the file cannot be read.
        """
        data = Path(file_path).read_bytes()
        mime_type, _ = mimetypes.guess_type(file_path)
        if not mime_type or not mime_type.startswith("image/"):
            mime_type = "image/jpeg"
        return cls(data=data, mime_type=mime_type)


@dataclass
class FileResult:
    """Outcome of processing one audio file."""
    file_path: str
    new_path: Optional[str] = None
    changed_fields: List[str] = field(default_factory=list)
    tags_written: bool = False
    renamed: bool = False
    frames: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def final_path(self) -> str:
        """Path of the file after processing."""
        return self.new_path or self.file_path


@dataclass
class ProcessingStats:
    """Statistics for a processing run."""
    files_processed: int = 0
    tags_updated: int = 0
    files_renamed: int = 0
    files_skipped: int = 0
    errors: List[str] = field(default_factory=list)
