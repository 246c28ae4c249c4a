"""ID3 tag handler using mutagen."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from mutagen import MutagenError
from mutagen.id3 import (
    ID3, ID3NoHeaderError, APIC, PictureType, TextFrame,
    TIT2, TPE1, TALB, TCON, TDRC, TRCK,
)

from config import LOGGER_NAME
from models import CoverArt, TrackMetadata

logger = logging.getLogger(LOGGER_NAME)


class TagHandler:
    """Handles reading and writing ID3 tags using mutagen."""

    SUPPORTED_EXTENSIONS = {".mp3"}

    # TrackMetadata field -> text frame
    TEXT_FRAMES = {
        "title": TIT2,
        "artist": TPE1,
        "album": TALB,
        "genre": TCON,
    }

    @classmethod
    def is_supported(cls, file_path: str) -> bool:
        """Check if file format is supported."""
        return Path(file_path).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    def new_tags(self) -> ID3:
        """Create an empty tag."""
        return ID3()

    def read_tags(self, file_path: str) -> ID3:
        """
        Read existing ID3 tag from file.

        Args:
            file_path: Path to audio file

        Returns:
            The file's tag, or an empty tag if the file has none.

        Raises:
            MutagenError: If the file cannot be read or the tag is corrupt.
        """
        try:
            return ID3(file_path)
        except ID3NoHeaderError:
            logger.debug(f"No ID3 tag in {file_path}, starting from empty tag")
            return ID3()

    def get_metadata(self, tags: ID3) -> TrackMetadata:
        """Extract track metadata from a tag."""
        track_num, total_tracks = self._parse_track(self._get_tag_str(tags, "TRCK") or "")
        year = self._parse_year(self._get_tag_str(tags, "TDRC") or "")
        if year is None:
            year = self._parse_year(self._get_tag_str(tags, "TYER") or "")

        return TrackMetadata(
            title=self._get_tag_str(tags, "TIT2"),
            artist=self._get_tag_str(tags, "TPE1"),
            album=self._get_tag_str(tags, "TALB"),
            genre=self._get_tag_str(tags, "TCON"),
            year=year,
            track_number=track_num,
            total_tracks=total_tracks,
        )

    def apply_metadata(self, tags: ID3, wanted: TrackMetadata) -> List[str]:
        """
        Set wanted values that differ from the tag's current ones.

        Args:
            tags: Tag to modify in place
            wanted: Values to set; unset fields are left alone

        Returns:
            Names of fields that were changed.
        """
        current = self.get_metadata(tags)
        changed = wanted.changes_from(current)

        for name in changed:
            if name in self.TEXT_FRAMES:
                frame_cls = self.TEXT_FRAMES[name]
                tags.add(frame_cls(encoding=3, text=getattr(wanted, name)))
            elif name == "year":
                tags.delall("TYER")
                tags.add(TDRC(encoding=3, text=str(wanted.year)))
            elif name in ("track_number", "total_tracks"):
                merged = wanted.override(current)
                track_num, total = merged.track_number, merged.total_tracks
                track_str = str(track_num) if track_num is not None else ""
                if total:
                    track_str += f"/{total}"
                tags.add(TRCK(encoding=3, text=track_str))

        return changed

    def set_cover(self, tags: ID3, cover: CoverArt) -> bool:
        """
        Replace embedded pictures with a front cover.

        Args:
            tags: Tag to modify in place
            cover: Cover image

        Returns:
            True if the tag changed, False if the cover was already present.
        """
        picture = APIC(
            encoding=3,
            mime=cover.mime_type,
            type=PictureType.COVER_FRONT,
            desc=cover.description,
            data=cover.data,
        )
        for existing in tags.getall("APIC"):
            if (existing.data == picture.data and existing.mime == picture.mime
                    and existing.type == picture.type and existing.desc == picture.desc):
                return False

        tags.delall("APIC")
        tags.add(picture)
        return True

    def extract_cover(self, tags: ID3) -> Optional[bytes]:
        """Return image data of the first embedded picture, if any."""
        pictures = tags.getall("APIC")
        if not pictures:
            return None
        return pictures[0].data

    def write_tags(self, tags: ID3, file_path: str,
                   version: int = 4) -> Tuple[bool, str]:
        """
        Write tag to file.

        Args:
            tags: Tag to save
            file_path: Path to audio file
            version: ID3v2 minor version (3 or 4)

        Returns:
            (success, error message or empty string)
        """
        try:
            if version == 3:
                tags.update_to_v23()
            tags.save(file_path, v2_version=version)
            return True, ""
        except (MutagenError, OSError) as e:
            return False, f"failed to update tag for '{file_path}': {e}"

    def describe_frames(self, tags: ID3) -> Dict[str, str]:
        """
        Summarize tag frames for display.

        Returns:
            Frame ID -> display value, sorted by frame ID. Pictures show their
            size, text frames their text, other frames '<bytes>'.
        """
        output = {}
        for frame in tags.values():
            if isinstance(frame, APIC):
                value = f"<{len(frame.data)} bytes>"
            elif isinstance(frame, TextFrame):
                value = "/".join(str(t) for t in frame.text)
            else:
                value = "<bytes>"
            output[frame.FrameID] = value
        return dict(sorted(output.items()))

    def _get_tag_str(self, tags: ID3, key: str) -> Optional[str]:
        """Get string value from ID3 text frame."""
        frame = tags.get(key)
        if frame is not None and frame.text:
            value = str(frame.text[0])
            return value if value else None
        return None

    def _parse_track(self, value: str) -> tuple:
        """
        Parse track string like '3/12' or '3'.

        Returns:
            (number, total) tuple
        """
        if not value:
            return None, None

        parts = value.split("/")
        try:
            num = int(parts[0]) if parts[0].strip() else None
            total = int(parts[1]) if len(parts) > 1 and parts[1].strip() else None
            return num, total
        except ValueError:
            return None, None

    def _parse_year(self, value: str) -> Optional[int]:
        """Parse year from various date formats."""
        if not value:
            return None
        try:
            # Handle formats like "2020", "2020-01-15", etc.
            return int(str(value)[:4])
        except (ValueError, IndexError):
            return None
