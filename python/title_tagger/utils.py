"""Utility functions for Title Tagger."""

import re
from pathlib import Path
from typing import Optional, Tuple, TYPE_CHECKING

from titlecase import format_to_title

if TYPE_CHECKING:
    from models import TrackMetadata


def compile_pattern(pattern: str, group: str) -> re.Pattern:
    """Compile a filename regex that must define the named group ``group``.

    Args:
        pattern: Regular expression from the command line
        group: Required named group, e.g. 'title' or 'track'

    Returns:
        Compiled pattern

    Raises:
        ValueError: If the pattern is invalid or lacks the group.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid regex '{pattern}': {e}") from e

    if group not in compiled.groupindex:
        raise ValueError(f"regex '{pattern}' has no (?P<{group}>...) group")
    return compiled


def capture_group(pattern: re.Pattern, filename: str, group: str) -> Optional[str]:
    """Return the named group of the first match in filename, if any."""
    match = pattern.search(filename)
    if match is None:
        return None
    return match.group(group)


def extract_title(pattern: re.Pattern, filename: str) -> Optional[str]:
    """Capture the 'title' group from filename and format it as a title."""
    raw = capture_group(pattern, filename, "title")
    if raw is None:
        return None
    return format_to_title(raw)


def extract_track(pattern: re.Pattern, filename: str) -> Optional[int]:
    """Capture the 'track' group from filename as a number."""
    raw = capture_group(pattern, filename, "track")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def sanitize_filename(s: str) -> str:
    """Sanitize a string for use in filenames."""
    s = re.sub(r'[<>:"/\\|?*]', '_', s)
    s = s.strip('. ')
    s = re.sub(r'\s+', ' ', s)
    s = re.sub(r'_+', '_', s)
    return s


def generate_filename(metadata: "TrackMetadata", extension: str,
                      rename_format: str, untracked_format: str) -> Optional[str]:
    """Generate filename from tag metadata.

    Args:
        metadata: Track metadata; title is required
        extension: File extension including dot (e.g., '.mp3')
        rename_format: Template used when a track number is known
        untracked_format: Template used without a track number

    Returns:
        Filename or None if the title is missing or sanitizes to nothing

    Raises:
        ValueError: If the template cannot be filled from the metadata.
    """
    title = sanitize_filename(metadata.title or "")
    if not title:
        return None

    values = {
        "title": title,
        "track": metadata.track_number,
        "artist": sanitize_filename(metadata.artist or ""),
        "album": sanitize_filename(metadata.album or ""),
        "year": metadata.year or "",
        "genre": sanitize_filename(metadata.genre or ""),
    }

    template = rename_format if metadata.track_number is not None else untracked_format
    try:
        stem = template.format(**values)
    except (ValueError, KeyError, IndexError) as e:
        raise ValueError(f"cannot apply rename format '{template}': {e}") from e

    return f"{stem}{extension}"


def rename_audio_file(file_path: str, new_name: str,
                      dry_run: bool = False) -> Tuple[bool, str]:
    """
    Rename audio file within its folder.

    Args:
        file_path: Current file path
        new_name: New filename (not full path)
        dry_run: If True, don't actually rename

    Returns:
        (success, new_path or error message)
    """
    current = Path(file_path)
    new_path = current.parent / new_name

    if current.name == new_name:
        return True, str(current)

    if new_path.exists():
        return False, f"Target file already exists: {new_path}"

    if dry_run:
        return True, str(new_path)

    try:
        current.rename(new_path)
        return True, str(new_path)
    except OSError as e:
        return False, f"failed to rename '{file_path}' to '{new_path}': {e}"
