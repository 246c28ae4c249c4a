"""Shared test fixtures for title_tagger tests."""

import logging
import sys
from pathlib import Path

import pytest
from mutagen.id3 import ID3, APIC, PictureType, TIT2, TPE1, TALB, TRCK, TDRC

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import (
    LOGGER_NAME,
    DEFAULT_RENAME_FORMAT, DEFAULT_RENAME_FORMAT_UNTRACKED
)
from models import TrackMetadata

ENV_VARS = (
    "TITLE_TAGGER_ID3_VERSION",
    "TITLE_TAGGER_RENAME_FORMAT",
    "TITLE_TAGGER_RENAME_FORMAT_UNTRACKED",
)

COVER_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-data"


@pytest.fixture
def sample_metadata():
    """Basic complete metadata for a track."""
    return TrackMetadata(
        title="Test Song",
        artist="Test Artist",
        album="Test Album",
        genre="Rock",
        year=2020,
        track_number=1,
        total_tracks=10,
    )


@pytest.fixture
def default_config():
    """Configuration with default values."""
    return {
        "id3_version": "4",
        "rename_format": DEFAULT_RENAME_FORMAT,
        "rename_format_untracked": DEFAULT_RENAME_FORMAT_UNTRACKED,
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove tool variables from the environment, restoring them afterwards."""
    for name in ENV_VARS:
        # setenv first so monkeypatch restores the original state on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def make_mp3(tmp_path):
    """Factory creating an .mp3 file holding only an ID3 tag."""
    def _make(name="song.mp3", title=None, artist=None, album=None,
              track=None, year=None, cover=None, tagged=True):
        path = tmp_path / name
        path.write_bytes(b"")
        if not tagged:
            return str(path)

        tags = ID3()
        if title:
            tags.add(TIT2(encoding=3, text=title))
        if artist:
            tags.add(TPE1(encoding=3, text=artist))
        if album:
            tags.add(TALB(encoding=3, text=album))
        if track:
            tags.add(TRCK(encoding=3, text=str(track)))
        if year:
            tags.add(TDRC(encoding=3, text=str(year)))
        if cover:
            tags.add(APIC(encoding=3, mime="image/jpeg",
                          type=PictureType.COVER_FRONT, desc="", data=cover))
        tags.save(str(path))
        return str(path)

    return _make


@pytest.fixture
def cover_file(tmp_path):
    """A fake JPEG cover image on disk."""
    path = tmp_path / "cover.jpg"
    path.write_bytes(COVER_BYTES)
    return str(path)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to captured streams after each test."""
    yield
    logging.getLogger(LOGGER_NAME).handlers.clear()
