"""Tests for reporter.py console output."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from reporter import ConsoleReporter
from models import FileResult, ProcessingStats


@pytest.fixture
def reporter():
    """Create ConsoleReporter instance with no color."""
    return ConsoleReporter(no_color=True)


@pytest.fixture
def reporter_quiet():
    """Create ConsoleReporter instance with quiet mode."""
    return ConsoleReporter(no_color=True, quiet=True)


class TestInitialization:
    """Tests for ConsoleReporter initialization."""

    def test_default_settings(self):
        """Should initialize with colors and output enabled."""
        reporter = ConsoleReporter()
        assert reporter.no_color is False
        assert reporter.quiet is False
        assert reporter.COLORS["bold"] == "\033[1m"

    def test_no_color_clears_codes(self, reporter):
        """Should blank all color codes."""
        assert all(code == "" for code in reporter.COLORS.values())
        assert reporter._c("red", "text") == "text"

    def test_no_color_does_not_affect_class(self, reporter):
        """Should not modify the class-level color table."""
        assert ConsoleReporter.COLORS["reset"] == "\033[0m"


class TestPrint:
    """Tests for print method."""

    def test_prints_in_normal_mode(self, reporter, capsys):
        """Should print output."""
        reporter.print("hello")
        assert capsys.readouterr().out == "hello\n"

    def test_suppresses_output_in_quiet_mode(self, reporter_quiet, capsys):
        """Should print nothing in quiet mode."""
        reporter_quiet.print("hello")
        assert capsys.readouterr().out == ""


class TestShowFileResult:
    """Tests for show_file_result method."""

    def test_shows_frames(self, reporter, capsys):
        """Should list frames under the file path."""
        result = FileResult(
            file_path="/music/song.mp3",
            frames={"TALB": "Album", "TIT2": "Song"},
        )
        reporter.show_file_result(result)
        out = capsys.readouterr().out
        assert "/music/song.mp3" in out
        assert "  TALB: Album" in out
        assert "  TIT2: Song" in out

    def test_shows_rename(self, reporter, capsys):
        """Should show the new name of a renamed file."""
        result = FileResult(
            file_path="/music/song.mp3",
            new_path="/music/01 - Song.mp3",
            renamed=True,
        )
        reporter.show_file_result(result)
        assert "/music/song.mp3 -> 01 - Song.mp3" in capsys.readouterr().out

    def test_shows_updated_fields(self, reporter, capsys):
        """Should list updated fields."""
        result = FileResult(file_path="song.mp3", changed_fields=["title", "year"],
                            tags_written=True)
        reporter.show_file_result(result)
        assert "Updated: title, year" in capsys.readouterr().out

    def test_shows_pending_fields_in_dry_run(self, reporter, capsys):
        """Should say 'Would update' when tags were not written."""
        result = FileResult(file_path="song.mp3", changed_fields=["title"])
        reporter.show_file_result(result)
        assert "Would update: title" in capsys.readouterr().out

    def test_shows_error(self, reporter, capsys):
        """Should show the error instead of frames."""
        result = FileResult(file_path="song.mp3", error="boom",
                            frames={"TIT2": "Song"})
        reporter.show_file_result(result)
        out = capsys.readouterr().out
        assert "Error: boom" in out
        assert "TIT2" not in out

    def test_shows_empty_tag(self, reporter, capsys):
        """Should mark files without frames."""
        reporter.show_file_result(FileResult(file_path="song.mp3"))
        assert "(no frames)" in capsys.readouterr().out

    def test_quiet_mode(self, reporter_quiet, capsys):
        """Should print nothing in quiet mode."""
        reporter_quiet.show_file_result(FileResult(file_path="song.mp3"))
        assert capsys.readouterr().out == ""


class TestShowSummary:
    """Tests for show_summary method."""

    def test_displays_all_stats(self, reporter, capsys):
        """Should display all counters."""
        stats = ProcessingStats(files_processed=5, tags_updated=3,
                                files_renamed=2, files_skipped=1)
        reporter.show_summary(stats)
        out = capsys.readouterr().out
        assert "Files processed:     5" in out
        assert "Tags updated:        3" in out
        assert "Files renamed:       2" in out
        assert "Files skipped:       1" in out

    def test_limits_displayed_errors(self, reporter, capsys):
        """Should show at most 10 errors."""
        stats = ProcessingStats(errors=[f"error {i}" for i in range(12)])
        reporter.show_summary(stats)
        out = capsys.readouterr().out
        assert "error 9" in out
        assert "error 10" not in out
        assert "... and 2 more errors" in out

    def test_quiet_without_errors(self, reporter_quiet, capsys):
        """Should print nothing in quiet mode when all went well."""
        reporter_quiet.show_summary(ProcessingStats(files_processed=1))
        assert capsys.readouterr().out == ""

    def test_quiet_with_errors(self, reporter_quiet, capsys):
        """Should still show errors in quiet mode."""
        reporter_quiet.show_summary(ProcessingStats(errors=["bad file"]))
        assert "bad file" in capsys.readouterr().out


class TestShowExtractedCover:
    """Tests for show_extracted_cover method."""

    def test_reports_cover(self, reporter, capsys):
        """Should name source, target and size."""
        reporter.show_extracted_cover("/music/song.mp3", "cover.jpg", 1234)
        assert capsys.readouterr().out == (
            "Extracted cover from song.mp3 to cover.jpg (1234 bytes)\n"
        )
