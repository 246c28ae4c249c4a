#!/usr/bin/env python3
"""
Title Tagger - batch-edit ID3 tags and rename files to match.

Usage:
    python main.py FILE [FILE ...] [options]
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

from mutagen import MutagenError

from config import (
    LOGGER_NAME, load_config, validate_config, validate_rename_format,
    setup_logging, eprint
)
from models import CoverArt, FileResult, ProcessingStats, TrackMetadata
from reporter import ConsoleReporter
from tag_handler import TagHandler
from utils import (
    compile_pattern, extract_title, extract_track, generate_filename,
    rename_audio_file
)

logger = logging.getLogger(LOGGER_NAME)


class TagProcessor:
    """Applies command-line tag changes to audio files."""

    def __init__(self, config: dict, args: argparse.Namespace,
                 reporter: ConsoleReporter):
        """
        Initialize processor.

        Args:
            config: Configuration dictionary
            args: CLI arguments
            reporter: Console output handler

        Raises:
            ValueError: If a filename regex is invalid.
            OSError: If the cover image cannot be read.
        """
        self.config = config
        self.args = args
        self.reporter = reporter
        self.stats = ProcessingStats()
        self.tag_handler = TagHandler()

        self.track_pattern = None
        if args.track_regex:
            self.track_pattern = compile_pattern(args.track_regex, "track")

        self.title_pattern = None
        if args.title_regex:
            self.title_pattern = compile_pattern(args.title_regex, "title")

        self.cover = CoverArt.from_file(args.cover) if args.cover else None

        self.id3_version = int(args.id3_version or config["id3_version"])
        self.rename_format = args.rename_format or config["rename_format"]
        self.untracked_format = config["rename_format_untracked"]

    def process(self, files: Iterable[str]) -> ProcessingStats:
        """
        Process files in order and report each result.

        With --track-increment, files are numbered in alphabetical order.
        """
        files = list(files)
        if self.args.track_increment is not None:
            files = sorted(files)

        for index, file_path in enumerate(files):
            result = self.process_file(file_path, index)
            self.reporter.show_file_result(result)

        return self.stats

    def process_file(self, file_path: str, index: int = 0) -> FileResult:
        """
        Update tag and name of a single file.

        Args:
            file_path: Path to audio file
            index: Position of the file in the run (for --track-increment)

        Returns:
            FileResult describing what was done
        """
        result = FileResult(file_path=file_path)

        if not TagHandler.is_supported(file_path):
            eprint(f"Unsupported format (skipping): {file_path}")
            self.stats.files_skipped += 1
            result.error = "unsupported format"
            return result

        self.stats.files_processed += 1

        try:
            if self.args.clear:
                tags = self.tag_handler.new_tags()
            else:
                tags = self.tag_handler.read_tags(file_path)
        except (MutagenError, OSError) as e:
            return self._fail(result, f"failed to read tag from '{file_path}': {e}")

        wanted = self.wanted_metadata(file_path, index)
        if wanted.is_empty() and not self.cover:
            logger.debug(f"No tag values requested for {file_path}")
        result.changed_fields = self.tag_handler.apply_metadata(tags, wanted)

        if self.cover and self.tag_handler.set_cover(tags, self.cover):
            result.changed_fields.append("cover")

        if self.args.clear or result.changed_fields:
            if self.args.dry_run:
                logger.debug(f"[DRY RUN] Would update tag of {file_path}")
            else:
                success, msg = self.tag_handler.write_tags(
                    tags, file_path, self.id3_version
                )
                if not success:
                    return self._fail(result, msg)
                result.tags_written = True
                self.stats.tags_updated += 1

        if self.args.rename:
            self._rename_file(result, self.tag_handler.get_metadata(tags))

        result.frames = self.tag_handler.describe_frames(tags)
        return result

    def wanted_metadata(self, file_path: str, index: int = 0) -> TrackMetadata:
        """
        Build the tag values requested on the command line for a file.

        Args:
            file_path: Path to audio file (its name feeds the regexes)
            index: Position of the file in the run

        Returns:
            TrackMetadata with requested fields set
        """
        basename = Path(file_path).name

        track = None
        if self.args.track is not None:
            track = self.args.track
        elif self.args.track_increment is not None:
            track = self.args.track_increment + index
        elif self.track_pattern is not None:
            track = extract_track(self.track_pattern, basename)
            if track is None:
                logger.debug(f"Track regex did not match {basename}")

        title = None
        if self.args.title is not None:
            title = self.args.title
        elif self.title_pattern is not None:
            title = extract_title(self.title_pattern, basename)
            if title is None:
                logger.debug(f"Title regex did not match {basename}")

        return TrackMetadata(
            title=title,
            artist=self.args.artist,
            album=self.args.album,
            genre=self.args.genre,
            year=self.args.year,
            track_number=track,
        )

    def extract_cover(self, file_path: str, target: str) -> bool:
        """
        Write the first embedded picture of a file to disk.

        Args:
            file_path: Audio file to read
            target: Output image path

        Returns:
            True if the cover was written
        """
        try:
            tags = self.tag_handler.read_tags(file_path)
        except (MutagenError, OSError) as e:
            eprint(f"failed to read tag from '{file_path}': {e}")
            return False

        data = self.tag_handler.extract_cover(tags)
        if data is None:
            eprint(f"no image found in '{file_path}'")
            return False

        try:
            Path(target).write_bytes(data)
        except OSError as e:
            eprint(f"failed to write cover to '{target}': {e}")
            return False

        self.reporter.show_extracted_cover(file_path, target, len(data))
        return True

    def _rename_file(self, result: FileResult, metadata: TrackMetadata) -> None:
        """Rename file to match its tags, if needed."""
        current = Path(result.file_path)
        try:
            new_name = generate_filename(
                metadata, current.suffix, self.rename_format, self.untracked_format
            )
        except ValueError as e:
            self._fail(result, f"failed to rename '{result.file_path}': {e}")
            return
        if new_name is None:
            logger.debug(f"No title for {current.name}, not renaming")
            return

        if current.name == new_name:
            return

        target = current.parent / new_name
        if target.exists():
            eprint(f"Target file already exists (not renaming): {target}")
            return

        success, msg = rename_audio_file(
            result.file_path, new_name, dry_run=self.args.dry_run
        )
        if not success:
            self._fail(result, msg)
            return

        result.new_path = msg
        result.renamed = True
        if not self.args.dry_run:
            self.stats.files_renamed += 1

    def _fail(self, result: FileResult, message: str) -> FileResult:
        """Record a per-file error."""
        logger.error(message)
        result.error = message
        self.stats.errors.append(message)
        return result


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        description="Batch-edit ID3 tags of MP3 files and optionally rename "
                    "them to match their tags.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Set album and artist on a whole folder
  python main.py *.mp3 --album "Everything" --artist "The Band"

  # Title and track number from filenames like "03 the end of everything.mp3"
  python main.py *.mp3 --track-regex "^(?P<track>\\d+)" \\
      --title-regex "^\\d+ (?P<title>.+)\\.mp3$" --rename

  # Number files alphabetically starting at 1
  python main.py *.mp3 --track-increment 1

  # Extract the cover of a file
  python main.py song.mp3 --extract-cover cover.jpg
"""
    )

    # Required arguments
    parser.add_argument(
        "files",
        nargs="+",
        help="Files to update"
    )

    # Tag values
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear existing tag before applying changes"
    )

    parser.add_argument("--album", help="Set album name")
    parser.add_argument("--artist", help="Set artist name")
    parser.add_argument("--year", type=int, help="Set release year")
    parser.add_argument("--genre", help="Set genre")

    parser.add_argument(
        "--cover",
        help="Set album cover from an image file"
    )

    track_group = parser.add_mutually_exclusive_group()
    track_group.add_argument(
        "--track",
        type=int,
        help="Set track number"
    )
    track_group.add_argument(
        "--track-regex",
        help="Set track number using a regex with a (?P<track>...) group "
             "that matches part of the filename"
    )
    track_group.add_argument(
        "--track-increment",
        type=int,
        help="Set track number and increment on consequent files "
             "(using alphabetical order)"
    )

    title_group = parser.add_mutually_exclusive_group()
    title_group.add_argument(
        "--title",
        help="Set song title"
    )
    title_group.add_argument(
        "--title-regex",
        help="Set song title using a regex with a (?P<title>...) group "
             "that matches part of the filename"
    )

    # File handling
    parser.add_argument(
        "--rename",
        action="store_true",
        help="Rename file after applying tag"
    )

    parser.add_argument(
        "--rename-format",
        help="Rename format for files with a track number "
             "(default: TITLE_TAGGER_RENAME_FORMAT or '{track:02d} - {title}')"
    )

    parser.add_argument(
        "--extract-cover",
        metavar="PATH",
        help="Extract cover from the first file to PATH and exit"
    )

    parser.add_argument(
        "--id3-version",
        type=int,
        choices=[3, 4],
        help="ID3v2 version to write (default: TITLE_TAGGER_ID3_VERSION or 4)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without applying them"
    )

    # Configuration
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: ./.env)"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    # Verbosity
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress per-file output"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    return parser


def main(argv: Optional[list] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    # Validate paths
    for file_path in args.files:
        if not os.path.isfile(file_path):
            parser.error(f"File does not exist: {file_path}")

    if args.rename_format:
        problems = validate_rename_format(args.rename_format, "--rename-format")
        if problems:
            parser.error("; ".join(problems))

    # Load configuration
    config = load_config(args.env_file)
    problems = validate_config(config)
    if problems:
        eprint("\nInvalid configuration:")
        for problem in problems:
            eprint(f"  - {problem}")
        sys.exit(1)

    reporter = ConsoleReporter(no_color=args.no_color, quiet=args.quiet)

    try:
        processor = TagProcessor(config, args, reporter)
    except ValueError as e:
        parser.error(str(e))
    except OSError as e:
        parser.error(f"failed to read cover '{args.cover}': {e}")

    if args.extract_cover:
        sys.exit(0 if processor.extract_cover(args.files[0], args.extract_cover) else 1)

    try:
        stats = processor.process(args.files)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        sys.exit(1)

    if len(args.files) > 1 or stats.errors:
        reporter.show_summary(stats)

    if stats.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
