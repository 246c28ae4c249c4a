"""Configuration management for Title Tagger."""

import logging
import os
import string
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

LOGGER_NAME = "title_tagger"

DEFAULT_ID3_VERSION = 4
DEFAULT_RENAME_FORMAT = "{track:02d} - {title}"
DEFAULT_RENAME_FORMAT_UNTRACKED = "{title}"

# Fields available to rename format templates
RENAME_FIELDS = {"title", "track", "artist", "album", "year", "genre"}

logger = logging.getLogger(LOGGER_NAME)


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the tool logger with a stderr handler."""
    level = logging.DEBUG if verbose else logging.WARNING
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    log.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    log.addHandler(console_handler)

    return log


def load_config(env_file: Optional[str] = None) -> dict:
    """
    Load configuration from .env file.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of configuration values.
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger.debug(f"Loaded environment from {env_path.resolve()}")
    else:
        logger.debug(
            f".env file not found at {env_path.resolve()} "
            "- falling back to process env."
        )

    return {
        "id3_version": os.getenv("TITLE_TAGGER_ID3_VERSION", str(DEFAULT_ID3_VERSION)),
        "rename_format": os.getenv("TITLE_TAGGER_RENAME_FORMAT", DEFAULT_RENAME_FORMAT),
        "rename_format_untracked": os.getenv(
            "TITLE_TAGGER_RENAME_FORMAT_UNTRACKED", DEFAULT_RENAME_FORMAT_UNTRACKED
        ),
    }


def template_fields(template: str) -> List[str]:
    """Return the field names referenced by a format template."""
    return [name for _, name, _, _ in string.Formatter().parse(template) if name]


def validate_rename_format(template: str, env_name: str) -> List[str]:
    """Check a rename template; return problems found."""
    problems = []
    try:
        names = template_fields(template)
    except ValueError as e:
        return [f"{env_name}: invalid format '{template}' ({e})"]

    if "title" not in names:
        problems.append(f"{env_name}: format '{template}' has no {{title}} field")
    unknown = sorted(set(names) - RENAME_FIELDS)
    if unknown:
        problems.append(f"{env_name}: unknown field(s) {', '.join(unknown)}")
    if problems:
        return problems

    # Optional fields are empty strings when a tag is missing
    sample = dict.fromkeys(RENAME_FIELDS, "")
    sample.update(title="Title", track=1)
    try:
        template.format(**sample)
    except (ValueError, KeyError, IndexError) as e:
        problems.append(
            f"{env_name}: format '{template}' fails for files with missing tags ({e})"
        )
    return problems


def validate_config(config: dict) -> List[str]:
    """
    Validate configuration and return list of problems.

    Args:
        config: Configuration dictionary from load_config()

    Returns:
        List of problem descriptions (empty if configuration is usable).
    """
    problems = []

    if str(config.get("id3_version")) not in ("3", "4"):
        problems.append(
            f"TITLE_TAGGER_ID3_VERSION: expected 3 or 4, got '{config.get('id3_version')}'"
        )

    problems.extend(validate_rename_format(
        config.get("rename_format") or "", "TITLE_TAGGER_RENAME_FORMAT"
    ))
    untracked = config.get("rename_format_untracked") or ""
    untracked_problems = validate_rename_format(
        untracked, "TITLE_TAGGER_RENAME_FORMAT_UNTRACKED"
    )
    problems.extend(untracked_problems)
    if not untracked_problems and "track" in template_fields(untracked):
        problems.append(
            "TITLE_TAGGER_RENAME_FORMAT_UNTRACKED: format is used for files "
            "without a track number and cannot reference {track}"
        )

    return problems
