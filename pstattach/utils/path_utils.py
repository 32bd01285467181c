"""Path and message identifier validation utilities."""

import os
from pathlib import Path


def parse_message_id(value: str) -> int:
    """
    Parse a message identifier given on the command line.

    Args:
        value: Raw argument (surrounding whitespace allowed)

    Returns:
        Message identifier as integer

    Raises:
        ValueError: If value is empty or not an integer

    Examples:
        >>> parse_message_id(" 2097252 ")
        2097252
    """
    if not value or not value.strip():
        raise ValueError("Message id is empty")

    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"Message id is not a number: {value}")


def is_readable_file(path: Path) -> bool:
    """Return True if path is an existing file the process can read."""
    return path.is_file() and os.access(path, os.R_OK)


def is_writable_directory(path: Path) -> bool:
    """Return True if path is an existing directory the process can write to."""
    return path.is_dir() and os.access(path, os.W_OK)
