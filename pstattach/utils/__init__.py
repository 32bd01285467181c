"""Utility functions"""

from .path_utils import is_readable_file, is_writable_directory, parse_message_id
from .unicode_utils import contains_ignore_case, decode_text

__all__ = [
    "is_readable_file",
    "is_writable_directory",
    "parse_message_id",
    "contains_ignore_case",
    "decode_text",
]
