"""Business logic services"""

from .archive_reader import Archive, ArchiveError, open_archive
from .extraction import ExtractionContext, ExtractionEngine
from .filtering import build_folder_filter, build_message_filter, render_message
from .naming import NamingResolver

__all__ = [
    "Archive",
    "ArchiveError",
    "open_archive",
    "ExtractionContext",
    "ExtractionEngine",
    "build_folder_filter",
    "build_message_filter",
    "render_message",
    "NamingResolver",
]
