"""PST archive reading services."""

from .base import (
    Archive,
    ArchiveError,
    ArchiveOpenError,
    ArchiveReadError,
    Attachment,
    Folder,
    Message,
    MessageNotFoundError,
)
from .pff_reader import PffArchive, open_archive

__all__ = [
    "Archive",
    "ArchiveError",
    "ArchiveOpenError",
    "ArchiveReadError",
    "Attachment",
    "Folder",
    "Message",
    "MessageNotFoundError",
    "PffArchive",
    "open_archive",
]
