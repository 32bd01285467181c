"""Abstract interface for PST archive readers."""

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator, List

from pstattach.models.message_kind import MessageKind


class ArchiveError(Exception):
    """Base exception for archive reader errors."""

    pass


class ArchiveOpenError(ArchiveError):
    """Raised when an archive file cannot be opened."""

    pass


class ArchiveReadError(ArchiveError):
    """Raised when an item or attachment stream cannot be read."""

    pass


class MessageNotFoundError(ArchiveError):
    """Raised when a message identifier does not resolve to a message."""

    pass


class Attachment(ABC):
    """A named binary payload belonging to exactly one message."""

    @abstractmethod
    def declared_filename(self) -> str:
        """
        Long filename declared for the attachment.

        Returns:
            Filename string, empty if the archive stores none
        """
        pass

    @abstractmethod
    def short_filename(self) -> str:
        """Short (8.3) filename, used when a resolved name comes out empty."""
        pass

    @abstractmethod
    def open_stream(self) -> BinaryIO:
        """
        Open the attachment data for sequential reading.

        Returns:
            Readable binary stream; ``read`` returns ``b""`` at end of data

        Raises:
            ArchiveReadError: If the attachment data cannot be accessed

        Notes:
            - Streams are read-once; call again for a fresh stream
            - Caller is responsible for closing the stream
        """
        pass


class Message(ABC):
    """
    A mail item (or contact, appointment, task, journal or feed entry).

    Plain-message field accessors return empty strings when the archive
    stores no value; they may raise ArchiveReadError on corrupt data.
    """

    @abstractmethod
    def id(self) -> int:
        """Numeric identifier, unique within the archive."""
        pass

    @abstractmethod
    def kind(self) -> MessageKind:
        """Variant of this item."""
        pass

    @abstractmethod
    def attachment_count(self) -> int:
        pass

    @abstractmethod
    def attachment(self, index: int) -> Attachment:
        """
        Get attachment by zero-based index.

        Raises:
            ArchiveReadError: If the attachment cannot be loaded
        """
        pass

    @abstractmethod
    def subject(self) -> str:
        pass

    @abstractmethod
    def display_to(self) -> str:
        pass

    @abstractmethod
    def sent_representing_email_address(self) -> str:
        pass

    @abstractmethod
    def display_cc(self) -> str:
        pass

    @abstractmethod
    def display_bcc(self) -> str:
        pass

    @abstractmethod
    def sender_email_address(self) -> str:
        pass

    @abstractmethod
    def sender_name(self) -> str:
        pass

    @abstractmethod
    def body(self) -> str:
        pass

    @abstractmethod
    def summary(self) -> str:
        """
        Native textual summary of a non-plain item.

        Returns:
            Multi-line text describing the item, specific to its kind
        """
        pass


class Folder(ABC):
    """Hierarchical container node of the archive tree."""

    @abstractmethod
    def display_name(self) -> str:
        pass

    @abstractmethod
    def subfolders(self) -> List["Folder"]:
        """Child folders in archive order."""
        pass

    @abstractmethod
    def content_count(self) -> int:
        """Number of messages stored directly in this folder."""
        pass

    @abstractmethod
    def messages(self) -> Iterator[Message]:
        """
        Iterate the folder's messages in archive order.

        Yields:
            Message objects, lazily loaded
        """
        pass


class Archive(ABC):
    """
    Opened PST archive.

    Folder, Message and Attachment objects obtained from an archive are only
    valid while it remains open.
    """

    @abstractmethod
    def display_name(self) -> str:
        """Display name of the message store."""
        pass

    @abstractmethod
    def root_folder(self) -> Folder:
        pass

    @abstractmethod
    def lookup_message(self, message_id: int) -> Message:
        """
        Resolve a message by its numeric identifier.

        Args:
            message_id: Descriptor identifier of the message

        Returns:
            The matching Message

        Raises:
            MessageNotFoundError: If no message carries that identifier
        """
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
