"""PST archive reader backed by the libpff (pypff) bindings."""

import io
from pathlib import Path
from typing import Any, Iterator, List, Optional

import structlog

from pstattach.models.message_kind import MessageKind
from pstattach.utils.unicode_utils import decode_text
from .base import (
    Archive,
    ArchiveOpenError,
    ArchiveReadError,
    Attachment,
    Folder,
    Message,
    MessageNotFoundError,
)

logger = structlog.get_logger()

# MAPI property identifiers
PR_MESSAGE_CLASS = 0x001A
PR_SUBJECT = 0x0037
PR_SENT_REPRESENTING_NAME = 0x0042
PR_SENT_REPRESENTING_EMAIL_ADDRESS = 0x0065
PR_CONVERSATION_TOPIC = 0x0070
PR_SENDER_NAME = 0x0C1A
PR_SENDER_EMAIL_ADDRESS = 0x0C1F
PR_DISPLAY_BCC = 0x0E02
PR_DISPLAY_CC = 0x0E03
PR_DISPLAY_TO = 0x0E04
PR_BODY = 0x1000
PR_DISPLAY_NAME = 0x3001
PR_EMAIL_ADDRESS = 0x3003
PR_ATTACH_FILENAME = 0x3704
PR_ATTACH_LONG_FILENAME = 0x3707
PR_BUSINESS_TELEPHONE_NUMBER = 0x3A08
PR_HOME_TELEPHONE_NUMBER = 0x3A09
PR_GIVEN_NAME = 0x3A06
PR_SURNAME = 0x3A11
PR_COMPANY_NAME = 0x3A16
PR_TITLE = 0x3A17
PR_MOBILE_TELEPHONE_NUMBER = 0x3A1C
PR_SMTP_ADDRESS = 0x39FE

# Named contact properties (PSETID_Address), matched by their long id
PID_LID_EMAIL1_EMAIL_ADDRESS = 0x8083
PID_LID_EMAIL2_EMAIL_ADDRESS = 0x8093
PID_LID_EMAIL3_EMAIL_ADDRESS = 0x80A3

# Labelled properties making up the summary of each non-plain kind.
SUMMARY_PROPERTIES = {
    MessageKind.CONTACT: (
        ("Display name", PR_DISPLAY_NAME),
        ("Given name", PR_GIVEN_NAME),
        ("Surname", PR_SURNAME),
        ("Company", PR_COMPANY_NAME),
        ("Job title", PR_TITLE),
        ("Email", PR_EMAIL_ADDRESS),
        ("SMTP address", PR_SMTP_ADDRESS),
        ("Business phone", PR_BUSINESS_TELEPHONE_NUMBER),
        ("Home phone", PR_HOME_TELEPHONE_NUMBER),
        ("Mobile phone", PR_MOBILE_TELEPHONE_NUMBER),
    ),
    MessageKind.APPOINTMENT: (
        ("Subject", PR_SUBJECT),
        ("Organizer", PR_SENT_REPRESENTING_NAME),
        ("Attendees", PR_DISPLAY_TO),
        ("Optional attendees", PR_DISPLAY_CC),
    ),
    MessageKind.TASK: (
        ("Subject", PR_SUBJECT),
        ("Owner", PR_SENDER_NAME),
        ("Topic", PR_CONVERSATION_TOPIC),
    ),
    MessageKind.ACTIVITY: (
        ("Subject", PR_SUBJECT),
        ("Author", PR_SENDER_NAME),
        ("Topic", PR_CONVERSATION_TOPIC),
    ),
    MessageKind.FEED: (
        ("Subject", PR_SUBJECT),
        ("Author", PR_SENDER_NAME),
        ("Author email", PR_SENDER_EMAIL_ADDRESS),
        ("Topic", PR_CONVERSATION_TOPIC),
    ),
}

# Named properties appended to the summary after the tagged ones.
NAMED_SUMMARY_PROPERTIES = {
    MessageKind.CONTACT: (
        ("Email 1", PID_LID_EMAIL1_EMAIL_ADDRESS),
        ("Email 2", PID_LID_EMAIL2_EMAIL_ADDRESS),
        ("Email 3", PID_LID_EMAIL3_EMAIL_ADDRESS),
    ),
}


def read_string_property(item: Any, property_id: int) -> Optional[str]:
    """
    Read a string property from the record sets of a pypff item.

    Args:
        item: pypff item (message, attachment, folder or message store)
        property_id: MAPI property identifier

    Returns:
        Property value as string, or None if the item has no such entry

    Raises:
        ArchiveReadError: If the record sets cannot be read
    """
    try:
        for record_set in item.record_sets:
            for entry in record_set.entries:
                if entry.entry_type == property_id:
                    return entry.data_as_string
    except (IOError, SystemError, UnicodeDecodeError) as e:
        raise ArchiveReadError(f"Cannot read property {property_id:#06x}: {e}")

    return None


def read_named_string_property(item: Any, long_id: int) -> Optional[str]:
    """
    Read a string named property, resolved through the name-to-id map.

    Args:
        item: pypff item
        long_id: Numeric name of the property (e.g. 0x8083 for Email1)

    Returns:
        Property value as string, or None if the item has no such entry

    Raises:
        ArchiveReadError: If the record sets cannot be read
    """
    try:
        for record_set in item.record_sets:
            for entry in record_set.entries:
                named = entry.name_to_id_map_entry
                if named is not None and named.number == long_id:
                    return entry.data_as_string
    except (IOError, SystemError, UnicodeDecodeError) as e:
        raise ArchiveReadError(f"Cannot read named property {long_id:#06x}: {e}")

    return None


class PffAttachmentStream(io.RawIOBase):
    """Sequential read-only view over a pypff attachment's data."""

    def __init__(self, pff_attachment: Any):
        self._attachment = pff_attachment
        self._remaining = pff_attachment.get_size()
        pff_attachment.seek_offset(0)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._remaining <= 0:
            return 0

        try:
            data = self._attachment.read_buffer(min(len(buffer), self._remaining))
        except IOError as e:
            raise ArchiveReadError(f"Cannot read attachment data: {e}")

        size = len(data)
        buffer[:size] = data
        self._remaining -= size
        if size == 0:
            # Size metadata overstated the payload
            self._remaining = 0
        return size


class PffAttachment(Attachment):
    """Attachment backed by a pypff attachment item."""

    def __init__(self, pff_attachment: Any):
        self._item = pff_attachment

    def declared_filename(self) -> str:
        return read_string_property(self._item, PR_ATTACH_LONG_FILENAME) or ""

    def short_filename(self) -> str:
        return (
            read_string_property(self._item, PR_ATTACH_FILENAME)
            or read_string_property(self._item, PR_DISPLAY_NAME)
            or ""
        )

    def open_stream(self) -> PffAttachmentStream:
        try:
            return PffAttachmentStream(self._item)
        except IOError as e:
            raise ArchiveReadError(f"Cannot open attachment data: {e}")


class PffMessage(Message):
    """Message backed by a pypff message item."""

    def __init__(self, pff_message: Any):
        self._item = pff_message
        self._kind: Optional[MessageKind] = None

    def id(self) -> int:
        return int(self._item.identifier)

    def kind(self) -> MessageKind:
        if self._kind is None:
            self._kind = MessageKind.from_message_class(
                read_string_property(self._item, PR_MESSAGE_CLASS)
            )
        return self._kind

    def attachment_count(self) -> int:
        try:
            return int(self._item.number_of_attachments)
        except IOError as e:
            raise ArchiveReadError(f"Cannot count attachments of message {self.id()}: {e}")

    def attachment(self, index: int) -> PffAttachment:
        try:
            return PffAttachment(self._item.get_attachment(index))
        except IOError as e:
            raise ArchiveReadError(
                f"Cannot load attachment {index} of message {self.id()}: {e}"
            )

    def _string(self, property_id: int) -> str:
        return read_string_property(self._item, property_id) or ""

    def subject(self) -> str:
        return self._string(PR_SUBJECT)

    def display_to(self) -> str:
        return self._string(PR_DISPLAY_TO)

    def sent_representing_email_address(self) -> str:
        return self._string(PR_SENT_REPRESENTING_EMAIL_ADDRESS)

    def display_cc(self) -> str:
        return self._string(PR_DISPLAY_CC)

    def display_bcc(self) -> str:
        return self._string(PR_DISPLAY_BCC)

    def sender_email_address(self) -> str:
        return self._string(PR_SENDER_EMAIL_ADDRESS)

    def sender_name(self) -> str:
        return self._string(PR_SENDER_NAME)

    def body(self) -> str:
        try:
            raw = self._item.get_plain_text_body()
        except IOError as e:
            raise ArchiveReadError(f"Cannot read body of message {self.id()}: {e}")

        if raw is None:
            return self._string(PR_BODY)
        return decode_text(raw)

    def summary(self) -> str:
        lines = []
        kind = self.kind()
        for label, property_id in SUMMARY_PROPERTIES.get(kind, ()):
            value = self._string(property_id)
            if value:
                lines.append(f"{label}: {value}")
        for label, long_id in NAMED_SUMMARY_PROPERTIES.get(kind, ()):
            value = read_named_string_property(self._item, long_id)
            if value:
                lines.append(f"{label}: {value}")

        body = self.body()
        if body:
            lines.append(body)

        return "\n".join(lines)


class PffFolder(Folder):
    """Folder backed by a pypff folder item."""

    def __init__(self, pff_folder: Any):
        self._item = pff_folder

    def display_name(self) -> str:
        try:
            return self._item.name or ""
        except (IOError, SystemError) as e:
            raise ArchiveReadError(f"Cannot read folder name: {e}")

    def subfolders(self) -> List["PffFolder"]:
        try:
            return [PffFolder(child) for child in self._item.sub_folders]
        except IOError as e:
            raise ArchiveReadError(f"Cannot list subfolders: {e}")

    def content_count(self) -> int:
        try:
            return int(self._item.number_of_sub_messages)
        except IOError as e:
            raise ArchiveReadError(f"Cannot count folder messages: {e}")

    def messages(self) -> Iterator[PffMessage]:
        try:
            for pff_message in self._item.sub_messages:
                yield PffMessage(pff_message)
        except IOError as e:
            raise ArchiveReadError(f"Cannot iterate folder messages: {e}")


class PffArchive(Archive):
    """PST archive opened through pypff."""

    def __init__(self, pff_file: Any, archive_path: Path):
        self._file = pff_file
        self.archive_path = archive_path

    def display_name(self) -> str:
        try:
            store = self._file.get_message_store()
            name = read_string_property(store, PR_DISPLAY_NAME) if store else None
        except (IOError, ArchiveReadError) as e:
            logger.warning("message_store_unreadable", path=str(self.archive_path), error=str(e))
            name = None

        return name or self.archive_path.name

    def root_folder(self) -> PffFolder:
        try:
            return PffFolder(self._file.get_root_folder())
        except IOError as e:
            raise ArchiveReadError(f"Cannot read root folder of {self.archive_path}: {e}")

    def lookup_message(self, message_id: int) -> PffMessage:
        message = self._find_message(self.root_folder(), message_id)
        if message is None:
            raise MessageNotFoundError(
                f"No message with id {message_id} in {self.archive_path}"
            )
        return message

    def _find_message(self, folder: PffFolder, message_id: int) -> Optional[PffMessage]:
        """Depth-first search for a message identifier."""
        try:
            for message in folder.messages():
                if message.id() == message_id:
                    return message
            children = folder.subfolders()
        except ArchiveReadError as e:
            logger.warning("folder_unreadable_during_lookup", message_id=message_id, error=str(e))
            return None

        for child in children:
            found = self._find_message(child, message_id)
            if found is not None:
                return found

        return None

    def close(self) -> None:
        self._file.close()


def open_archive(archive_path: Path) -> PffArchive:
    """
    Open a PST file.

    Args:
        archive_path: Path to the PST file

    Returns:
        Opened PffArchive, to be closed by the caller

    Raises:
        ArchiveOpenError: If pypff is not installed or the file cannot be opened
    """
    try:
        import pypff
    except ImportError as e:
        raise ArchiveOpenError(
            f"pypff bindings are required to read PST files (pip install libpff-python-ratom): {e}"
        )

    pff_file = pypff.file()
    try:
        pff_file.open(str(archive_path))
    except Exception as e:
        raise ArchiveOpenError(f"Cannot open PST file {archive_path}: {e}")

    logger.debug("archive_opened", path=str(archive_path))
    return PffArchive(pff_file, archive_path)
