"""Render archive messages to searchable text."""

from typing import Callable, Dict, Optional

import structlog

from pstattach.config.extraction_config import ExtractionSettings
from pstattach.models.message_kind import MessageKind
from pstattach.services.archive_reader.base import ArchiveError, Message

logger = structlog.get_logger()

Renderer = Callable[[Message, ExtractionSettings], str]


def _read_field(message: Message, name: str, reader: Callable[[], str]) -> str:
    """Read one field, logging failures and substituting an empty string."""
    try:
        return reader() or ""
    except ArchiveError as e:
        logger.warning("message_field_unreadable", message_id=_safe_id(message), field=name, error=str(e))
        return ""


def _safe_id(message: Message) -> Optional[int]:
    try:
        return message.id()
    except ArchiveError:
        return None


def render_summary(message: Message, settings: ExtractionSettings) -> str:
    """Render a non-plain item through its native summary."""
    return _read_field(message, "summary", message.summary)


def render_plain(message: Message, settings: ExtractionSettings) -> str:
    """
    Render a plain message as newline-joined header, body and attachment names.

    The attachment name at index 0 is left out unless
    ``settings.render_first_attachment_name`` is set.
    """
    fields = [
        _read_field(message, "subject", message.subject),
        _read_field(message, "display_to", message.display_to),
        _read_field(
            message, "sent_representing_email_address", message.sent_representing_email_address
        ),
        _read_field(message, "display_cc", message.display_cc),
        _read_field(message, "display_bcc", message.display_bcc),
        _read_field(message, "sender_email_address", message.sender_email_address),
        _read_field(message, "sender_name", message.sender_name),
        _read_field(message, "body", message.body),
    ]

    try:
        attachment_count = message.attachment_count()
    except ArchiveError as e:
        logger.warning("attachment_count_unreadable", message_id=_safe_id(message), error=str(e))
        attachment_count = 0

    first_index = 0 if settings.render_first_attachment_name else 1
    for index in range(first_index, attachment_count):
        try:
            fields.append(message.attachment(index).declared_filename())
        except ArchiveError as e:
            logger.warning(
                "attachment_filename_unreadable",
                message_id=_safe_id(message),
                index=index,
                error=str(e),
            )
            fields.append("")

    return "\n".join(fields)


RENDERERS: Dict[MessageKind, Renderer] = {
    MessageKind.PLAIN: render_plain,
    MessageKind.CONTACT: render_summary,
    MessageKind.APPOINTMENT: render_summary,
    MessageKind.TASK: render_summary,
    MessageKind.ACTIVITY: render_summary,
    MessageKind.FEED: render_summary,
}


def render_message(
    message: Optional[Message], settings: Optional[ExtractionSettings] = None
) -> Optional[str]:
    """
    Render a message to text for content searches.

    Args:
        message: Message to render (may be None)
        settings: Extraction settings, defaults if omitted

    Returns:
        Rendered text, or None when there is no message

    Raises:
        ArchiveError: If the message kind cannot be determined
    """
    if message is None:
        return None

    settings = settings or ExtractionSettings()
    renderer = RENDERERS[message.kind()]
    return renderer(message, settings)
