"""Message kind data model."""

from enum import Enum
from typing import Optional


class MessageKind(Enum):
    """Variant of a PST item, derived from its message class."""

    PLAIN = "plain"
    CONTACT = "contact"
    APPOINTMENT = "appointment"
    TASK = "task"
    ACTIVITY = "activity"
    FEED = "feed"

    @classmethod
    def from_message_class(cls, message_class: Optional[str]) -> "MessageKind":
        """
        Map a MAPI message class to a message kind.

        Args:
            message_class: PR_MESSAGE_CLASS value (e.g. "IPM.Contact")

        Returns:
            Matching MessageKind, PLAIN for unknown or missing classes

        Examples:
            >>> MessageKind.from_message_class("IPM.Appointment")
            <MessageKind.APPOINTMENT: 'appointment'>
            >>> MessageKind.from_message_class("IPM.Note")
            <MessageKind.PLAIN: 'plain'>
        """
        if not message_class:
            return cls.PLAIN

        normalized = message_class.strip().upper()
        for prefix, kind in _MESSAGE_CLASS_PREFIXES:
            if normalized == prefix or normalized.startswith(prefix + "."):
                return kind

        return cls.PLAIN


# Checked in order; IPM.Post.Rss must come before any shorter IPM.Post rule.
_MESSAGE_CLASS_PREFIXES = (
    ("IPM.CONTACT", MessageKind.CONTACT),
    ("IPM.ABCHPERSON", MessageKind.CONTACT),
    ("IPM.APPOINTMENT", MessageKind.APPOINTMENT),
    # Meeting requests, responses and cancellations
    ("IPM.SCHEDULE.MEETING", MessageKind.APPOINTMENT),
    # Appointment class written by older Outlook versions
    ("IPM.OLE.CLASS.{00061055-0000-0000-C000-000000000046}", MessageKind.APPOINTMENT),
    ("IPM.TASK", MessageKind.TASK),
    ("IPM.ACTIVITY", MessageKind.ACTIVITY),
    ("IPM.POST.RSS", MessageKind.FEED),
)
