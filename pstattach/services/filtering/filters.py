"""Folder and message filter predicates.

Filters are plain callables taking the node under test and the configured
search text. The pass-through variants accept everything, so unfiltered
traversal uses the same code path as filtered traversal.
"""

from functools import partial
from typing import Callable, Optional

import structlog

from pstattach.config.extraction_config import ExtractionSettings
from pstattach.services.archive_reader.base import Folder, Message
from pstattach.utils.unicode_utils import contains_ignore_case
from .message_renderer import render_message

logger = structlog.get_logger()

FolderFilter = Callable[[Folder, Optional[str]], bool]
MessageFilter = Callable[[Message, Optional[str]], bool]


def pass_all_folders(folder: Folder, search_text: Optional[str]) -> bool:
    return True


def pass_all_messages(message: Message, search_text: Optional[str]) -> bool:
    return True


def folder_name_filter(folder: Folder, search_text: Optional[str]) -> bool:
    """
    Accept a folder whose display name contains search_text, ignoring case.

    Returns False for a blank search text or an unreadable display name.
    """
    if not search_text or not search_text.strip():
        return False

    try:
        return contains_ignore_case(folder.display_name(), search_text)
    except Exception:
        logger.exception("folder_display_name_unreadable")
        return False


def message_content_filter(
    message: Message,
    search_text: Optional[str],
    settings: Optional[ExtractionSettings] = None,
) -> bool:
    """
    Accept a message whose rendered text contains search_text, ignoring case.

    Returns False for a blank search text, blank rendered text, or any
    failure while rendering.
    """
    if not search_text or not search_text.strip():
        return False

    try:
        message_text = render_message(message, settings)
        if not message_text or not message_text.strip():
            return False
        return contains_ignore_case(message_text, search_text)
    except Exception:
        logger.exception("message_text_unreadable")
        return False


def build_folder_filter(search_text: Optional[str]) -> FolderFilter:
    """
    Return the folder name filter if search text is given, else pass-through.

    An empty search text still selects the name filter, which then accepts
    no folder.
    """
    if search_text is not None:
        return folder_name_filter
    return pass_all_folders


def build_message_filter(
    search_text: Optional[str], settings: Optional[ExtractionSettings] = None
) -> MessageFilter:
    """
    Return the message content filter if search text is given, else pass-through.

    An empty search text still selects the content filter, which then accepts
    no message.
    """
    if search_text is not None:
        return partial(message_content_filter, settings=settings)
    return pass_all_messages
