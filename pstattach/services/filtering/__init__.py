"""Folder and message filtering services."""

from .filters import (
    FolderFilter,
    MessageFilter,
    build_folder_filter,
    build_message_filter,
    folder_name_filter,
    message_content_filter,
    pass_all_folders,
    pass_all_messages,
)
from .message_renderer import render_message

__all__ = [
    "FolderFilter",
    "MessageFilter",
    "build_folder_filter",
    "build_message_filter",
    "folder_name_filter",
    "message_content_filter",
    "pass_all_folders",
    "pass_all_messages",
    "render_message",
]
