"""Data models for attachment extraction"""

from .extraction_summary import ExtractionSummary
from .message_kind import MessageKind

__all__ = [
    "ExtractionSummary",
    "MessageKind",
]
