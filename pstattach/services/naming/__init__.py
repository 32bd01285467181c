"""Attachment naming services."""

from .naming_resolver import NamingResolver, NamingRule, prefix_with_message_id

__all__ = ["NamingResolver", "NamingRule", "prefix_with_message_id"]
