"""Attachment extraction services."""

from .extraction_engine import ExtractionContext, ExtractionEngine

__all__ = ["ExtractionContext", "ExtractionEngine"]
