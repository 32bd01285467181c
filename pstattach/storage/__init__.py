"""Output storage layer"""

from .attachment_writer import AttachmentWriter, copy_stream

__all__ = ["AttachmentWriter", "copy_stream"]
