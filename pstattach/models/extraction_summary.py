"""Extraction run summary data model."""

from dataclasses import dataclass


@dataclass
class ExtractionSummary:
    """
    Counters collected during one extraction run.

    Attributes:
        folders_visited: Folders whose messages were examined
        messages_matched: Messages accepted by the message filter
        messages_with_attachments: Matched messages carrying at least one attachment
        attachments_written: Attachment files fully written to disk
        attachment_failures: Messages whose attachment batch hit an error
    """

    folders_visited: int = 0
    messages_matched: int = 0
    messages_with_attachments: int = 0
    attachments_written: int = 0
    attachment_failures: int = 0

    def merge(self, other: "ExtractionSummary") -> None:
        """Add the counters of another summary to this one."""
        self.folders_visited += other.folders_visited
        self.messages_matched += other.messages_matched
        self.messages_with_attachments += other.messages_with_attachments
        self.attachments_written += other.attachments_written
        self.attachment_failures += other.attachment_failures

    def as_dict(self) -> dict:
        """Return the counters as a plain dict for logging."""
        return {
            "folders_visited": self.folders_visited,
            "messages_matched": self.messages_matched,
            "messages_with_attachments": self.messages_with_attachments,
            "attachments_written": self.attachments_written,
            "attachment_failures": self.attachment_failures,
        }
