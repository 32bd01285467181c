"""Recursive traversal and attachment extraction."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import structlog

from pstattach.config.extraction_config import ExtractionSettings
from pstattach.models.extraction_summary import ExtractionSummary
from pstattach.services.archive_reader.base import (
    Archive,
    ArchiveError,
    Folder,
    Message,
)
from pstattach.services.filtering.filters import (
    FolderFilter,
    MessageFilter,
    pass_all_folders,
    pass_all_messages,
)
from pstattach.services.naming.naming_resolver import NamingResolver
from pstattach.storage.attachment_writer import AttachmentWriter

logger = structlog.get_logger()


@dataclass
class ExtractionContext:
    """
    Configuration of one extraction run.

    Attributes:
        output_dir: Directory receiving the attachment files
        folder_search_text: Text handed to the folder filter
        message_search_text: Text handed to the message filter
        folder_filter: Decides whether to descend into a child folder
        message_filter: Decides whether to extract a message's attachments
        settings: Buffer size, naming and compatibility switches
    """

    output_dir: Path
    folder_search_text: Optional[str] = None
    message_search_text: Optional[str] = None
    folder_filter: FolderFilter = pass_all_folders
    message_filter: MessageFilter = pass_all_messages
    settings: ExtractionSettings = field(default_factory=ExtractionSettings)


class ExtractionEngine:
    """
    Walk an archive's folder tree and save attachments of matching messages.

    Subfolders are visited before the current folder's messages. Errors on a
    single folder or message are logged and skipped; the run goes on.
    """

    def __init__(self, context: ExtractionContext, naming_resolver: Optional[NamingResolver] = None):
        """
        Initialize engine.

        Args:
            context: Run configuration
            naming_resolver: Optional custom resolver (default: message id prefix)
        """
        self.context = context
        self.naming_resolver = naming_resolver or NamingResolver(
            separator=context.settings.name_separator
        )
        self.writer = AttachmentWriter(context.output_dir, context.settings.buffer_size)

    def extract_archive(self, archive: Archive) -> ExtractionSummary:
        """
        Extract attachments from every accepted message of the archive.

        Args:
            archive: Opened archive

        Returns:
            ExtractionSummary of the run

        Raises:
            ArchiveError: If the root folder cannot be read
        """
        logger.info("processing_archive", archive=archive.display_name())
        return self.extract_folder(archive.root_folder())

    def extract_folder(self, folder: Folder) -> ExtractionSummary:
        """
        Recursively extract attachments below and inside folder.

        Args:
            folder: Folder to process

        Returns:
            ExtractionSummary for the folder subtree

        Notes:
            - With folder_filter_target "parent" (default) the folder filter
              is asked about ``folder`` itself for every child, so a matching
              folder opens all of its children and a non-matching one none
            - With "child" the filter is asked about each child
        """
        summary = ExtractionSummary()
        context = self.context
        filter_parent = context.settings.folder_filter_target == "parent"

        try:
            children = folder.subfolders()
        except ArchiveError as e:
            logger.warning("subfolders_unreadable", error=str(e))
            children = []

        for child in children:
            target = folder if filter_parent else child
            if context.folder_filter(target, context.folder_search_text):
                summary.merge(self.extract_folder(child))

        summary.folders_visited += 1

        try:
            if folder.content_count() > 0:
                for message in folder.messages():
                    if context.message_filter(message, context.message_search_text):
                        summary.messages_matched += 1
                        summary.merge(self.save_attachments(message))
        except ArchiveError as e:
            logger.warning("folder_messages_unreadable", error=str(e))

        return summary

    def extract_message(self, archive: Archive, message_id: int) -> ExtractionSummary:
        """
        Extract the attachments of a single message, bypassing traversal.

        Args:
            archive: Opened archive
            message_id: Identifier of the message

        Returns:
            ExtractionSummary for the message

        Raises:
            MessageNotFoundError: If the id does not resolve to a message
        """
        message = archive.lookup_message(message_id)
        summary = self.save_attachments(message)
        summary.messages_matched += 1
        return summary

    def save_attachments(self, message: Optional[Message]) -> ExtractionSummary:
        """
        Write all attachments of message into the output directory.

        Args:
            message: Message whose attachments are saved (None is ignored)

        Returns:
            ExtractionSummary with written/failed counters

        Notes:
            - Output names come from the naming resolver, built once for
              the whole message
            - On the first read or write error the remaining attachments of
              the message are skipped; files already written are kept
        """
        summary = ExtractionSummary()
        if message is None:
            return summary

        message_id = None
        try:
            message_id = message.id()
            attachment_count = message.attachment_count()
            if attachment_count == 0:
                return summary

            summary.messages_with_attachments += 1
            attachments = [message.attachment(index) for index in range(attachment_count)]
            names = self.naming_resolver.resolve(
                message_id, [attachment.declared_filename() for attachment in attachments]
            )

            for index, attachment in enumerate(attachments):
                filename = names[index]
                if not filename:
                    filename = attachment.short_filename()

                path = self.writer.write(attachment.open_stream(), filename)
                summary.attachments_written += 1
                logger.debug("attachment_written", message_id=message_id, index=index, path=str(path))

        except OSError:
            summary.attachment_failures += 1
            logger.exception("attachment_write_failed", message_id=message_id)
        except ArchiveError:
            summary.attachment_failures += 1
            logger.exception("attachment_read_failed", message_id=message_id)

        return summary
