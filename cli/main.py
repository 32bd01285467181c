"""Main CLI entry point for pstattach."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from pstattach.config.config_loader import ConfigError, ConfigLoader
from pstattach.logging import setup_logging
from pstattach.services.archive_reader import ArchiveError, MessageNotFoundError, open_archive
from pstattach.services.extraction import ExtractionContext, ExtractionEngine
from pstattach.services.filtering import build_folder_filter, build_message_filter
from pstattach.utils.path_utils import is_readable_file, is_writable_directory, parse_message_id

logger = structlog.get_logger()

ALL_MESSAGES = "ALL"

EPILOG = """\
examples:
  pst-attach mailbox.pst ALL ./out                 all attachments of all messages
  pst-attach mailbox.pst ALL ./out -fInvoices      only below folders named *invoices*
  pst-attach mailbox.pst ALL ./out -m"order 4711"  only messages mentioning "order 4711"
  pst-attach mailbox.pst 2097252 ./out             attachments of one message
"""


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> UsageArgumentParser:
    """Create the command line parser."""
    parser = UsageArgumentParser(
        prog="pst-attach",
        description="Extract attachments from an Outlook PST archive.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("archive", type=Path, help="Path to a readable PST file")
    parser.add_argument(
        "target",
        help="A message id, or ALL to export the attachments of all messages",
    )
    parser.add_argument("output_dir", type=Path, help="Writable directory receiving the files")
    parser.add_argument(
        "-f",
        dest="folder_text",
        nargs="?",
        const="",
        metavar="TEXT",
        help="Text that must be part of a folder's display name (with ALL); a bare -f matches no folder",
    )
    parser.add_argument(
        "-m",
        dest="message_text",
        nargs="?",
        const="",
        metavar="TEXT",
        help="Text that must be part of the message text (with ALL); a bare -m matches no message",
    )
    parser.add_argument("--config", type=Path, help="Custom config file path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run an extraction from command line arguments.

    Args:
        argv: Arguments without program name (default: sys.argv[1:])

    Returns:
        Process exit status

    Raises:
        SystemExit: With status 1 on invalid arguments or configuration
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigLoader(args.config).load_app_config()
    except (ConfigError, FileNotFoundError) as e:
        parser.error(str(e))

    setup_logging(config.logging, verbose=args.verbose)

    if not is_readable_file(args.archive):
        parser.error(f"given path <{args.archive}> seems not to be a readable pst file")

    command = args.target.strip().upper()
    message_id = None
    if command != ALL_MESSAGES:
        try:
            message_id = parse_message_id(args.target)
        except ValueError:
            parser.error(f"given message id <{args.target}> is not a number")

    if not is_writable_directory(args.output_dir):
        parser.error(f"given path <{args.output_dir}> is not writeable or no directory")

    settings = config.extraction
    context = ExtractionContext(
        output_dir=args.output_dir,
        folder_search_text=args.folder_text,
        message_search_text=args.message_text,
        folder_filter=build_folder_filter(args.folder_text),
        message_filter=build_message_filter(args.message_text, settings),
        settings=settings,
    )

    try:
        archive = open_archive(args.archive)
    except ArchiveError as e:
        logger.error("archive_open_failed", path=str(args.archive), error=str(e))
        return 1

    with archive:
        engine = ExtractionEngine(context)
        try:
            if message_id is None:
                logger.info("exporting_all_attachments", output_dir=str(args.output_dir))
                summary = engine.extract_archive(archive)
            else:
                summary = engine.extract_message(archive, message_id)
        except MessageNotFoundError as e:
            logger.error("message_not_found", message_id=message_id, error=str(e))
            return 1
        except ArchiveError as e:
            logger.error("extraction_failed", path=str(args.archive), error=str(e))
            return 1

    logger.info("extraction_finished", **summary.as_dict())
    return 0


def main():
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
