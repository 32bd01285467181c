"""Stream attachment data to files on disk."""

from pathlib import Path
from typing import BinaryIO

from pstattach.config.extraction_config import DEFAULT_BUFFER_SIZE


def copy_stream(source: BinaryIO, destination: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> int:
    """
    Copy source to destination in fixed-size chunks.

    Args:
        source: Readable binary stream
        destination: Writable binary stream
        buffer_size: Bytes requested per read

    Returns:
        Number of bytes copied

    Notes:
        - Copying stops on an empty read, not on a short one, so a final
          chunk of exactly buffer_size bytes is copied like any other
    """
    total = 0
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            break
        destination.write(chunk)
        total += len(chunk)
    return total


class AttachmentWriter:
    """Write attachment streams into an output directory."""

    def __init__(self, output_dir: Path, buffer_size: int = DEFAULT_BUFFER_SIZE):
        """
        Initialize writer.

        Args:
            output_dir: Existing, writable directory receiving the files
            buffer_size: Copy buffer size in bytes
        """
        self.output_dir = output_dir
        self.buffer_size = buffer_size

    def target_path(self, filename: str) -> Path:
        return self.output_dir / filename

    def write(self, source: BinaryIO, filename: str) -> Path:
        """
        Copy source into output_dir/filename, overwriting any existing file.

        Args:
            source: Attachment stream; closed when the copy ends
            filename: Output filename

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be created or written
        """
        path = self.target_path(filename)
        with source, open(path, "wb") as destination:
            copy_stream(source, destination, self.buffer_size)
        return path
