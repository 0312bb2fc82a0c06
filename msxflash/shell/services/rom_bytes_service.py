"""
ROM and flash image file access for msxflash.

Responsibilities:
  - Read a raw ROM image from disk.
  - Write a finished flash image to disk.
  - Read a written image back for verification.

Nothing here interprets the bytes; failures surface as :class:`OSError`
carrying the offending path.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class RomBytesService:
    """Static utility for loading ROM files and storing flash images."""

    @staticmethod
    def read(path: str) -> bytes:
        """Read the whole file at *path*.

        Raises:
            FileNotFoundError: If *path* does not exist.
            OSError: On general I/O failure.
        """
        with open(path, "rb") as fh:
            data = fh.read()
        logger.info("Read %d bytes from %s", len(data), path)
        return data

    @staticmethod
    def write(path: str, data: bytes) -> None:
        """Write *data* to *path*, truncating any existing file.

        Raises:
            OSError: If the file cannot be created or fully written.
        """
        with open(path, "wb") as fh:
            written = fh.write(data)
        if written != len(data):
            raise OSError(f"Failed to write output file fully: {path} ({written}/{len(data)} bytes)")
        logger.info("Wrote %d bytes to %s", len(data), path)

    @staticmethod
    def read_back(path: str, expected_size: int) -> bytes:
        """Re-read a written image, failing if it came back short."""
        data = RomBytesService.read(path)
        if len(data) < expected_size:
            raise OSError(
                f"failed to read output back: {path} ({len(data)}/{expected_size} bytes)"
            )
        return data
