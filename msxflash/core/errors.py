"""
Exception hierarchy for the msxflash layout engine.

Every error is fatal to the conversion in progress.  Nothing is retried and
no output is written once one of these has been raised.  I/O failures are
left as the builtin :class:`OSError` raised by the ROM bytes service.
"""

from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for all layout-engine failures."""


class ConfigError(ConversionError, ValueError):
    """Unsupported chip size, unknown mapper name or malformed start hint."""


class CapacityError(ConversionError):
    """The normalized ROM does not fit the chip or the mapper window."""

    def __init__(self, message: str, size: int, limit: int) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit


class RangeError(ConversionError):
    """A start bank would place data past the Simple64K 8-bank window."""

    def __init__(self, message: str, start_bank: int, bank_count: int, limit: int) -> None:
        super().__init__(message)
        self.start_bank = start_bank
        self.bank_count = bank_count
        self.limit = limit


class PlacementOverflowError(ConversionError, OverflowError):
    """A bank destination ran past the end of the output image.

    Only reachable when a mapper's start-bank rule and its capacity check
    disagree.
    """

    def __init__(self, message: str, bank: int, offset: int) -> None:
        super().__init__(message)
        self.bank = bank
        self.offset = offset


class VerifyMismatch(ConversionError):
    """The written image does not match the expected layout.

    Attributes:
        bank:   ROM bank index whose copy differs, or ``None`` when the
                offending byte lies in the erased (``0xFF``) area.
        offset: Absolute offset of the first differing byte in the image.
    """

    def __init__(self, message: str, offset: int, bank: Optional[int] = None) -> None:
        super().__init__(message)
        self.bank = bank
        self.offset = offset
