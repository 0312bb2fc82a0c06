"""
Layout engine: turns a raw MSX ROM into a flash chip image.

Typical usage::

    result = convert(rom_bytes, 128, MapperType.MegaSCC)
    verify(result.output, result.rom, result.start_bank, result.bank_count)
"""

from msxflash.core.errors import (
    CapacityError,
    ConfigError,
    ConversionError,
    PlacementOverflowError,
    RangeError,
    VerifyMismatch,
)
from msxflash.core.flash_image import ConversionResult, FlashImage, convert, plan
from msxflash.core.layout import bank_count, normalize
from msxflash.core.types import BANK_SIZE, FILL_BYTE, ChipSize, MapperType
from msxflash.core.verifier import verify

__all__ = [
    "BANK_SIZE",
    "FILL_BYTE",
    "CapacityError",
    "ChipSize",
    "ConfigError",
    "ConversionError",
    "ConversionResult",
    "FlashImage",
    "MapperType",
    "PlacementOverflowError",
    "RangeError",
    "VerifyMismatch",
    "bank_count",
    "convert",
    "normalize",
    "plan",
    "verify",
]
