"""
Bank geometry helpers for the msxflash layout engine.

An input ROM is treated as a sequence of 8 KiB banks.  Before anything else
it is padded with the erased-flash value (``0xFF``) up to the next bank
boundary; from then on it is never modified.  A placement maps ROM bank
``i`` to output bank slot ``start_bank + i``::

    ROM:    | b0 | b1 | b2 |
    image:  | FF | FF | b0 | b1 | b2 | FF | FF | FF |   (start_bank = 2)
"""

from __future__ import annotations

import logging
from typing import Iterator

from msxflash.core.types import BANK_SIZE, FILL_BYTE

logger = logging.getLogger(__name__)


def normalize(rom_bytes: bytes) -> bytes:
    """Pad *rom_bytes* with ``0xFF`` to a whole number of banks.

    Already aligned input (including the empty image) is returned unchanged,
    so ``normalize(normalize(x)) == normalize(x)``.
    """
    remainder = len(rom_bytes) % BANK_SIZE
    if remainder == 0:
        return bytes(rom_bytes)
    pad = BANK_SIZE - remainder
    logger.debug("Padding ROM from %d to %d bytes", len(rom_bytes), len(rom_bytes) + pad)
    return bytes(rom_bytes) + bytes([FILL_BYTE]) * pad


def bank_count(normalized: bytes) -> int:
    return len(normalized) // BANK_SIZE


def size_kib(normalized: bytes) -> int:
    return len(normalized) // 1024


def bank_offset(bank: int) -> int:
    """Byte offset of bank slot *bank* in an image."""
    return bank * BANK_SIZE


def placed_banks(start_bank: int, banks: int) -> Iterator[tuple[int, int, int]]:
    """Yield ``(rom_bank, src_offset, dst_offset)`` for every placed bank."""
    for bank in range(banks):
        yield bank, bank_offset(bank), bank_offset(start_bank + bank)


def placed_span(start_bank: int, banks: int) -> tuple[int, int]:
    """Return the ``[begin, end)`` byte range covered by the placed banks."""
    return bank_offset(start_bank), bank_offset(start_bank + banks)
