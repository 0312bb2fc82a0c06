"""
Post-write verification of a flash image.

Checks, without modifying anything, that

1. each placed slot holds an exact copy of its ROM bank, and
2. every byte outside the placed slots is still erased (``0xFF``).

The comparison runs on numpy views of the two buffers rather than byte by
byte in Python; a 512 KiB image is checked in a handful of vector ops.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from msxflash.core import layout
from msxflash.core.errors import VerifyMismatch
from msxflash.core.types import BANK_SIZE, FILL_BYTE, ChipSize

logger = logging.getLogger(__name__)


def verify(
    output: bytes,
    rom: bytes,
    start_bank: int,
    bank_count: int,
    image_size: Optional[int] = None,
) -> None:
    """Check *output* against the layout of the normalized *rom*.

    *image_size* is the expected chip size in bytes.  When omitted, the
    image must be exactly one of the supported chip sizes.

    Raises:
        VerifyMismatch: On a wrong image size, the first offending bank or
            the first non-erased byte outside the placed banks.
    """
    image = np.frombuffer(output, dtype=np.uint8)
    _check_size(image.size, image_size)
    source = np.frombuffer(rom, dtype=np.uint8)[: bank_count * BANK_SIZE]
    begin, end = layout.placed_span(start_bank, bank_count)

    if end > image.size:
        raise VerifyMismatch(
            f"verify: image is {image.size} bytes, placed banks need {end}",
            offset=image.size,
            bank=max(0, image.size - begin) // BANK_SIZE,
        )

    diff = np.flatnonzero(image[begin:end] != source)
    if diff.size:
        first = int(diff[0])
        bank = first // BANK_SIZE
        raise VerifyMismatch(
            f"verify: mismatch in bank {bank} at offset 0x{begin + first:05X}",
            offset=begin + first,
            bank=bank,
        )

    for lo, hi in ((0, begin), (end, image.size)):
        dirty = np.flatnonzero(image[lo:hi] != FILL_BYTE)
        if dirty.size:
            offset = lo + int(dirty[0])
            raise VerifyMismatch(
                f"verify: non-0xFF byte 0x{int(image[offset]):02X} found outside "
                f"written area at offset 0x{offset:05X}",
                offset=offset,
            )

    logger.debug("verify: %d bank(s) from slot %d OK", bank_count, start_bank)


def _check_size(size: int, expected: Optional[int]) -> None:
    if expected is not None:
        if size != expected:
            raise VerifyMismatch(
                f"verify: image is {size} bytes, expected {expected}",
                offset=min(size, expected),
            )
        return
    chip_sizes = [chip.size_bytes for chip in ChipSize]
    if size not in chip_sizes:
        raise VerifyMismatch(
            f"verify: image is {size} bytes, not a supported chip size",
            offset=size,
        )
