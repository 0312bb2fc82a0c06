"""
MSX flash cartridge layout policies for msxflash.

Mappers
-------
MapperMegaSCC   -- Konami SCC style MegaROM, banks written from slot 0.
MapperRC755     -- ESE RC755, banks written from slot 0.
MapperSimple64K -- single 64 KiB window of 8 banks; small ROMs start at
                   slot 2 (0x4000) unless an explicit start slot is given.

MegaSCC and RC755 differ only in how the hardware switches banks at run
time.  The flash image itself is laid out identically.
"""

from __future__ import annotations

import logging
from typing import Optional

from msxflash.core.errors import RangeError
from msxflash.core.mappers.mapper import Mapper
from msxflash.core.types import SIMPLE64K_WINDOW_BANKS, MapperType

logger = logging.getLogger(__name__)


class _LinearMapper(Mapper):
    """Mapper whose banks always start at slot 0."""

    def start_bank(self, bank_count: int, size_kib: int, hint: Optional[int] = None) -> int:
        self.check_hint(hint, bank_count)
        if hint is not None:
            logger.warning("%s ignores the start address hint (%d)", self.name, hint)
        return 0


class MapperMegaSCC(_LinearMapper):
    mapper_type = MapperType.MegaSCC


class MapperRC755(_LinearMapper):
    mapper_type = MapperType.RC755


class MapperSimple64K(Mapper):
    """64 KiB flat window, eight 8 KiB slots.

    Slots 0-1 (0x0000-0x3FFF) are left free when the ROM fits in 32 KiB,
    so the image starts at 0x4000 like a plain cartridge.
    """

    mapper_type = MapperType.Simple64K
    max_banks = SIMPLE64K_WINDOW_BANKS

    # ROMs up to this size default to slot 2
    AUTO_SMALL_KIB = 32
    AUTO_SMALL_START = 2

    def start_bank(self, bank_count: int, size_kib: int, hint: Optional[int] = None) -> int:
        window = self.max_banks
        self.check_hint(hint, bank_count)
        if hint is not None:
            if hint + bank_count > window:
                raise RangeError(
                    f"Simple64K: start {hint} + {bank_count} banks exceeds {window} banks",
                    start_bank=hint,
                    bank_count=bank_count,
                    limit=window,
                )
            return hint

        start = self.AUTO_SMALL_START if size_kib <= self.AUTO_SMALL_KIB else 0
        # Unreachable with the current thresholds.
        if start + bank_count > window:
            raise RangeError(
                f"Simple64K: auto start {start} + {bank_count} banks exceeds {window} banks; "
                "try a smaller ROM or pass an explicit start address",
                start_bank=start,
                bank_count=bank_count,
                limit=window,
            )
        logger.debug("Simple64K auto start: %d KiB ROM -> slot %d", size_kib, start)
        return start
