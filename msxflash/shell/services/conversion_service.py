"""
File-level conversion service for msxflash.

Wires the layout engine to the file system: read a ROM, lay it out, write
the flash image and optionally read it back for verification.

Typical usage::

    result = ConversionService.convert_file("game.rom", "game.bin")
    result = ConversionService.convert_file(
        "game.rom", "game.bin", chip=64, mapper="s64k", start_hint=4, verify=True
    )
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from msxflash.core import layout
from msxflash.core.flash_image import ConversionResult, convert, plan
from msxflash.core.types import BANK_SIZE, DEFAULT_CHIP, DEFAULT_MAPPER, ChipSize, MapperType
from msxflash.core.verifier import verify as verify_image
from msxflash.shell.services.rom_bytes_service import RomBytesService

logger = logging.getLogger(__name__)


class ConversionService:
    """Convert ROM files into flash images."""

    @staticmethod
    def convert_file(
        rom_path: str,
        out_path: str,
        chip: Union[ChipSize, int] = DEFAULT_CHIP,
        mapper: Union[MapperType, str] = DEFAULT_MAPPER,
        start_hint: Optional[int] = None,
        verify: bool = False,
    ) -> ConversionResult:
        """Convert *rom_path* and write the image to *out_path*.

        Parameters
        ----------
        rom_path:
            Raw MSX ROM image.
        out_path:
            Destination for the flash image.  Only written once every
            layout check has passed.
        chip:
            Chip capacity in KiB or a :class:`ChipSize`.
        mapper:
            :class:`MapperType` or a command-line alias (``mega``, ``rc755``,
            ``s64k`` ...).
        start_hint:
            Simple64K start slot (0..7).  ``None`` selects automatically.
        verify:
            Re-read *out_path* after writing and check it byte for byte.

        Raises
        ------
        OSError
            If the ROM cannot be read or the image cannot be written.
        ConversionError
            Any layout or verification failure.
        """
        rom_bytes = RomBytesService.read(rom_path)
        result = convert(rom_bytes, chip, mapper, start_hint)
        RomBytesService.write(out_path, result.output)

        if verify:
            written = RomBytesService.read_back(out_path, len(result.output))
            verify_image(
                written, result.rom, result.start_bank, result.bank_count, result.chip.size_bytes
            )
            logger.info("Verified %s", out_path)

        return result

    @staticmethod
    def describe(
        rom_path: str,
        chip: Union[ChipSize, int] = DEFAULT_CHIP,
        mapper: Union[MapperType, str] = DEFAULT_MAPPER,
        start_hint: Optional[int] = None,
    ) -> dict[str, str]:
        """Return the layout a conversion would produce, without writing.

        Returns a dict with keys: ``rom``, ``rom_size``, ``padded_size``,
        ``mapper``, ``chip``, ``banks``, ``start_bank`` and one ``slot_N``
        entry per placed bank.
        """
        rom_bytes = RomBytesService.read(rom_path)
        rom, start, policy, chip = plan(rom_bytes, chip, mapper, start_hint)
        banks = layout.bank_count(rom)

        info = {
            "rom": os.path.basename(rom_path),
            "rom_size": f"{len(rom_bytes)} bytes",
            "padded_size": f"{len(rom)} bytes ({banks} x {BANK_SIZE // 1024} KiB)",
            "mapper": policy.name,
            "chip": f"{chip.kib} KiB ({chip.name})",
            "banks": str(banks),
            "start_bank": str(start),
        }
        for bank, src, dst in layout.placed_banks(start, banks):
            info[f"slot_{start + bank}"] = (
                f"ROM 0x{src:05X}-0x{src + BANK_SIZE - 1:05X} -> "
                f"flash 0x{dst:05X}-0x{dst + BANK_SIZE - 1:05X}"
            )
        return info
