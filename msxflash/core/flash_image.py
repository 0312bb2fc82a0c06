"""
Flash image builder for msxflash.

:func:`convert` runs the whole layout pipeline over in-memory buffers::

    normalize -> validate capacity -> resolve start bank -> place

Capacity and start-bank checks all complete before the output buffer is
allocated, so a failed conversion never produces a partial image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from msxflash.core import layout
from msxflash.core.errors import ConfigError, PlacementOverflowError
from msxflash.core.mappers import Mapper
from msxflash.core.types import BANK_SIZE, FILL_BYTE, ChipSize, MapperType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion."""

    output: bytes
    start_bank: int
    bank_count: int
    mapper_type: MapperType
    chip: ChipSize
    rom: bytes  # normalized input, as placed

    @property
    def placed_span(self) -> tuple[int, int]:
        return layout.placed_span(self.start_bank, self.bank_count)

    def summary(self) -> str:
        return (
            f"Type: {self.mapper_type.name}, chip: {self.chip.kib} KiB, "
            f"banks written: {self.bank_count}, start bank: {self.start_bank}, "
            f"bank size: {BANK_SIZE // 1024} KiB"
        )


def resolve_chip(chip: Union[ChipSize, int]) -> ChipSize:
    """Turn a KiB count into a :class:`ChipSize`, rejecting unsupported sizes."""
    if isinstance(chip, ChipSize):
        return chip
    if not ChipSize.is_supported(chip):
        raise ConfigError(f"Unsupported chip size {chip} KiB (use 64, 128, 256, or 512)")
    return ChipSize(chip)


def resolve_mapper(mapper: Union[MapperType, int, str]) -> MapperType:
    """Turn a mapper value, name or alias into a :class:`MapperType`."""
    if isinstance(mapper, MapperType):
        return mapper
    try:
        if isinstance(mapper, int):
            return MapperType(mapper)
        return MapperType.from_name(mapper)
    except (KeyError, ValueError, AttributeError):
        raise ConfigError(f"Unknown mapper type {mapper!r} (use mega|rc755|s64k)") from None


class FlashImage:
    """Erased output buffer sized to a flash chip."""

    def __init__(self, chip: ChipSize) -> None:
        self.chip = chip
        self.data = bytearray([FILL_BYTE]) * chip.size_bytes

    def place(self, rom: bytes, start_bank: int) -> int:
        """Copy every bank of the normalized *rom* from slot *start_bank* on.

        Returns:
            The number of banks written.

        Raises:
            PlacementOverflowError: If a bank would run past the image end.
        """
        banks = layout.bank_count(rom)
        for bank, src, dst in layout.placed_banks(start_bank, banks):
            if dst + BANK_SIZE > len(self.data):
                raise PlacementOverflowError(
                    f"Output overflow: bank {bank} at 0x{dst:05X} exceeds "
                    f"the {self.chip.kib} KiB chip",
                    bank=bank,
                    offset=dst,
                )
            self.data[dst:dst + BANK_SIZE] = rom[src:src + BANK_SIZE]
            logger.debug("Bank %d -> slot %d (0x%05X)", bank, start_bank + bank, dst)
        return banks

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return f"FlashImage(chip={self.chip.name}, size={len(self.data)})"


def plan(
    rom_bytes: bytes,
    chip: Union[ChipSize, int],
    mapper: Union[MapperType, int, str],
    start_hint: Optional[int] = None,
) -> tuple[bytes, int, Mapper, ChipSize]:
    """Normalize and validate, returning ``(rom, start_bank, mapper, chip)``.

    Touches no output buffer; every validation failure is raised from here.
    """
    chip = resolve_chip(chip)
    policy = Mapper.create(resolve_mapper(mapper))

    rom = layout.normalize(rom_bytes)
    banks = layout.bank_count(rom)
    policy.validate_capacity(len(rom), chip)
    start = policy.start_bank(banks, layout.size_kib(rom), start_hint)
    logger.info("%s: %d bank(s), start bank %d, chip %s", policy.name, banks, start, chip.name)
    return rom, start, policy, chip


def convert(
    rom_bytes: bytes,
    chip: Union[ChipSize, int],
    mapper: Union[MapperType, int, str],
    start_hint: Optional[int] = None,
) -> ConversionResult:
    """Lay out *rom_bytes* for *mapper* on a flash chip of *chip* KiB.

    Parameters:
        rom_bytes:  Raw ROM image (any length).
        chip:       Chip capacity in KiB (64, 128, 256 or 512) or a ChipSize.
        mapper:     MapperType or a command-line name such as ``"s64k"``.
        start_hint: Explicit start slot, honoured by Simple64K only.

    Raises:
        ConfigError, CapacityError, RangeError, PlacementOverflowError
    """
    rom, start, policy, chip = plan(rom_bytes, chip, mapper, start_hint)
    image = FlashImage(chip)
    banks = image.place(rom, start)
    return ConversionResult(
        output=image.to_bytes(),
        start_bank=start,
        bank_count=banks,
        mapper_type=policy.mapper_type,
        chip=chip,
        rom=rom,
    )
