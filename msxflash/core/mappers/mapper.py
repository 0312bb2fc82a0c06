"""
Base Mapper class and factory for msxflash.

A mapper policy decides where the banks of a normalized ROM go inside a
flash image: how many banks the mapper can address at all, and which bank
slot the first ROM bank lands in.  The static ``create()`` factory maps
:class:`~msxflash.core.types.MapperType` values to concrete policies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from msxflash.core.errors import CapacityError, ConfigError, RangeError
from msxflash.core.types import BANK_SIZE, START_HINT_SLOTS, ChipSize, MapperType


class Mapper(ABC):
    """Abstract base class for all flash layout policies.

    Subclasses must implement :meth:`start_bank`.  Mappers with an
    addressing window narrower than the chip set ``max_banks``.

    Attributes:
        mapper_type: The :class:`MapperType` this policy implements.
        max_banks:   Hard bank limit of the mapper, or ``None`` when only
                     the chip capacity applies.
    """

    mapper_type: MapperType
    max_banks: Optional[int] = None

    # ------------------------------------------------------------------
    # Policy interface
    # ------------------------------------------------------------------

    def validate_capacity(self, rom_size: int, chip: ChipSize) -> None:
        """Reject a normalized ROM of *rom_size* bytes that cannot fit.

        Raises:
            CapacityError: If the ROM exceeds the mapper window or the chip.
        """
        banks = rom_size // BANK_SIZE
        if self.max_banks is not None and banks > self.max_banks:
            raise CapacityError(
                f"ROM too large for {self.name} "
                f"({rom_size // 1024} KiB, max {self.max_banks * BANK_SIZE // 1024} KiB)",
                size=rom_size,
                limit=self.max_banks * BANK_SIZE,
            )
        if rom_size > chip.size_bytes:
            raise CapacityError(
                f"Input ROM (after 8 KiB padding) is {rom_size // 1024} KiB, "
                f"larger than the selected {chip.kib} KiB chip",
                size=rom_size,
                limit=chip.size_bytes,
            )

    def check_hint(self, hint: Optional[int], bank_count: int) -> None:
        """Reject a start hint outside slots 0..7, whatever the mapper.

        Raises:
            RangeError: If *hint* is given and out of range.
        """
        if hint is not None and not 0 <= hint < START_HINT_SLOTS:
            raise RangeError(
                f"start address {hint} out of range 0..{START_HINT_SLOTS - 1}",
                start_bank=hint,
                bank_count=bank_count,
                limit=START_HINT_SLOTS,
            )

    @abstractmethod
    def start_bank(self, bank_count: int, size_kib: int, hint: Optional[int] = None) -> int:
        """Return the output bank slot that receives ROM bank 0."""
        ...

    @property
    def name(self) -> str:
        return self.mapper_type.name

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def create(mapper_type: MapperType) -> "Mapper":
        """Create the policy object for *mapper_type*.

        Raises:
            ConfigError: If *mapper_type* is unknown.
        """
        # Lazy import keeps the base module free of the concrete policies.
        from msxflash.core.mappers.mapper_msx import MapperMegaSCC, MapperRC755, MapperSimple64K

        _mapper_map = {
            MapperType.MegaSCC: MapperMegaSCC,
            MapperType.RC755: MapperRC755,
            MapperType.Simple64K: MapperSimple64K,
        }

        cls = _mapper_map.get(mapper_type)
        if cls is None:
            raise ConfigError(f"Unknown or unsupported mapper type: {mapper_type!r}")

        return cls()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(max_banks={self.max_banks})"
