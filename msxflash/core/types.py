"""
Core enumerations and type definitions for msxflash.
MapperType, ChipSize and the bank geometry shared by the layout engine.
"""

from enum import IntEnum


BANK_SIZE: int = 0x2000  # 8 KiB
FILL_BYTE: int = 0xFF  # erased flash

# Simple64K exposes a single 64 KiB window of 8 banks.
SIMPLE64K_WINDOW_BANKS: int = 8

# --addr selects one of the eight 8 KiB slots of the first 64 KiB.
START_HINT_SLOTS: int = 8


class MapperType(IntEnum):
    MegaSCC = 0
    RC755 = 1
    Simple64K = 2

    @staticmethod
    def from_name(name):
        """Resolve a command-line mapper name (or alias) to a MapperType.

        Raises:
            KeyError: If *name* is not a known mapper or alias.
        """
        key = name.strip().lower()
        if key not in _MAPPER_ALIASES:
            raise KeyError(name)
        return _MAPPER_ALIASES[key]


_MAPPER_ALIASES: dict[str, MapperType] = {
    "mega": MapperType.MegaSCC,
    "scc": MapperType.MegaSCC,
    "megascc": MapperType.MegaSCC,
    "rc755": MapperType.RC755,
    "s64k": MapperType.Simple64K,
    "simple64k": MapperType.Simple64K,
}

MAPPER_CHOICES: tuple[str, ...] = tuple(_MAPPER_ALIASES)


class ChipSize(IntEnum):
    """Supported flash chip capacities, valued in KiB."""

    SST39SF512 = 64
    SST39SF010 = 128
    SST39SF020 = 256
    SST39SF040 = 512

    @property
    def kib(self) -> int:
        return int(self.value)

    @property
    def size_bytes(self) -> int:
        return self.value * 1024

    @staticmethod
    def is_supported(kib):
        return any(kib == c.value for c in ChipSize)


DEFAULT_CHIP: ChipSize = ChipSize.SST39SF010
DEFAULT_MAPPER: MapperType = MapperType.MegaSCC
