import os
import sys

import pytest

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from msxflash.core.types import BANK_SIZE


def make_rom(size: int) -> bytes:
    """ROM whose bytes identify their bank, so misplacements show up."""
    return bytes(((i // BANK_SIZE) * 16 + i) & 0x7F for i in range(size))


@pytest.fixture
def rom_factory():
    return make_rom


@pytest.fixture
def rom_file(tmp_path):
    def _write(size: int, name: str = "game.rom"):
        path = tmp_path / name
        path.write_bytes(make_rom(size))
        return path
    return _write
