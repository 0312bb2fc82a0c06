import pytest

from msxflash.core.errors import VerifyMismatch
from msxflash.core.flash_image import convert
from msxflash.core.types import BANK_SIZE, MapperType
from msxflash.core.verifier import verify

KIB = 1024


@pytest.mark.parametrize("size, chip, mapper, hint", [
    (0, 64, MapperType.MegaSCC, None),
    (1, 64, MapperType.MegaSCC, None),
    (128 * KIB, 128, MapperType.MegaSCC, None),
    (300 * KIB, 512, MapperType.RC755, None),
    (32 * KIB, 64, MapperType.Simple64K, None),
    (48 * KIB, 256, MapperType.Simple64K, None),
    (8 * KIB, 64, MapperType.Simple64K, 7),
])
def test_converted_image_verifies(size, chip, mapper, hint, rom_factory):
    result = convert(rom_factory(size), chip, mapper, hint)
    verify(result.output, result.rom, result.start_bank, result.bank_count)


def test_mismatch_in_bank(rom_factory):
    result = convert(rom_factory(32 * KIB), 64, MapperType.Simple64K)
    image = bytearray(result.output)
    bad = (2 + 1) * BANK_SIZE + 10
    image[bad] ^= 0x01

    with pytest.raises(VerifyMismatch) as excinfo:
        verify(bytes(image), result.rom, result.start_bank, result.bank_count)
    assert excinfo.value.bank == 1
    assert excinfo.value.offset == bad
    assert "bank 1" in str(excinfo.value)


def test_first_bad_bank_is_reported(rom_factory):
    result = convert(rom_factory(64 * KIB), 64, MapperType.MegaSCC)
    image = bytearray(result.output)
    image[5 * BANK_SIZE] ^= 0xFF
    image[3 * BANK_SIZE + 1] ^= 0xFF

    with pytest.raises(VerifyMismatch) as excinfo:
        verify(bytes(image), result.rom, 0, result.bank_count)
    assert excinfo.value.bank == 3


@pytest.mark.parametrize("offset", [0, 2 * BANK_SIZE - 1, 6 * BANK_SIZE, 64 * KIB - 1])
def test_non_erased_byte_outside_placed_banks(offset, rom_factory):
    result = convert(rom_factory(32 * KIB), 64, MapperType.Simple64K)
    image = bytearray(result.output)
    image[offset] = 0x00

    with pytest.raises(VerifyMismatch) as excinfo:
        verify(bytes(image), result.rom, result.start_bank, result.bank_count)
    assert excinfo.value.bank is None
    assert excinfo.value.offset == offset


def test_truncated_image(rom_factory):
    result = convert(rom_factory(32 * KIB), 64, MapperType.MegaSCC)
    with pytest.raises(VerifyMismatch):
        verify(result.output[: 3 * BANK_SIZE], result.rom, 0, result.bank_count)


def test_verify_does_not_modify_inputs(rom_factory):
    result = convert(rom_factory(24 * KIB), 64, MapperType.RC755)
    output, rom = bytes(result.output), bytes(result.rom)
    verify(result.output, result.rom, result.start_bank, result.bank_count)
    assert result.output == output
    assert result.rom == rom


def test_image_shorter_than_chip(rom_factory):
    result = convert(rom_factory(32 * KIB), 64, MapperType.Simple64K)
    with pytest.raises(VerifyMismatch) as excinfo:
        verify(result.output[: 48 * KIB], result.rom, result.start_bank, result.bank_count)
    assert excinfo.value.offset == 48 * KIB


def test_image_size_must_match_chip(rom_factory):
    result = convert(rom_factory(32 * KIB), 64, MapperType.MegaSCC)
    verify(result.output, result.rom, 0, result.bank_count, 64 * KIB)

    longer = result.output + b"\xFF" * (64 * KIB)
    with pytest.raises(VerifyMismatch) as excinfo:
        verify(longer, result.rom, 0, result.bank_count, 64 * KIB)
    assert excinfo.value.offset == 64 * KIB
