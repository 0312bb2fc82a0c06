import pytest

from msxflash.main import main
from msxflash.core.types import BANK_SIZE, FILL_BYTE
from msxflash.shell.services.rom_bytes_service import RomBytesService

KIB = 1024


def test_convert_and_verify(rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(32 * KIB)), str(out), "--type", "s64k", "--verify"]) == 0
    assert capsys.readouterr().out.strip() == (
        "Type: Simple64K, chip: 128 KiB, banks written: 4, start bank: 2, "
        "bank size: 8 KiB; verify: OK"
    )
    assert len(out.read_bytes()) == 128 * KIB


def test_chip_and_addr(rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(8 * KIB)), str(out), "--chip", "64", "--type", "simple64k", "--addr", "7"]) == 0
    data = out.read_bytes()
    assert len(data) == 64 * KIB
    assert data[:7 * BANK_SIZE] == bytes([FILL_BYTE]) * (7 * BANK_SIZE)
    assert "start bank: 7" in capsys.readouterr().out


def test_rc755(rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(256 * KIB)), str(out), "--chip", "256", "--type", "rc755"]) == 0
    assert capsys.readouterr().out.startswith("Type: RC755, chip: 256 KiB, banks written: 32")


def test_capacity_error_exit_code(rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(160 * KIB)), str(out), "--chip", "128"]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
    assert not out.exists()


def test_range_error_exit_code(rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(16 * KIB)), str(out), "--type", "s64k", "--addr", "7"]) == 1
    assert "exceeds 8 banks" in capsys.readouterr().err
    assert not out.exists()


@pytest.mark.parametrize("mapper", ["mega", "rc755", "s64k"])
@pytest.mark.parametrize("addr", ["9", "-1"])
def test_addr_out_of_range(mapper, addr, rom_file, tmp_path, capsys):
    out = tmp_path / "game.bin"
    assert main([str(rom_file(8 * KIB)), str(out), "--type", mapper, "--addr", addr]) == 1
    assert "out of range 0..7" in capsys.readouterr().err
    assert not out.exists()


def test_verify_failure(rom_file, tmp_path, capsys, monkeypatch):
    out = tmp_path / "game.bin"

    def _corrupt_read_back(path, expected_size):
        data = bytearray(RomBytesService.read(path))
        data[-1] = 0x00
        return bytes(data)

    monkeypatch.setattr(RomBytesService, "read_back", staticmethod(_corrupt_read_back))
    assert main([str(rom_file(16 * KIB)), str(out), "--verify"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: verify: ")
    assert captured.out == ""
    assert out.exists()


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "none.rom"), str(tmp_path / "out.bin")]) == 1
    assert "Cannot open input file" in capsys.readouterr().err


def test_unwritable_output(rom_file, tmp_path, capsys):
    assert main([str(rom_file(8 * KIB)), str(tmp_path / "no" / "dir" / "out.bin")]) == 1
    assert capsys.readouterr().err.startswith("Error: ")


@pytest.mark.parametrize("argv", [
    ["--chip", "100"],
    ["--type", "ascii16"],
    ["--addr", "x"],
])
def test_bad_options_are_rejected(argv, rom_file, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(rom_file(8 * KIB)), str(tmp_path / "out.bin")] + argv)
    assert excinfo.value.code == 2


def test_output_required_without_info(rom_file):
    with pytest.raises(SystemExit):
        main([str(rom_file(8 * KIB))])


def test_info(rom_file, tmp_path, capsys):
    assert main([str(rom_file(24 * KIB)), "--type", "s64k", "--info"]) == 0
    out = capsys.readouterr().out
    assert "Simple64K" in out
    assert "Slot 4" in out
    assert list(tmp_path.glob("*.bin")) == []
