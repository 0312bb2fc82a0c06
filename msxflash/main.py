"""
msxflash -- MSX ROM to flash image converter.

Parses command-line arguments, lays the ROM out for the selected mapper and
writes an image ready to be programmed to an SST39SF-family flash chip.

Usage examples::

    # MegaSCC layout on the default 128 KiB chip
    msxflash game.rom game.bin

    # Simple64K on a 64 KiB chip, data starting at slot 4, then verify
    msxflash game.rom game.bin --chip 64 --type s64k --addr 4 --verify

    # Show where each bank would go without writing anything
    msxflash game.rom --type s64k --info
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from msxflash.core.errors import ConversionError
from msxflash.core.types import DEFAULT_CHIP, MAPPER_CHOICES, ChipSize
from msxflash.shell.services.conversion_service import ConversionService


# ---------------------------------------------------------------------------
# CLI definition
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="msxflash",
        description=(
            "Convert an MSX ROM to the on-flash layout used by MegaSCC, "
            "ESE-RC755 and Simple64K cartridges."
        ),
    )

    parser.add_argument(
        "rom",
        help="Path to the input ROM image.",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Path of the flash image to write (not needed with --info).",
    )

    chip_sizes = [c.kib for c in ChipSize]
    parser.add_argument(
        "--chip",
        type=int,
        choices=chip_sizes,
        default=DEFAULT_CHIP.kib,
        metavar="KIB",
        help=(
            "Flash chip size in KiB: "
            + ", ".join(f"{c.kib} ({c.name})" for c in ChipSize)
            + f".  Default: {DEFAULT_CHIP.kib}."
        ),
    )
    parser.add_argument(
        "--type", "-t",
        dest="mapper",
        choices=MAPPER_CHOICES,
        default="mega",
        metavar="TYPE",
        help="Mapper type: mega|scc|megascc, rc755, s64k|simple64k.  Default: mega.",
    )
    parser.add_argument(
        "--addr",
        type=int,
        default=None,
        metavar="0..7",
        help="Simple64K start bank.  Default: 2 for ROMs up to 32 KiB, else 0.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        default=False,
        help="Read the written image back and check it against the ROM.",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        default=False,
        help="Print the computed layout and exit without writing an image.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG).",
    )

    return parser


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def _configure_logging(verbosity: int) -> None:
    """Set up the root logger based on requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Info mode
# ---------------------------------------------------------------------------

def _print_layout_info(args: argparse.Namespace) -> int:
    """Print the layout plan for a ROM."""
    info = ConversionService.describe(args.rom, args.chip, args.mapper, args.addr)

    print("msxflash layout")
    print("=" * 60)
    for key, value in info.items():
        label = key.replace("_", " ").title()
        print(f"  {label:14s}: {value}")
    print("=" * 60)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` to use ``sys.argv``.

    Returns
    -------
    int
        Exit code (0 on success, 1 on any conversion or I/O error).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.info and args.output is None:
        parser.error("the output path is required unless --info is given")

    _configure_logging(args.verbose)
    logger = logging.getLogger("msxflash.main")

    rom_path: str = os.path.expanduser(args.rom)
    if not os.path.isfile(rom_path):
        print(f"Error: Cannot open input file: {rom_path}", file=sys.stderr)
        return 1
    args.rom = rom_path

    try:
        if args.info:
            return _print_layout_info(args)

        result = ConversionService.convert_file(
            rom_path=rom_path,
            out_path=os.path.expanduser(args.output),
            chip=args.chip,
            mapper=args.mapper,
            start_hint=args.addr,
            verify=args.verify,
        )
    except ConversionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.debug("I/O failure", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    line = result.summary()
    if args.verify:
        line += "; verify: OK"
    print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
