#!/usr/bin/env python3
"""
msxflash -- MSX ROM to flash image converter.

Thin launcher so the tool can be run from a source checkout::

    python main.py game.rom game.bin --type s64k --verify

The installed console script ``msxflash`` calls the same entry point.
"""

import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so that ``msxflash`` can be imported
# regardless of how the script is invoked.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from msxflash.main import main


if __name__ == "__main__":
    sys.exit(main())
