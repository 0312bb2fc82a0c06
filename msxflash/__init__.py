"""
msxflash -- lay out MSX cartridge ROMs for MegaSCC, RC755 and Simple64K
flash cartridges.
"""

__version__ = "1.0.0"
