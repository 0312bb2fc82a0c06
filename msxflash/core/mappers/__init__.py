# msxflash mapper policies
"""
Flash layout policies for MSX cartridge mappers.

Use :meth:`Mapper.create(mapper_type) <mapper.Mapper.create>` to obtain the
policy for a given :class:`~msxflash.core.types.MapperType`.
"""

from msxflash.core.mappers.mapper import Mapper

from msxflash.core.mappers.mapper_msx import (
    MapperMegaSCC,
    MapperRC755,
    MapperSimple64K,
)

__all__ = [
    "Mapper",
    "MapperMegaSCC",
    "MapperRC755",
    "MapperSimple64K",
]
