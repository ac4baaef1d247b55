"""The ``waLV`` chunk W:A reads its landscape settings from.

Layout: https://worms2d.info/Monochrome_map_(.bit,_.lev)#File_Format_Specifications
"""

import struct
from dataclasses import dataclass

from .errors import InvalidInputError

WALV_CHUNK_TYPE = b"waLV"
WALV_RECORD_SIZE = 41

# Version 1 of the soil texture field, understood from W:A 3.6.26.4 on
SOIL_SIGNED_VERSION = 1

# 8 x u32, soil texture index + version bytes, u32 water colour, u8 worm places
_RECORD = struct.Struct("<8I4BIB")


@dataclass
class WalvRecord:
    land_seed: int = 0
    object_seed: int = 0
    cavern: int = 0
    style: int = 0
    no_indestructible_borders: int = 1
    object_percentage: int = 85
    bridge_percentage: int = 30
    water_level: int = 0
    terrain_index: int = 0
    format_version: int = SOIL_SIGNED_VERSION
    water_colour: int = 0
    worm_places: int = 0

    def pack(self):
        if not 0 <= self.terrain_index <= 255:
            raise InvalidInputError(f"Terrain index {self.terrain_index} does not fit in a byte")
        return _RECORD.pack(
            self.land_seed,             # 0x00
            self.object_seed,           # 0x04
            self.cavern,                # 0x08
            self.style,                 # 0x0C
            self.no_indestructible_borders,  # 0x10
            self.object_percentage,     # 0x14
            self.bridge_percentage,     # 0x18
            self.water_level,           # 0x1C
            self.terrain_index, 0, self.format_version, 0,  # 0x20
            self.water_colour,          # 0x24
            self.worm_places,           # 0x28
        )


def compose_walv_record(terrain_index=None):
    return WalvRecord(terrain_index=terrain_index or 0).pack()
