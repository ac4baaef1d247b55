"""Indexed-color palettes.

A palette is an ordered list of unique (by RGB) colors; a color's position
is the index the indexed PNG stores for it, and entry 0 is always the map
background.
"""

import json
from pathlib import Path

import numpy as np

from .errors import InvalidInputError
from .pixels import Color, colors_equal

MAX_PALETTE_COLORS = 256


class ColorPalette:
    def __init__(self, colors=()):
        self.colors = []
        self._seen = set()
        for color in colors:
            self.add_if_absent(color)

    def __len__(self):
        return len(self.colors)

    def __iter__(self):
        return iter(self.colors)

    def __getitem__(self, index):
        return self.colors[index]

    def __contains__(self, color):
        return tuple(color[:3]) in self._seen

    def add_if_absent(self, color):
        key = (color[0], color[1], color[2])
        if key in self._seen:
            return
        self._seen.add(key)
        self.colors.append(Color(*color))

    def place_first(self, color, skip_dedupe=False):
        """Puts color at index 0.

        Any entry with the same RGB is moved rather than duplicated. With
        skip_dedupe (the transparent sentinel) color itself always becomes
        entry 0, replacing a same-RGB entry instead of keeping its alpha.
        """
        color = Color(*color)
        self._seen.add(color.rgb)
        for i, existing in enumerate(self.colors):
            if colors_equal(color, existing):
                if i == 0 and not skip_dedupe:
                    return
                del self.colors[i]
                break
        self.colors.insert(0, color)

    def index_map(self):
        """RGB -> palette index."""
        return {color.rgb: i for i, color in enumerate(self.colors)}


def generate_terrain_palette(background, buffers):
    """Background color plus every distinct color in buffers.

    Each buffer is scanned column by column (x outer, y inner) and the
    buffers in the order given, normally texture, grass top, grass bottom.
    """
    palette = ColorPalette([background])
    for buffer in buffers:
        # (height, width, 4) -> column-major run of pixels
        columns = np.ascontiguousarray(buffer.data.transpose(1, 0, 2)).reshape(-1, 4)
        for pixel in dict.fromkeys(map(tuple, columns.tolist())):
            palette.add_if_absent(pixel)
    return palette


# ==============================================================================
# PRECOMPUTED PALETTE STORE
# ==============================================================================
def load_palettes(path):
    """Reads {terrain: [[r, g, b, a], ...]} written by save_palettes."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise InvalidInputError(f"Palette file '{path}' not found") from None
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Palette file '{path}' is not valid JSON: {e}") from None

    palettes = {}
    for terrain, colors in raw.items():
        try:
            palettes[terrain] = [Color(*color) for color in colors]
        except TypeError:
            raise InvalidInputError(f"Bad color entry in palette for '{terrain}'") from None
    return palettes


def save_palettes(path, palettes):
    data = {terrain: [list(c) for c in colors] for terrain, colors in palettes.items()}
    with open(path, "w") as f:
        json.dump(data, f, separators=(",", ":"))
        f.write("\n")
