from dataclasses import dataclass
from typing import Optional

from .errors import InvalidInputError
from .pixels import Color, PixelBuffer

# ==============================================================================
# CONFIGURATION
# ==============================================================================
# Grass files hold two 64px wide strips side by side: top on the left,
# bottom on the right
GRASS_WIDTH = 64

# Each of R, G and B below this counts as blend padding, not real grass
CLOSE_TO_BLACK = 40


def close_to_black(color):
    r, g, b = color[0], color[1], color[2]
    return r < CLOSE_TO_BLACK and g < CLOSE_TO_BLACK and b < CLOSE_TO_BLACK


@dataclass(frozen=True)
class GrassStrip:
    """One edge-blend strip and the count of padding rows on its outer edge."""

    pixels: PixelBuffer
    offset: int

    @property
    def height(self):
        return self.pixels.height

    @property
    def usable_rows(self):
        return self.height - self.offset

    def sample(self, x, y) -> Optional[Color]:
        """Grass color at (x, y), or None once the strip has run out."""
        if not 0 <= y < self.height:
            return None
        return self.pixels.get_pixel(x % GRASS_WIDTH, y)


def top_offset(strip):
    """Leading near-black rows of a top strip, counted down from row 0."""
    offset = 0
    for y in range(strip.height):
        if not close_to_black(strip.get_pixel(0, y)):
            break
        offset += 1
    return offset


def bottom_offset(strip):
    """Trailing near-black rows of a bottom strip, counted up from the last row."""
    offset = 0
    for y in range(strip.height - 1, -1, -1):
        if not close_to_black(strip.get_pixel(0, y)):
            break
        offset += 1
    return offset


def split_grass(grass):
    """Cuts a combined grass image into its (top, bottom) GrassStrips.

    The offsets are measured once here; a strip that is entirely near-black
    gets ``offset == height`` and so never draws any grass.
    """
    if grass.is_empty():
        raise InvalidInputError("Grass image is empty")
    if grass.width < 2 * GRASS_WIDTH:
        raise InvalidInputError(
            f"Grass image must be at least {2 * GRASS_WIDTH}px wide, got {grass.width}px"
        )

    top = grass.region(0, 0, GRASS_WIDTH, grass.height)
    bottom = grass.region(GRASS_WIDTH, 0, GRASS_WIDTH, grass.height)
    return GrassStrip(top, top_offset(top)), GrassStrip(bottom, bottom_offset(bottom))
