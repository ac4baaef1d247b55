import numpy as np

from wa_texturizer.config import RenderConfig
from wa_texturizer.grass import GRASS_WIDTH
from wa_texturizer.pixels import Color, PixelBuffer

WHITE = Color(255, 255, 255, 255)
BLACK = Color(0, 0, 0, 255)
RED = Color(200, 30, 30, 255)
BLUE = Color(30, 30, 200, 255)
TEXTURE = Color(120, 80, 40, 255)


def solid(width, height, color):
    return PixelBuffer.new(width, height, color)


def make_grass(top_rows, bottom_rows):
    """Grass image whose strips are uniform per row: top on the left, bottom on the right."""
    assert len(top_rows) == len(bottom_rows)
    data = np.zeros((len(top_rows), 2 * GRASS_WIDTH, 4), dtype=np.uint8)
    for y, (top, bottom) in enumerate(zip(top_rows, bottom_rows)):
        data[y, :GRASS_WIDTH] = top
        data[y, GRASS_WIDTH:] = bottom
    return PixelBuffer(data)


def black_grass(height=8):
    return make_grass([BLACK] * height, [BLACK] * height)


def config(**kwargs):
    kwargs.setdefault("mask_color", WHITE)
    return RenderConfig(**kwargs)


def column(buffer, x):
    return [buffer.get_pixel(x, y) for y in range(buffer.height)]
