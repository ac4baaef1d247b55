"""Mask texturizing.

Every pixel of the source that matches the mask color is replaced, column
by column, with terrain texture. Runs of masked pixels get grass blended in
from both ends: the bottom strip is drawn upward from the lower edge of the
run, then the top strip downward from its upper edge, and the top strip
wins where the two overlap.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import InvalidInputError
from .grass import GRASS_WIDTH, close_to_black, split_grass
from .palette import ColorPalette
from .pixels import TRANSPARENT, PixelBuffer

# Working margin added above/below the source when a border must stay bare
MAX_GRASS_HEIGHT = 64


@dataclass
class TexturizeResult:
    image: PixelBuffer
    palette: Optional[ColorPalette] = None


def mask_of(buffer, mask_color):
    """Boolean (height, width) array, True where RGB equals mask_color."""
    return np.all(buffer.data[:, :, :3] == np.array(mask_color[:3], dtype=np.uint8), axis=2)


def _build_working_canvas(source, pad_top, pad_bottom):
    """Source drawn onto a taller canvas with its edge rows repeated into the margins."""
    height_offset = MAX_GRASS_HEIGHT if pad_top else 0
    render_height = source.height + height_offset + (MAX_GRASS_HEIGHT if pad_bottom else 0)

    canvas = PixelBuffer.new(source.width, render_height)
    canvas.paste(source, 0, height_offset)

    if pad_top:
        # Fill the upper gap with the first row of the source
        canvas.set_row(0, canvas.get_row(height_offset), MAX_GRASS_HEIGHT)
    if pad_bottom:
        # Fill the lower gap with the last row of the source
        y = source.height + height_offset
        canvas.set_row(y, canvas.get_row(y - 1), MAX_GRASS_HEIGHT)

    return canvas, height_offset


def _starting_palette(config, terrain_palette):
    if terrain_palette is None:
        raise InvalidInputError(f"No color palette available for terrain '{config.terrain}'")

    palette = ColorPalette(terrain_palette)
    if config.transparent_background:
        palette.place_first(TRANSPARENT, skip_dedupe=True)
    else:
        palette.place_first(config.background_color)
    return palette


def texturize(source, texture, grass, config, terrain_palette=None):
    """Applies texture and grass to every mask-colored pixel of source.

    Returns a TexturizeResult with a new buffer of the source's size and,
    when config.build_palette is set, the ColorPalette for indexed output
    seeded from terrain_palette. None of the input buffers is modified.
    """
    for name, buffer in (("Source", source), ("Texture", texture), ("Grass", grass)):
        if buffer is None or buffer.is_empty():
            raise InvalidInputError(f"{name} image is empty")

    grass_top, grass_bottom = split_grass(grass)
    palette = _starting_palette(config, terrain_palette) if config.build_palette else None

    canvas, height_offset = _build_working_canvas(source, config.pad_top, config.pad_bottom)
    output = canvas.copy()
    masked = mask_of(canvas, config.mask_color)

    width, render_height = canvas.width, canvas.height
    bottom_start = grass_bottom.usable_rows - 1
    top_rows = grass_top.usable_rows

    for x in range(width):
        grass_x = x % GRASS_WIDTH
        texture_x = x % texture.width

        # Upward scan: grass bottom from the lower edge of each run, then texture
        below = bottom_start
        for y in range(render_height - 1, -1, -1):
            if masked[y, x]:
                color = grass_bottom.sample(grass_x, below) if below >= 0 else None
                if color is None or close_to_black(color):
                    color = texture.get_pixel(texture_x, y % texture.height)
                output.set_pixel(x, y, color)
                if palette is not None:
                    palette.add_if_absent(color)
                below -= 1
            else:
                below = bottom_start
                if palette is not None:
                    palette.add_if_absent(canvas.get_pixel(x, y))

        # Downward scan: grass top from the upper edge of each run
        above = 0
        for y in range(render_height):
            if masked[y, x]:
                if above < top_rows:
                    color = grass_top.sample(grass_x, above + grass_top.offset)
                    if color is not None and not close_to_black(color):
                        output.set_pixel(x, y, color)
                        if palette is not None:
                            palette.add_if_absent(color)
                above += 1
            else:
                above = 0

    if config.pad_top or config.pad_bottom:
        output = output.region(0, height_offset, source.width, source.height)

    return TexturizeResult(output, palette)
