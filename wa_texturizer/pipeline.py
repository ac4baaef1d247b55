"""Source mask + terrain -> finished map, as PNG bytes."""

from dataclasses import dataclass
from typing import Optional

from .compositor import texturize
from .grass import split_grass
from .palette import ColorPalette, generate_terrain_palette
from .pixels import PixelBuffer
from .pngio import convert_to_indexed_png, encode_rgba
from .resize import resize


@dataclass
class RenderResult:
    image: PixelBuffer
    palette: Optional[ColorPalette]
    terrain_index: int
    transparent_background: bool

    def to_png(self):
        if self.palette is None:
            return encode_rgba(self.image)
        return convert_to_indexed_png(
            self.image, self.palette, self.terrain_index, self.transparent_background
        )


def terrain_palette_for(terrain, background, palettes=None, live=False):
    """Seed colors for a terrain: computed from its images, or looked up in palettes."""
    if live:
        top, bottom = split_grass(terrain.grass)
        return generate_terrain_palette(background, [terrain.texture, top.pixels, bottom.pixels]).colors
    if palettes is None:
        return None
    return palettes.get(terrain.name)


def render(source, terrain, config, palettes=None, live_palette=False):
    seed = None
    if config.build_palette:
        seed = terrain_palette_for(terrain, config.background_color, palettes, live_palette)

    result = texturize(source, terrain.texture, terrain.grass, config, seed)
    image = result.image
    if config.resize:
        image = resize(image, config.fill_color)

    return RenderResult(image, result.palette, terrain.index, config.transparent_background)
