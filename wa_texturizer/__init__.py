"""Turns painted mask images into textured Worms Armageddon maps."""

from .compositor import TexturizeResult, texturize
from .config import RenderConfig, parse_hex_color
from .errors import FormatViolationError, InvalidInputError, PixelIndexError, TexturizerError
from .palette import ColorPalette, generate_terrain_palette
from .pipeline import RenderResult, render
from .pixels import Color, PixelBuffer
from .pngio import convert_to_indexed_png
from .resize import resize
from .walv import compose_walv_record

__version__ = "0.1.0"
