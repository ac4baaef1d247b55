import re
from dataclasses import dataclass

from .errors import InvalidInputError
from .pixels import Color

# ==============================================================================
# DEFAULTS
# ==============================================================================
DEFAULT_TERRAIN = "Art"
DEFAULT_MASK_COLOR = "#ffffff"
DEFAULT_BACKGROUND_COLOR = "#000000"

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def parse_hex_color(value) -> Color:
    """'#rrggbb' (the '#' is optional) -> opaque Color."""
    match = _HEX_COLOR.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidInputError(f"'{value}' is not a #rrggbb color")
    r, g, b = (int(part, 16) for part in match.groups())
    return Color(r, g, b, 255)


@dataclass(frozen=True)
class RenderConfig:
    """Everything one render needs besides the images themselves.

    pad_top / pad_bottom keep grass off the upper / lower border of the
    image by rendering with an extra margin that is cropped away again.
    """

    terrain: str = DEFAULT_TERRAIN
    mask_color: Color = parse_hex_color(DEFAULT_MASK_COLOR)
    pad_top: bool = False
    pad_bottom: bool = False
    build_palette: bool = False
    transparent_background: bool = True
    background_color: Color = parse_hex_color(DEFAULT_BACKGROUND_COLOR)
    resize: bool = True

    @classmethod
    def from_strings(cls, mask_color=DEFAULT_MASK_COLOR, background_color=DEFAULT_BACKGROUND_COLOR, **kwargs):
        return cls(
            mask_color=parse_hex_color(mask_color),
            background_color=parse_hex_color(background_color),
            **kwargs,
        )

    @property
    def fill_color(self):
        """Color for new border pixels, None meaning transparent."""
        return None if self.transparent_background else self.background_color
