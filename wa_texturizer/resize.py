from .pixels import TRANSPARENT, PixelBuffer

# W:A maps must be at least this big and have both sides divisible by 8
MIN_MAP_WIDTH = 640
MIN_MAP_HEIGHT = 32


def next_multiple_of_8(n):
    return (n + 7) // 8 * 8


def valid_dimensions(width, height):
    new_width = next_multiple_of_8(width) if width > MIN_MAP_WIDTH else MIN_MAP_WIDTH
    new_height = next_multiple_of_8(height) if height > MIN_MAP_HEIGHT else MIN_MAP_HEIGHT
    return new_width, new_height


def resize(buffer, background=None):
    """Pads buffer out to valid map dimensions.

    Content is centered horizontally and aligned to the bottom edge; the new
    border is filled with background, or left fully transparent when
    background is None.
    """
    width, height = valid_dimensions(buffer.width, buffer.height)
    if (width, height) == buffer.size:
        return buffer.copy()

    resized = PixelBuffer.new(width, height, TRANSPARENT if background is None else background)
    dx = (width - buffer.width) // 2
    dy = height - buffer.height
    resized.paste(buffer, dx, dy)
    return resized
