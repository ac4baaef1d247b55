class TexturizerError(Exception):
    """Base class for every error raised by wa_texturizer."""


class InvalidInputError(TexturizerError, ValueError):
    """Caller supplied something the renderer cannot work with."""


class PixelIndexError(TexturizerError, IndexError):
    """Pixel or row access outside the buffer. Always a logic defect."""


class FormatViolationError(TexturizerError, ValueError):
    """Bytes that are not a well formed PNG chunk sequence."""
