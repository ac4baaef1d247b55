"""PNG encoding and chunk-level editing.

Pillow does the pixel encoding; the chunk list is then taken apart and put
back together here so extra chunks can be spliced in where W:A expects them.
"""

import io
import struct
import zlib
from typing import List, NamedTuple

import numpy as np
from PIL import Image

from .errors import FormatViolationError, InvalidInputError
from .palette import MAX_PALETTE_COLORS
from .walv import WALV_CHUNK_TYPE, compose_walv_record

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class Chunk(NamedTuple):
    chunk_type: bytes
    data: bytes

    @property
    def crc(self):
        return zlib.crc32(self.data, zlib.crc32(self.chunk_type)) & 0xFFFFFFFF

    def to_bytes(self):
        return struct.pack(">I", len(self.data)) + self.chunk_type + self.data + struct.pack(">I", self.crc)


# ==============================================================================
# CHUNK SPLIT / JOIN
# ==============================================================================
def get_chunks(png_bytes) -> List[Chunk]:
    if not png_bytes.startswith(PNG_SIGNATURE):
        raise FormatViolationError("Missing PNG signature")

    chunks = []
    offset = len(PNG_SIGNATURE)
    while offset < len(png_bytes):
        if offset + 8 > len(png_bytes):
            raise FormatViolationError(f"Truncated chunk header at byte {offset}")
        length = struct.unpack(">I", png_bytes[offset:offset + 4])[0]
        chunk_type = png_bytes[offset + 4:offset + 8]
        data_end = offset + 8 + length
        if data_end + 4 > len(png_bytes):
            raise FormatViolationError(f"Truncated {chunk_type!r} chunk at byte {offset}")

        chunk = Chunk(chunk_type, png_bytes[offset + 8:data_end])
        crc = struct.unpack(">I", png_bytes[data_end:data_end + 4])[0]
        if crc != chunk.crc:
            raise FormatViolationError(f"CRC mismatch in {chunk_type!r} chunk")
        chunks.append(chunk)
        offset = data_end + 4

        if chunk_type == b"IEND":
            break

    if not chunks or chunks[0].chunk_type != b"IHDR":
        raise FormatViolationError("PNG does not start with an IHDR chunk")
    return chunks


def to_png(chunks):
    return PNG_SIGNATURE + b"".join(chunk.to_bytes() for chunk in chunks)


def insert_chunk(png_bytes, chunk, index=1):
    """Returns png_bytes with chunk spliced in at position index of the chunk list."""
    chunks = get_chunks(png_bytes)
    chunks.insert(index, chunk)
    return to_png(chunks)


# ==============================================================================
# ENCODERS
# ==============================================================================
def encode_rgba(buffer):
    out = io.BytesIO()
    buffer.to_image().save(out, format="PNG")
    return out.getvalue()


def index_pixels(buffer, palette, transparent_background=False):
    """(height, width) uint8 array of palette indices for buffer's pixels.

    With a transparent background every fully transparent pixel maps to
    entry 0, whatever its RGB.
    """
    lookup = palette.index_map()
    data = buffer.data
    keys = (data[:, :, 0].astype(np.uint32) << 16) | (data[:, :, 1].astype(np.uint32) << 8) | data[:, :, 2]
    if transparent_background:
        opaque = data[:, :, 3] != 0
    else:
        opaque = np.ones(keys.shape, dtype=bool)

    indices = np.zeros(keys.shape, dtype=np.uint8)
    for key in np.unique(keys[opaque]).tolist():
        rgb = (key >> 16, (key >> 8) & 0xFF, key & 0xFF)
        if rgb not in lookup:
            raise InvalidInputError(f"Color {rgb} is not in the palette")
        indices[(keys == key) & opaque] = lookup[rgb]
    return indices


def encode_indexed(buffer, palette, transparent_background=False):
    """8 bit palette PNG of buffer, non interlaced, PLTE holding exactly the palette."""
    if len(palette) > MAX_PALETTE_COLORS:
        raise InvalidInputError(f"Palette has {len(palette)} colors, indexed PNG allows {MAX_PALETTE_COLORS}")
    if len(palette) == 0:
        raise InvalidInputError("Palette is empty")

    indices = index_pixels(buffer, palette, transparent_background)
    img = Image.frombytes("P", buffer.size, indices.tobytes())
    img.putpalette([channel for color in palette for channel in color.rgb])

    save_kwargs = {"bits": 8}
    alphas = bytes(color.a for color in palette)
    if any(a < 255 for a in alphas):
        save_kwargs["transparency"] = alphas

    out = io.BytesIO()
    img.save(out, format="PNG", **save_kwargs)

    # bits=8 makes Pillow pad PLTE out to 256 entries; cut it back
    chunks = get_chunks(out.getvalue())
    for i, chunk in enumerate(chunks):
        if chunk.chunk_type == b"PLTE":
            chunks[i] = Chunk(b"PLTE", chunk.data[:3 * len(palette)])
        elif chunk.chunk_type == b"tRNS":
            chunks[i] = Chunk(b"tRNS", chunk.data[:len(palette)])
    return to_png(chunks)


def convert_to_indexed_png(buffer, palette, terrain_index, transparent_background=False):
    """Indexed PNG of buffer with the waLV chunk placed right after IHDR."""
    png_bytes = encode_indexed(buffer, palette, transparent_background)
    walv = Chunk(WALV_CHUNK_TYPE, compose_walv_record(terrain_index))
    return insert_chunk(png_bytes, walv, 1)
