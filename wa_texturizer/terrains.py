import hashlib
import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import InvalidInputError
from .pixels import PixelBuffer

# ==============================================================================
# TERRAIN REGISTRY
# ==============================================================================
# Name -> W:A soil texture index. Names starting with '-' are the W:A
# built-in "classic" sets; 9 (Dungeon) has no usable grass and is left out.
TERRAINS = {
    "-Beach": 0,
    "-Desert": 1,
    "-Forest": 2,
    "-Farm": 3,
    "-Hell": 4,
    "Art": 5,
    "Cheese": 6,
    "Construction": 7,
    "Desert": 8,
    "Easter": 10,
    "Forest": 11,
    "Fruit": 12,
    "Gulf": 13,
    "Hell": 14,
    "Hospital": 15,
    "Jungle": 16,
    "Manhattan": 17,
    "Medieval": 18,
    "Music": 19,
    "Pirate": 20,
    "Snow": 21,
    "Space": 22,
    "Sports": 23,
    "Tentacle": 24,
    "Time": 25,
    "Tools": 26,
    "Tribal": 27,
    "Urban": 28,
}

TEXTURE_FILENAME = "text.png"
GRASS_FILENAME = "grass.png"


def terrain_index(name):
    try:
        return TERRAINS[name]
    except KeyError:
        raise InvalidInputError(f"Unknown terrain '{name}'") from None


# ==============================================================================
# IMAGE CACHE
# ==============================================================================
class ImageCache:
    """Decoded images keyed by the SHA-1 of their encoded bytes.

    Entries are never modified once stored, so the same buffer can be
    handed to any number of renders. Owned and cleared by the caller.
    """

    def __init__(self):
        self._entries = {}

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    @staticmethod
    def key_for(data):
        return hashlib.sha1(data).hexdigest()

    def get_or_decode(self, data):
        key = self.key_for(data)
        buffer = self._entries.get(key)
        if buffer is None:
            buffer = decode_image(data)
            buffer.data.setflags(write=False)
            self._entries[key] = buffer
        return buffer

    def evict(self, key):
        self._entries.pop(key, None)

    def clear(self):
        self._entries.clear()


def decode_image(data):
    try:
        with Image.open(io.BytesIO(data)) as img:
            buffer = PixelBuffer.from_image(img)
    except UnidentifiedImageError:
        raise InvalidInputError("Data is not a readable image") from None
    if buffer.is_empty():
        raise InvalidInputError("Image has no pixels")
    return buffer


def load_image(path, cache=None):
    path = Path(path)
    if not path.exists():
        raise InvalidInputError(f"'{path}' not found")
    data = path.read_bytes()
    if cache is not None:
        return cache.get_or_decode(data)
    return decode_image(data)


# ==============================================================================
# TERRAIN ASSETS
# ==============================================================================
@dataclass
class TerrainAssets:
    name: str
    index: int
    texture: PixelBuffer
    grass: PixelBuffer


def load_terrain(assets_dir, name, cache=None):
    """Loads <assets_dir>/<name>/text.png and grass.png."""
    index = terrain_index(name)
    folder = Path(assets_dir) / name
    return TerrainAssets(
        name=name,
        index=index,
        texture=load_image(folder / TEXTURE_FILENAME, cache),
        grass=load_image(folder / GRASS_FILENAME, cache),
    )
