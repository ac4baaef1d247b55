import io
import tempfile
import unittest
from pathlib import Path

from wa_texturizer.errors import InvalidInputError
from wa_texturizer.terrains import TERRAINS, ImageCache, decode_image, load_image, load_terrain, terrain_index

from tests.support import BLUE, RED, black_grass, solid


def png_bytes(buffer):
    out = io.BytesIO()
    buffer.to_image().save(out, format="PNG")
    return out.getvalue()


class TestRegistry(unittest.TestCase):
    def test_known_indices(self) -> None:
        self.assertEqual(terrain_index("-Beach"), 0)
        self.assertEqual(terrain_index("Art"), 5)
        self.assertEqual(terrain_index("Urban"), 28)
        self.assertEqual(len(TERRAINS), 28)
        self.assertNotIn(9, TERRAINS.values())

    def test_unknown_terrain(self) -> None:
        with self.assertRaises(InvalidInputError):
            terrain_index("Dungeon")


class TestImageCache(unittest.TestCase):
    def test_same_bytes_decode_once(self) -> None:
        cache = ImageCache()
        data = png_bytes(solid(3, 3, RED))

        first = cache.get_or_decode(data)
        second = cache.get_or_decode(data)

        self.assertIs(first, second)
        self.assertEqual(len(cache), 1)
        self.assertEqual(first, solid(3, 3, RED))

    def test_cached_buffers_are_read_only(self) -> None:
        buffer = ImageCache().get_or_decode(png_bytes(solid(2, 2, RED)))
        with self.assertRaises(ValueError):
            buffer.set_pixel(0, 0, BLUE)

    def test_evict_and_clear(self) -> None:
        cache = ImageCache()
        red, blue = png_bytes(solid(2, 2, RED)), png_bytes(solid(2, 2, BLUE))
        cache.get_or_decode(red)
        cache.get_or_decode(blue)

        cache.evict(ImageCache.key_for(red))
        self.assertNotIn(ImageCache.key_for(red), cache)
        self.assertIn(ImageCache.key_for(blue), cache)

        cache.clear()
        self.assertEqual(len(cache), 0)

    def test_garbage_bytes(self) -> None:
        with self.assertRaises(InvalidInputError):
            decode_image(b"not an image")


class TestLoading(unittest.TestCase):
    def test_load_terrain_from_folder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            folder = Path(tmp) / "Art"
            folder.mkdir()
            (folder / "text.png").write_bytes(png_bytes(solid(4, 4, RED)))
            (folder / "grass.png").write_bytes(png_bytes(black_grass()))

            terrain = load_terrain(tmp, "Art", ImageCache())

        self.assertEqual(terrain.index, 5)
        self.assertEqual(terrain.texture, solid(4, 4, RED))
        self.assertEqual(terrain.grass.size, (128, 8))

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(InvalidInputError):
                load_image(Path(tmp) / "missing.png")
            with self.assertRaises(InvalidInputError):
                load_terrain(tmp, "Art")


if __name__ == "__main__":
    unittest.main()
