import unittest

import numpy as np

from wa_texturizer.errors import InvalidInputError, PixelIndexError
from wa_texturizer.pixels import TRANSPARENT, Color, PixelBuffer, colors_equal

from tests.support import BLUE, RED, solid


class TestColor(unittest.TestCase):
    def test_alpha_defaults_to_opaque(self) -> None:
        self.assertEqual(Color(1, 2, 3), (1, 2, 3, 255))

    def test_colors_equal_ignores_alpha(self) -> None:
        self.assertTrue(colors_equal(Color(1, 2, 3, 0), Color(1, 2, 3, 255)))
        self.assertFalse(colors_equal(Color(1, 2, 3), Color(1, 2, 4)))


class TestPixelAccess(unittest.TestCase):
    def test_set_then_get_pixel(self) -> None:
        buf = solid(4, 3, TRANSPARENT)
        buf.set_pixel(3, 2, RED)

        self.assertEqual(buf.get_pixel(3, 2), RED)
        self.assertEqual(buf.get_pixel(2, 2), TRANSPARENT)
        self.assertEqual(tuple(buf.data[2, 3]), tuple(RED))

    def test_get_pixel_is_a_copy(self) -> None:
        buf = solid(2, 2, RED)
        color = buf.get_pixel(0, 0)
        buf.set_pixel(0, 0, BLUE)

        self.assertEqual(color, RED)
        self.assertIsInstance(color, Color)

    def test_out_of_range_access_raises(self) -> None:
        buf = solid(4, 3, RED)
        for x, y in ((4, 0), (0, 3), (-1, 0), (0, -1)):
            with self.assertRaises(PixelIndexError):
                buf.get_pixel(x, y)
            with self.assertRaises(PixelIndexError):
                buf.set_pixel(x, y, BLUE)

    def test_pixel_index_error_is_an_index_error(self) -> None:
        with self.assertRaises(IndexError):
            solid(1, 1, RED).get_pixel(1, 0)


class TestRowAccess(unittest.TestCase):
    def test_set_row_repeats_into_following_rows(self) -> None:
        buf = solid(3, 6, TRANSPARENT)
        buf.set_pixel(1, 0, RED)
        row = buf.get_row(0)

        buf.set_row(2, row, 3)

        for y in (2, 3, 4):
            self.assertEqual(buf.get_pixel(1, y), RED)
            self.assertEqual(buf.get_pixel(0, y), TRANSPARENT)
        self.assertEqual(buf.get_pixel(1, 5), TRANSPARENT)

    def test_get_row_is_a_copy(self) -> None:
        buf = solid(3, 2, RED)
        row = buf.get_row(1)
        row[:] = 0
        self.assertEqual(buf.get_pixel(0, 1), RED)

    def test_set_row_past_the_end_raises(self) -> None:
        buf = solid(3, 4, RED)
        with self.assertRaises(PixelIndexError):
            buf.set_row(2, buf.get_row(0), 3)
        with self.assertRaises(PixelIndexError):
            buf.get_row(4)

    def test_set_row_rejects_wrong_width(self) -> None:
        buf = solid(3, 4, RED)
        with self.assertRaises(InvalidInputError):
            buf.set_row(0, np.zeros((2, 4), dtype=np.uint8))


class TestRegions(unittest.TestCase):
    def test_region_and_paste(self) -> None:
        buf = solid(6, 4, TRANSPARENT)
        buf.paste(solid(2, 2, RED), 3, 1)

        region = buf.region(3, 1, 2, 2)
        self.assertEqual(region, solid(2, 2, RED))
        self.assertEqual(buf.get_pixel(2, 1), TRANSPARENT)
        self.assertEqual(buf.get_pixel(5, 1), TRANSPARENT)

    def test_paste_outside_raises(self) -> None:
        with self.assertRaises(PixelIndexError):
            solid(4, 4, RED).paste(solid(2, 2, BLUE), 3, 0)

    def test_image_round_trip(self) -> None:
        buf = solid(5, 3, BLUE)
        buf.set_pixel(4, 2, RED)
        img = buf.to_image()

        self.assertEqual(img.mode, "RGBA")
        self.assertEqual(img.size, (5, 3))
        self.assertEqual(PixelBuffer.from_image(img), buf)

    def test_rejects_non_rgba_data(self) -> None:
        with self.assertRaises(InvalidInputError):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
