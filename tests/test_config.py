import unittest

from wa_texturizer.config import RenderConfig, parse_hex_color
from wa_texturizer.errors import InvalidInputError
from wa_texturizer.pixels import Color


class TestParseHexColor(unittest.TestCase):
    def test_with_and_without_hash(self) -> None:
        self.assertEqual(parse_hex_color("#ff8000"), Color(255, 128, 0, 255))
        self.assertEqual(parse_hex_color("FF8000"), Color(255, 128, 0, 255))

    def test_malformed_values_raise(self) -> None:
        for value in ("#fff", "#ff80001", "zz0000", "", None, 0xFFFFFF):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError):
                    parse_hex_color(value)

    def test_invalid_input_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_hex_color("nope")


class TestRenderConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = RenderConfig()

        self.assertEqual(config.terrain, "Art")
        self.assertEqual(config.mask_color, Color(255, 255, 255))
        self.assertFalse(config.pad_top or config.pad_bottom or config.build_palette)
        self.assertTrue(config.transparent_background)
        self.assertIsNone(config.fill_color)

    def test_from_strings(self) -> None:
        config = RenderConfig.from_strings("#00ff00", "#102030", transparent_background=False, pad_top=True)

        self.assertEqual(config.mask_color, Color(0, 255, 0))
        self.assertEqual(config.fill_color, Color(16, 32, 48))
        self.assertTrue(config.pad_top)

    def test_is_immutable(self) -> None:
        with self.assertRaises(AttributeError):
            RenderConfig().pad_top = True


if __name__ == "__main__":
    unittest.main()
