# tests/test_utils.py
import unittest
import sys
import os

# This adds the project's root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pydantic import ValidationError

from chatmarkup import utils
from chatmarkup.assembler import parse_expression
from chatmarkup.models import Color, RichTextSegment


class TestUtils(unittest.TestCase):
    """Test suite for functions in utils.py."""

    def test_plain_text(self):
        segments = parse_expression("&cHi $({hover,there,tip})!")
        self.assertEqual(utils.plain_text(segments), "Hi there!")

    def test_to_legacy(self):
        segments = parse_expression("&cRed &lBold&r plain")
        self.assertEqual(utils.to_legacy(segments), "&cRed &c&lBold&r plain")
        self.assertEqual(utils.to_legacy(parse_expression("&#FF0000Hello")), "&#ff0000Hello")

    def test_to_legacy_reparses_to_same_segments(self):
        segments = parse_expression("&aGreen &o&nfancy&r and &#123456hex")
        self.assertEqual(parse_expression(utils.to_legacy(segments)), segments)

    def test_colorize(self):
        self.assertEqual(utils.colorize(parse_expression("&cHi")), "\x1b[91mHi\x1b[0m")
        self.assertEqual(utils.colorize(parse_expression("plain")), "plain")
        self.assertEqual(
            utils.colorize(parse_expression("&#FF0000&lA&rB")),
            "\x1b[38;2;255;0;0m\x1b[1mA\x1b[0mB",
        )


class TestModels(unittest.TestCase):
    """Test suite for the rich-text models."""

    def test_color_is_legacy_or_rgb(self):
        with self.assertRaises(ValidationError):
            Color()
        with self.assertRaises(ValidationError):
            Color(code="c", rgb=(1, 2, 3))
        with self.assertRaises(ValidationError):
            Color(code="l")
        with self.assertRaises(ValidationError):
            Color(rgb=(256, 0, 0))

    def test_color_hex(self):
        self.assertEqual(Color.from_hex("#f80").rgb, (255, 136, 0))
        self.assertEqual(Color.from_hex("FF8800").hex, "#FF8800")
        self.assertEqual(Color.legacy("C").hex, "#FF5555")
        with self.assertRaises(ValueError):
            Color.from_hex("ff00")

    def test_segments_are_frozen(self):
        segment = RichTextSegment(text="Hi")
        with self.assertRaises(ValidationError):
            segment.text = "Bye"


if __name__ == '__main__':
    unittest.main()
