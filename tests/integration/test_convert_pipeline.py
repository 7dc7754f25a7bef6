import sys
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from discriminord_core.colors import DEFAULT_PALETTE, Palette
from discriminord_core.errors import DimensionMismatch
from discriminord_renderer import composite_pixel, convert, convert_image, render_preview


class ConvertPipelineTests(unittest.TestCase):
    def test_black_dark_white_light_is_transparent(self):
        dark = Image.new("RGB", (2, 2), (0, 0, 0))
        light = Image.new("RGB", (2, 2), (255, 255, 255))
        out = convert_image(dark, light)
        self.assertEqual(out.mode, "RGBA")
        self.assertEqual(out.size, (2, 2))
        alpha = np.asarray(out)[..., 3]
        np.testing.assert_array_equal(alpha, 0)

    def test_identical_gray_images(self):
        gray = Image.new("L", (3, 3), 77)
        out = np.asarray(convert_image(gray, gray.copy()))
        expected = composite_pixel(77 / 255.0, 77 / 255.0, DEFAULT_PALETTE)
        self.assertEqual(expected[3], 127)
        np.testing.assert_array_equal(out.reshape(-1, 4), np.tile(np.array(expected, dtype=np.uint8), (9, 1)))
        # lerp(#36393f, #ffffff, ~0.302)
        self.assertEqual(tuple(int(c) for c in out[0, 0, :3]), (114, 116, 120))

    def test_mixed_sizes_are_centered_with_fallback(self):
        dark = Image.new("L", (10, 10), 0)
        light = Image.new("L", (4, 4), 0)
        result = convert(dark, light)
        self.assertEqual(result.geometry.size, (10, 10))
        out = np.asarray(result.image)
        # Outside the light image: dark 0, light fallback 1.0 -> transparent.
        self.assertEqual(out[0, 0, 3], 0)
        # Inside both: dark 0, light 0 -> half opaque.
        self.assertEqual(out[3, 3, 3], 127)
        self.assertEqual(out[6, 6, 3], 127)
        self.assertEqual(out[7, 7, 3], 0)

    def test_strict_rejects_mixed_sizes(self):
        with self.assertRaises(DimensionMismatch):
            convert(Image.new("L", (3, 3)), Image.new("L", (2, 2)), strict=True)

    def test_rgba_sources(self):
        dark = Image.new("RGBA", (2, 1), (255, 255, 255, 0))
        light = Image.new("RGBA", (2, 1), (0, 0, 0, 255))
        out = np.asarray(convert_image(dark, light))
        np.testing.assert_array_equal(out[..., 3], 255)

    def test_band_parallel_matches_single_worker(self):
        rng = np.random.default_rng(7)
        dark = Image.fromarray(rng.integers(0, 256, size=(97, 40), dtype=np.uint8))
        light = Image.fromarray(rng.integers(0, 256, size=(64, 51), dtype=np.uint8))
        single = convert(dark, light, workers=1)
        banded = convert(dark, light, workers=4)
        np.testing.assert_array_equal(np.asarray(single.image), np.asarray(banded.image))
        self.assertEqual(single.geometry.size, (51, 97))
        np.testing.assert_array_equal(
            np.asarray(convert(dark, light, mode="discrete", workers=1).image),
            np.asarray(convert(dark, light, mode="discrete", workers=3).image),
        )

    def test_discrete_mode_quadrants(self):
        dark = Image.new("L", (2, 2), 0)
        dark.putpixel((0, 0), 255)
        dark.putpixel((0, 1), 255)
        light = Image.new("L", (2, 2), 0)
        light.putpixel((0, 0), 255)
        light.putpixel((1, 0), 255)

        result = convert(dark, light, mode="discrete")
        self.assertEqual(result.mode, "discrete")
        self.assertAlmostEqual(result.dark_summary.mean, 0.5)
        self.assertAlmostEqual(result.light_summary.mean, 0.5)
        out = result.image
        self.assertEqual(out.getpixel((0, 0)), (255, 255, 255, 127))
        self.assertEqual(out.getpixel((1, 0)), (0, 0, 0, 0))
        self.assertEqual(out.getpixel((0, 1)), (154, 156, 159, 255))
        self.assertEqual(out.getpixel((1, 1)), (0x36, 0x39, 0x3F, 127))

    def test_discrete_midpoint_ignores_padding(self):
        dark = Image.new("L", (4, 4), 0)
        dark.putpixel((0, 0), 255)
        light = Image.new("L", (2, 2), 0)
        result = convert(dark, light, mode="discrete")
        self.assertAlmostEqual(result.dark_summary.mean, 1 / 16)
        self.assertEqual(result.light_summary.mean, 0.0)
        self.assertEqual((result.light_summary.width, result.light_summary.height), (2, 2))

    def test_preview_separates_themes(self):
        palette = Palette.from_hex("#000000", "#ffffff")
        dark = Image.new("L", (2, 1), 0)
        dark.putpixel((1, 0), 255)
        light = Image.new("L", (2, 1), 255)
        light.putpixel((1, 0), 0)
        out = convert_image(dark, light, palette=palette)
        on_dark = render_preview(out, palette.dark).convert("L")
        on_light = render_preview(out, palette.light).convert("L")
        self.assertLess(on_dark.getpixel((0, 0)), on_dark.getpixel((1, 0)))
        self.assertGreater(on_light.getpixel((0, 0)), on_light.getpixel((1, 0)))


if __name__ == "__main__":
    unittest.main()
