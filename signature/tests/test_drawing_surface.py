"""Tests for the freehand drawing surface state machine."""
from __future__ import annotations

import unittest

from signature.logic.drawing_surface import BLANK_RGBA, CANVAS_H, CANVAS_W, INK_RGBA, DrawingSurface
from signature.logic.signature_codec import data_uri_to_image
from signature.models.signature_enums import StrokeState


class TestDrawingSurface(unittest.TestCase):
    def setUp(self) -> None:
        self.surface = DrawingSurface()

    def test_fresh_surface_is_blank_and_idle(self) -> None:
        self.assertEqual(self.surface.size, (CANVAS_W, CANVAS_H))
        self.assertFalse(self.surface.has_ink())
        self.assertIs(self.surface.state, StrokeState.IDLE)
        self.assertEqual(self.surface.stroke_count, 0)

    def test_single_point_leaves_ink(self) -> None:
        self.surface.begin_stroke((100, 50))
        self.assertIs(self.surface.state, StrokeState.STROKING)
        self.assertTrue(self.surface.has_ink())

    def test_stroke_draws_connected_segment(self) -> None:
        self.surface.begin_stroke((10, 100))
        self.surface.extend_stroke((200, 100))
        self.surface.end_stroke()
        img = self.surface.image
        for x in (10, 50, 120, 199):
            self.assertEqual(img.getpixel((x, 100)), INK_RGBA, x)
        self.assertEqual(img.getpixel((300, 100)), BLANK_RGBA)
        self.assertIs(self.surface.state, StrokeState.IDLE)

    def test_extend_while_idle_is_ignored(self) -> None:
        self.surface.extend_stroke((20, 20))
        self.assertFalse(self.surface.has_ink())

    def test_end_while_idle_is_noop(self) -> None:
        self.surface.end_stroke()
        self.assertIs(self.surface.state, StrokeState.IDLE)

    def test_strokes_accumulate(self) -> None:
        self.surface.begin_stroke((10, 10))
        self.surface.extend_stroke((40, 10))
        self.surface.end_stroke()
        self.surface.begin_stroke((10, 150))
        self.surface.extend_stroke((40, 150))
        self.surface.end_stroke()
        img = self.surface.image
        self.assertEqual(img.getpixel((25, 10)), INK_RGBA)
        self.assertEqual(img.getpixel((25, 150)), INK_RGBA)
        self.assertEqual(self.surface.stroke_count, 2)

    def test_begin_while_stroking_starts_new_stroke(self) -> None:
        self.surface.begin_stroke((10, 10))
        self.surface.begin_stroke((300, 150))
        self.surface.extend_stroke((310, 150))
        # no segment joins the two strokes
        self.assertEqual(self.surface.image.getpixel((150, 80)), BLANK_RGBA)
        self.assertEqual(self.surface.stroke_count, 2)

    def test_points_outside_are_clipped(self) -> None:
        self.surface.begin_stroke((-50, 100))
        self.surface.extend_stroke((50, 100))
        self.assertEqual(self.surface.image.getpixel((0, 100)), INK_RGBA)

    def test_clear_resets_every_pixel(self) -> None:
        self.surface.begin_stroke((10, 10))
        self.surface.extend_stroke((400, 190))
        self.surface.clear()
        self.assertFalse(self.surface.has_ink())
        self.assertIs(self.surface.state, StrokeState.IDLE)
        self.assertEqual(self.surface.stroke_count, 0)
        self.assertIsNone(self.surface.image.getbbox())

    def test_image_is_a_copy(self) -> None:
        self.surface.image.putpixel((1, 1), INK_RGBA)
        self.assertFalse(self.surface.has_ink())

    def test_data_uri_contains_full_surface(self) -> None:
        self.surface.begin_stroke((250, 100))
        self.surface.extend_stroke((260, 100))
        uri = self.surface.to_data_uri()
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        img = data_uri_to_image(uri).convert("RGBA")
        self.assertEqual(img.size, (CANVAS_W, CANVAS_H))
        self.assertEqual(img.getpixel((255, 100)), INK_RGBA)


if __name__ == "__main__":
    unittest.main()
