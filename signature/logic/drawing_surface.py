# signature/logic/drawing_surface.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from ..models.signature_enums import StrokeState
from .signature_codec import image_to_data_uri

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

CANVAS_W = 500
CANVAS_H = 200
STROKE_WIDTH = 2
INK_RGBA = (0, 0, 0, 255)
BLANK_RGBA = (0, 0, 0, 0)


class DrawingSurface:
    """
    Transparent RGBA raster that accumulates freehand strokes.

    Input is device independent: GUI handlers translate mouse or touch
    events into begin_stroke / extend_stroke / end_stroke.

        IDLE --begin_stroke--> STROKING --end_stroke--> IDLE
                               STROKING --extend_stroke--> STROKING
    """

    def __init__(self, size: tuple[int, int] = (CANVAS_W, CANVAS_H),
                 stroke_width: int = STROKE_WIDTH) -> None:
        self.size = size
        self.stroke_width = max(1, int(stroke_width))
        self._image = Image.new("RGBA", size, BLANK_RGBA)
        self._draw = ImageDraw.Draw(self._image)
        self._state = StrokeState.IDLE
        self._last: Optional[Point] = None
        self._stroke_count = 0

    # -------- State ----------------------------------------------------------
    @property
    def state(self) -> StrokeState:
        return self._state

    @property
    def stroke_count(self) -> int:
        return self._stroke_count

    @property
    def image(self) -> Image.Image:
        """Copy of the current raster (callers cannot mutate the buffer)."""
        return self._image.copy()

    # -------- Stroke input ---------------------------------------------------
    def begin_stroke(self, point: Point) -> None:
        if self._state is StrokeState.STROKING:
            self.end_stroke()
        self._state = StrokeState.STROKING
        self._stroke_count += 1
        self._last = point
        self._dot(point)

    def extend_stroke(self, point: Point) -> None:
        if self._state is not StrokeState.STROKING or self._last is None:
            return
        self._draw.line([self._last, point], fill=INK_RGBA, width=self.stroke_width, joint="curve")
        # round cap so consecutive segments join without gaps
        self._dot(point)
        self._last = point

    def end_stroke(self) -> None:
        if self._state is StrokeState.IDLE:
            return
        self._state = StrokeState.IDLE
        self._last = None

    def _dot(self, point: Point) -> None:
        r = self.stroke_width / 2
        x, y = point
        self._draw.ellipse((x - r, y - r, x + r, y + r), fill=INK_RGBA)

    # -------- Whole-surface operations ---------------------------------------
    def clear(self) -> None:
        self._image.paste(BLANK_RGBA, (0, 0, self.size[0], self.size[1]))
        self._state = StrokeState.IDLE
        self._last = None
        self._stroke_count = 0

    def has_ink(self) -> bool:
        """True iff any channel of any pixel differs from blank."""
        return any(hi != 0 for _lo, hi in self._image.getextrema())

    def to_data_uri(self) -> str:
        return image_to_data_uri(self._image)
