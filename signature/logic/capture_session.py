# signature/logic/capture_session.py
from __future__ import annotations

import logging
from typing import Optional

from ..exceptions.errors import InvalidStyleIndexError, SignatureNotReadyError
from ..models.encoded_signature import DrawnSignature, StyledSignature, TypedSignature
from ..models.signature_enums import CaptureMode
from ..models.signature_style import SIGNATURE_STYLES, SignatureStyle, SignatureStyleCatalog
from .drawing_surface import DrawingSurface, Point
from .signature_codec import encode

logger = logging.getLogger(__name__)


class SignatureCaptureSession:
    """
    State of one signing attempt (no UI).

    Typed name and selected style are shared across modes; the drawing
    surface keeps its ink while the user switches tabs and is only
    evaluated in DRAWN mode. Create one per dialog and call discard() on
    cancel or after a successful save.
    """

    def __init__(self, *, catalog: SignatureStyleCatalog = SIGNATURE_STYLES,
                 surface: Optional[DrawingSurface] = None) -> None:
        self._catalog = catalog
        self._surface = surface or DrawingSurface()
        self.mode: CaptureMode = CaptureMode.TYPED
        self.typed_name: str = ""
        self.selected_style_index: int = 0

    @property
    def catalog(self) -> SignatureStyleCatalog:
        return self._catalog

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    # -------- Input ----------------------------------------------------------
    def select_mode(self, mode: CaptureMode) -> None:
        self.mode = CaptureMode(mode)

    def set_typed_name(self, text: str) -> None:
        self.typed_name = text or ""

    def select_style(self, index: int) -> None:
        if not self._catalog.contains_index(index):
            raise InvalidStyleIndexError(
                f"Style index {index!r} outside 0..{len(self._catalog) - 1}."
            )
        self.selected_style_index = index

    def preview_style(self) -> SignatureStyle:
        return self._catalog[self.selected_style_index]

    def begin_stroke(self, point: Point) -> None:
        self._surface.begin_stroke(point)

    def extend_stroke(self, point: Point) -> None:
        self._surface.extend_stroke(point)

    def end_stroke(self) -> None:
        self._surface.end_stroke()

    def clear_drawing(self) -> None:
        self._surface.clear()

    # -------- Readiness / commit ---------------------------------------------
    def is_ready(self) -> bool:
        if self.mode in (CaptureMode.TYPED, CaptureMode.STYLED):
            return bool(self.typed_name.strip())
        return self._surface.has_ink()

    def commit(self) -> str:
        """
        Encode the current input. Does not change any state, so the caller
        can retry after a failed save.
        """
        if not self.is_ready():
            raise SignatureNotReadyError(f"Signature not ready in {self.mode.value} mode.")
        if self.mode is CaptureMode.TYPED:
            return encode(TypedSignature(self.typed_name))
        if self.mode is CaptureMode.STYLED:
            return encode(StyledSignature(self.typed_name, self.selected_style_index))
        return encode(DrawnSignature(self._surface.to_data_uri()))

    def discard(self) -> None:
        """Reset to a fresh session: TYPED, empty name, style 0, blank surface."""
        self.mode = CaptureMode.TYPED
        self.typed_name = ""
        self.selected_style_index = 0
        self._surface.clear()
        logger.debug("Capture session discarded")
