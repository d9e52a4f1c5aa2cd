# signature/logic/signature_renderer.py
"""
Stored signature -> display description.

Pure: no state between calls and no exceptions for bad input, so one
corrupt row never breaks the rest of an audit list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..models.encoded_signature import (
    DrawnSignature,
    StyledSignature,
    TypedSignature,
)
from ..models.signature_style import SIGNATURE_STYLES, SignatureStyle, SignatureStyleCatalog
from .signature_codec import decode

FALLBACK_LABEL = "Unknown signature format"


@dataclass(frozen=True)
class TextRendering:
    """Name as text; style None means plain emphasised (typed)."""
    text: str
    style: Optional[SignatureStyle] = None


@dataclass(frozen=True)
class ImageRendering:
    """Inline image; `source` is the stored data URI."""
    source: str
    alt: str = "Drawn signature"


@dataclass(frozen=True)
class FallbackRendering:
    label: str = FALLBACK_LABEL
    raw: object = None


RenderedSignature = Union[TextRendering, ImageRendering, FallbackRendering]


def render(encoded: object, catalog: SignatureStyleCatalog = SIGNATURE_STYLES) -> RenderedSignature:
    parsed = decode(encoded)
    if isinstance(parsed, TypedSignature):
        return TextRendering(parsed.name)
    if isinstance(parsed, StyledSignature):
        return TextRendering(parsed.name, catalog.resolve(parsed.style_index))
    if isinstance(parsed, DrawnSignature):
        return ImageRendering(parsed.image_data)
    return FallbackRendering(raw=encoded)


def render_all(encoded_values: Iterable[object],
               catalog: SignatureStyleCatalog = SIGNATURE_STYLES) -> list[RenderedSignature]:
    return [render(value, catalog) for value in encoded_values]
