# signature/logic/signature_codec.py
"""
Encoding of captured signatures into the single stored string.

Formats:
    typed:<name>
    style:<name>:<styleIndex>
    drawn:data:image/png;base64,<...>

`style:` payloads are split on the LAST colon, so names that contain a
colon ("John: Doe") survive a round trip.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging
import re

from PIL import Image, UnidentifiedImageError

from ..exceptions.errors import InvalidImageDataError
from ..models.encoded_signature import (
    DRAWN_PREFIX,
    STYLE_PREFIX,
    TYPED_PREFIX,
    DrawnSignature,
    ParsedSignature,
    StyledSignature,
    TypedSignature,
    UnrecognizedSignature,
)

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"

# leading integer, as a browser parseInt reads it ("2.5" -> 2, "x" -> none)
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def encode(signature: ParsedSignature) -> str:
    """Serialize a parsed signature back into its stored form."""
    if isinstance(signature, TypedSignature):
        return f"{TYPED_PREFIX}{signature.name}"
    if isinstance(signature, StyledSignature):
        return f"{STYLE_PREFIX}{signature.name}:{int(signature.style_index)}"
    if isinstance(signature, DrawnSignature):
        return f"{DRAWN_PREFIX}{signature.image_data}"
    if isinstance(signature, UnrecognizedSignature):
        return str(signature.raw)
    raise TypeError(f"Cannot encode {type(signature).__name__}")


def _parse_style_index(raw: str) -> int:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def decode(raw: object) -> ParsedSignature:
    """
    Parse a stored signature string. Never raises; unknown input comes
    back as UnrecognizedSignature.
    """
    if not isinstance(raw, str):
        return UnrecognizedSignature(raw)

    if raw.startswith(TYPED_PREFIX):
        return TypedSignature(raw[len(TYPED_PREFIX):])

    if raw.startswith(STYLE_PREFIX):
        payload = raw[len(STYLE_PREFIX):]
        name, sep, index_part = payload.rpartition(":")
        if not sep:
            return StyledSignature(payload, 0)
        return StyledSignature(name, _parse_style_index(index_part))

    if raw.startswith(DRAWN_PREFIX):
        return DrawnSignature(raw[len(DRAWN_PREFIX):])

    logger.debug("Unrecognized signature format: %.40r", raw)
    return UnrecognizedSignature(raw)


# -------- Raster <-> data URI -------------------------------------------------
def image_to_data_uri(image: Image.Image) -> str:
    """Encode a Pillow image as a PNG data URI."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return PNG_DATA_URI_PREFIX + base64.b64encode(buf.getvalue()).decode("ascii")


def data_uri_to_image(uri: str) -> Image.Image:
    """
    Decode an image data URI (as produced by image_to_data_uri or a browser
    canvas) into a Pillow image.
    """
    if not isinstance(uri, str) or not uri.startswith("data:image/"):
        raise InvalidImageDataError("Not an image data URI.")
    header, sep, body = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise InvalidImageDataError("Only base64 image data URIs are supported.")
    try:
        raw = base64.b64decode(body, validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, UnidentifiedImageError, Image.DecompressionBombError,
            OSError, ValueError) as exc:
        raise InvalidImageDataError(f"Cannot decode signature image: {exc}") from exc
    return image
