"""Tests for the stored signature string format."""
from __future__ import annotations

import base64
import struct
import zlib

import pytest
from PIL import Image

from signature.exceptions.errors import InvalidImageDataError
from signature.logic.signature_codec import (
    PNG_DATA_URI_PREFIX,
    data_uri_to_image,
    decode,
    encode,
    image_to_data_uri,
)
from signature.models.encoded_signature import (
    DrawnSignature,
    StyledSignature,
    TypedSignature,
    UnrecognizedSignature,
)


def test_encode_typed() -> None:
    assert encode(TypedSignature("Jane Doe")) == "typed:Jane Doe"


def test_encode_styled() -> None:
    assert encode(StyledSignature("Jane Doe", 2)) == "style:Jane Doe:2"


def test_encode_drawn_keeps_data_uri_verbatim() -> None:
    uri = "data:image/png;base64,AAAA"
    assert encode(DrawnSignature(uri)) == "drawn:" + uri


def test_decode_typed_keeps_colons_in_name() -> None:
    assert decode("typed:John: Doe") == TypedSignature("John: Doe")


def test_decode_styled() -> None:
    assert decode("style:Jane Doe:3") == StyledSignature("Jane Doe", 3)


def test_decode_styled_name_with_colon_round_trips() -> None:
    raw = encode(StyledSignature("John: Doe", 1))
    assert raw == "style:John: Doe:1"
    assert decode(raw) == StyledSignature("John: Doe", 1)


@pytest.mark.parametrize("raw", ["style:Jane:abc", "style:Jane:", "style:Jane:x2", "style:Jane:\u0662"])
def test_decode_styled_non_numeric_index_is_zero(raw: str) -> None:
    assert decode(raw) == StyledSignature("Jane", 0)


def test_decode_styled_without_index() -> None:
    assert decode("style:Jane") == StyledSignature("Jane", 0)


def test_decode_styled_keeps_out_of_range_index() -> None:
    assert decode("style:Jane:9") == StyledSignature("Jane", 9)
    assert decode("style:Jane:-1") == StyledSignature("Jane", -1)


def test_decode_drawn() -> None:
    assert decode("drawn:data:image/png;base64,QUJD") == DrawnSignature("data:image/png;base64,QUJD")


@pytest.mark.parametrize("raw", ["", "signed:Jane", "Typed:Jane", "typed", "jane doe", None, 42])
def test_decode_unknown_prefix(raw) -> None:
    assert decode(raw) == UnrecognizedSignature(raw)


def test_encode_unrecognized_returns_raw() -> None:
    assert encode(UnrecognizedSignature("legacy")) == "legacy"


def test_image_data_uri_round_trip() -> None:
    img = Image.new("RGBA", (10, 4), (0, 0, 0, 0))
    img.putpixel((3, 2), (0, 0, 0, 255))
    uri = image_to_data_uri(img)
    assert uri.startswith(PNG_DATA_URI_PREFIX)
    back = data_uri_to_image(uri)
    assert back.size == (10, 4)
    assert back.convert("RGBA").getpixel((3, 2)) == (0, 0, 0, 255)


@pytest.mark.parametrize("uri", [
    "not a uri",
    "data:text/plain;base64,QUJD",
    "data:image/png,rawbytes",
    "data:image/png;base64,!!!notbase64",
    "data:image/png;base64,QUJD",  # valid base64, not an image
])
def test_data_uri_to_image_rejects_bad_input(uri: str) -> None:
    with pytest.raises(InvalidImageDataError):
        data_uri_to_image(uri)


@pytest.mark.parametrize("raw, index", [
    ("style:Jane:2.5", 2),
    ("style:Jane: 3", 3),
    ("style:Jane:1_0", 1),
    ("style:Jane:+2", 2),
    ("style:Jane:2px", 2),
])
def test_decode_styled_reads_leading_integer(raw: str, index: int) -> None:
    assert decode(raw) == StyledSignature("Jane", index)


def _png_header_only(width: int, height: int) -> bytes:
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return (b"\x89PNG\r\n\x1a\n" + struct.pack(">I", len(ihdr)) + chunk
            + struct.pack(">I", zlib.crc32(chunk) & 0xFFFFFFFF))


def test_data_uri_to_image_rejects_oversized_image() -> None:
    uri = PNG_DATA_URI_PREFIX + base64.b64encode(_png_header_only(20000, 20000)).decode("ascii")
    with pytest.raises(InvalidImageDataError):
        data_uri_to_image(uri)


def test_data_uri_to_image_rejects_truncated_png() -> None:
    uri = PNG_DATA_URI_PREFIX + base64.b64encode(_png_header_only(10, 10)).decode("ascii")
    with pytest.raises(InvalidImageDataError):
        data_uri_to_image(uri)
