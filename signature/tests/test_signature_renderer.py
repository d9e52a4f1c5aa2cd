"""Tests for rendering stored signatures in the audit list."""
from __future__ import annotations

import pytest

from signature.logic.signature_renderer import (
    FALLBACK_LABEL,
    FallbackRendering,
    ImageRendering,
    TextRendering,
    render,
    render_all,
)
from signature.models.signature_style import SIGNATURE_STYLES, SignatureStyle, SignatureStyleCatalog


@pytest.mark.parametrize("name", ["Jane Doe", "J", "Émile Zola", "John: Doe"])
def test_typed_is_plain_text(name: str) -> None:
    assert render(f"typed:{name}") == TextRendering(name, None)


@pytest.mark.parametrize("index", range(4))
def test_styled_uses_catalog_entry(index: int) -> None:
    out = render(f"style:Jane Doe:{index}")
    assert out == TextRendering("Jane Doe", SIGNATURE_STYLES[index])


@pytest.mark.parametrize("raw_index", ["4", "-1", "100", "x", "", "abc1"])
def test_styled_bad_index_falls_back_to_first_style(raw_index: str) -> None:
    out = render(f"style:Jane Doe:{raw_index}")
    assert isinstance(out, TextRendering)
    assert out.text == "Jane Doe"
    assert out.style is SIGNATURE_STYLES[0]


def test_drawn_returns_image_source() -> None:
    uri = "data:image/png;base64,iVBORw0KGgo="
    assert render("drawn:" + uri) == ImageRendering(uri)


@pytest.mark.parametrize("raw", ["", "unknown", "TYPED:Jane", " typed:Jane", None, 12, b"typed:x"])
def test_unknown_format_falls_back(raw) -> None:
    out = render(raw)
    assert isinstance(out, FallbackRendering)
    assert out.label == FALLBACK_LABEL


def test_render_uses_injected_catalog() -> None:
    custom = SignatureStyleCatalog([
        SignatureStyle(0, "a", "A", "Arial"),
        SignatureStyle(1, "b", "B", "Arial"),
    ])
    assert render("style:Jane:1", custom).style is custom[1]
    assert render("style:Jane:2", custom).style is custom[0]


def test_render_all_isolates_bad_rows() -> None:
    out = render_all(["typed:A", "garbage", "style:B:1", "drawn:data:image/png;base64,AA=="])
    assert [type(o) for o in out] == [TextRendering, FallbackRendering, TextRendering, ImageRendering]


def test_catalog_is_fixed_and_ordered() -> None:
    assert len(SIGNATURE_STYLES) == 4
    assert [s.index for s in SIGNATURE_STYLES] == [0, 1, 2, 3]
    assert [s.name for s in SIGNATURE_STYLES] == ["Classic Script", "Bold Print", "Modern", "Elegant"]


def test_catalog_rejects_misnumbered_entries() -> None:
    with pytest.raises(ValueError):
        SignatureStyleCatalog([SignatureStyle(1, "a", "A", "Arial")])
    with pytest.raises(ValueError):
        SignatureStyleCatalog([])
