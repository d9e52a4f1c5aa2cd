from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class SignatureStyle:
    """
    One entry of the styled-name catalog.

    `index` is what gets persisted inside a `style:` signature, so it must
    never change for an existing entry. `presentation_class` is the opaque
    style token; font/colour fields are its Tk rendering.
    """
    index: int
    presentation_class: str
    name: str
    font_family: str
    font_size: int = 20
    font_options: str = ""        # e.g. "italic", "bold"
    color: str = "#000000"

    @property
    def tk_font(self) -> tuple:
        """Font tuple accepted by tkinter widgets."""
        if self.font_options:
            return (self.font_family, self.font_size, self.font_options)
        return (self.font_family, self.font_size)


class SignatureStyleCatalog:
    """Immutable, ordered style table shared by capture and rendering."""

    def __init__(self, styles: Sequence[SignatureStyle]) -> None:
        if not styles:
            raise ValueError("A signature style catalog needs at least one entry.")
        for position, style in enumerate(styles):
            if style.index != position:
                raise ValueError(
                    f"Style '{style.name}' has index {style.index}, expected {position}."
                )
        self._styles: tuple[SignatureStyle, ...] = tuple(styles)

    def __len__(self) -> int:
        return len(self._styles)

    def __getitem__(self, index: int) -> SignatureStyle:
        return self._styles[index]

    def __iter__(self) -> Iterator[SignatureStyle]:
        return iter(self._styles)

    def contains_index(self, index: object) -> bool:
        # bool is an int subclass; True must not select entry 1
        return (isinstance(index, int) and not isinstance(index, bool)
                and 0 <= index < len(self._styles))

    def resolve(self, index: object) -> SignatureStyle:
        """Entry at `index`, or entry 0 for anything out of range."""
        if self.contains_index(index):
            return self._styles[index]  # type: ignore[index]
        return self._styles[0]


# Single catalog for the whole application. Append only; never reorder.
SIGNATURE_STYLES = SignatureStyleCatalog((
    SignatureStyle(0, "classic-script", "Classic Script", "Times", font_options="italic", color="#1e3a8a"),
    SignatureStyle(1, "bold-print", "Bold Print", "Helvetica", font_options="bold", color="#1f2937"),
    SignatureStyle(2, "modern", "Modern", "Courier", color="#166534"),
    SignatureStyle(3, "elegant", "Elegant", "Segoe Script", font_options="italic", color="#6b21a8"),
))
