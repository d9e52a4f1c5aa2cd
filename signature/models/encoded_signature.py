from __future__ import annotations

from dataclasses import dataclass
from typing import Union

TYPED_PREFIX = "typed:"
STYLE_PREFIX = "style:"
DRAWN_PREFIX = "drawn:"


@dataclass(frozen=True)
class TypedSignature:
    """Plain typed name -> `typed:<name>`."""
    name: str


@dataclass(frozen=True)
class StyledSignature:
    """Typed name with a catalog style -> `style:<name>:<index>`."""
    name: str
    style_index: int


@dataclass(frozen=True)
class DrawnSignature:
    """Freehand drawing -> `drawn:<data uri>`."""
    image_data: str


@dataclass(frozen=True)
class UnrecognizedSignature:
    """Stored value without a known prefix. Only produced by decoding."""
    raw: object


ParsedSignature = Union[TypedSignature, StyledSignature, DrawnSignature, UnrecognizedSignature]
