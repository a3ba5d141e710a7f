"""Drawable primitives produced by layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .style import Style


@dataclass(slots=True, frozen=True)
class TextSpan:
    """Styled text run with the size measured when the span was built."""
    text: str
    style: Style
    width: float
    height: float

    @property
    def is_space(self) -> bool:
        return bool(self.text) and self.text.isspace()


@dataclass(slots=True, frozen=True)
class ImageSpan:
    uri: str
    width: float
    height: float


@dataclass(slots=True, frozen=True)
class RectSpan:
    """Filled rectangle, used for thematic-break rules."""
    width: float
    height: float


Span = Union[TextSpan, ImageSpan, RectSpan]


@dataclass(slots=True, frozen=True)
class PositionedSpan:
    """A span anchored at an absolute page coordinate (origin bottom-left)."""
    span: Span
    x: float
    y: float

    @property
    def pos(self) -> tuple:
        return self.x, self.y
