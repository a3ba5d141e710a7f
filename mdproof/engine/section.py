"""

Sections - vertically stacked units of layout.

The Sectioner builds them bottom-up, the Paginator consumes them top-down.
Every variant knows its full ``height`` and its ``min_step``: the room that
must be free before the section may start on the current page.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .span import Span


def line_height(spans: Sequence[Span]) -> float:
    return max((span.height for span in spans), default=0.0)


def line_width(spans: Sequence[Span]) -> float:
    return sum(span.width for span in spans)


@dataclass(slots=True, frozen=True)
class Plain:
    """One visual line."""
    spans: Tuple[Span, ...]

    @property
    def height(self) -> float:
        return line_height(self.spans)

    @property
    def min_step(self) -> float:
        return self.height

    @property
    def width(self) -> float:
        return line_width(self.spans)

    def is_blank(self) -> bool:
        return not self.spans


@dataclass(slots=True, frozen=True)
class VerticalSpace:
    space: float

    @property
    def height(self) -> float:
        return self.space

    @property
    def min_step(self) -> float:
        return self.space

    def is_blank(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class ThematicBreak:
    @property
    def height(self) -> float:
        return 0.0

    @property
    def min_step(self) -> float:
        return 0.0

    def is_blank(self) -> bool:
        # A rule is visible even though it takes no vertical room.
        return False


@dataclass(slots=True, frozen=True)
class PageBreak:
    @property
    def height(self) -> float:
        return 0.0

    @property
    def min_step(self) -> float:
        return 0.0

    def is_blank(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class ListItem:
    """Nested layout drawn after a bullet marker."""
    sections: Tuple["Section", ...]

    @property
    def height(self) -> float:
        return sum(section.height for section in self.sections)

    @property
    def min_step(self) -> float:
        # Only the first child must fit, so the marker is never orphaned.
        return self.sections[0].height if self.sections else 0.0

    def is_blank(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class BlockQuote:
    """Nested layout drawn after a quote bar."""
    sections: Tuple["Section", ...]

    @property
    def height(self) -> float:
        return sum(section.height for section in self.sections)

    @property
    def min_step(self) -> float:
        return self.sections[0].height if self.sections else 0.0

    def is_blank(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class CodeBlock:
    """Pre-wrapped monospace lines."""
    lines: Tuple[Tuple[Span, ...], ...]

    @property
    def height(self) -> float:
        return sum(line_height(line) for line in self.lines)

    @property
    def min_step(self) -> float:
        return line_height(self.lines[0]) if self.lines else 0.0

    def is_blank(self) -> bool:
        return False


Section = Union[Plain, VerticalSpace, ThematicBreak, PageBreak, ListItem, BlockQuote, CodeBlock]
