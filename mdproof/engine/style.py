"""Typographic style attached to content atoms.

A :class:`Style` is an immutable, order-independent set of attribute tags.
The fixed tags live in a :class:`StyleFlag` bit set, so two styles built by
opening the same scopes in a different order compare and hash equal.  Block
quotes carry a nesting depth next to the flags.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


MAX_HEADING_LEVEL = 4


class StyleFlag(enum.IntFlag):
    NONE = 0
    STRONG = enum.auto()
    EMPHASIS = enum.auto()
    CODE = enum.auto()
    NOTE = enum.auto()
    LINK = enum.auto()
    SUPERSCRIPT = enum.auto()
    HEADING_1 = enum.auto()
    HEADING_2 = enum.auto()
    HEADING_3 = enum.auto()
    HEADING_4 = enum.auto()


_HEADING_FLAGS = (
    StyleFlag.HEADING_1,
    StyleFlag.HEADING_2,
    StyleFlag.HEADING_3,
    StyleFlag.HEADING_4,
)


def heading_flag(level: int) -> StyleFlag:
    """Return the flag for heading ``level``; levels past 4 clamp to 4."""
    if level < 1:
        raise ValueError(f"Heading level must be positive, got {level}")
    return _HEADING_FLAGS[min(level, MAX_HEADING_LEVEL) - 1]


@dataclass(slots=True, frozen=True)
class Style:
    flags: StyleFlag = StyleFlag.NONE
    quote_depth: int = 0

    def contains(self, flag: StyleFlag) -> bool:
        return bool(self.flags & flag)

    def insert(self, flag: StyleFlag) -> "Style":
        return Style(self.flags | flag, self.quote_depth)

    def remove(self, flag: StyleFlag) -> "Style":
        return Style(self.flags & ~flag, self.quote_depth)

    def with_heading(self, level: int) -> "Style":
        return self.insert(heading_flag(level))

    def without_heading(self, level: int) -> "Style":
        return self.remove(heading_flag(level))

    def with_quote(self, depth: int) -> "Style":
        return Style(self.flags, max(self.quote_depth, depth))

    def without_quote(self, depth: int) -> "Style":
        if depth != self.quote_depth:
            return self
        return Style(self.flags, max(depth - 1, 0))

    @property
    def strong(self) -> bool:
        return self.contains(StyleFlag.STRONG)

    @property
    def emphasis(self) -> bool:
        return self.contains(StyleFlag.EMPHASIS)

    @property
    def code(self) -> bool:
        return self.contains(StyleFlag.CODE)

    @property
    def heading_level(self) -> Optional[int]:
        """Highest-ranking active heading level (1 beats 2 beats 3 beats 4)."""
        for level, flag in enumerate(_HEADING_FLAGS, start=1):
            if self.flags & flag:
                return level
        return None

    @classmethod
    def of(cls, *flags: StyleFlag, quote_depth: int = 0) -> "Style":
        combined = StyleFlag.NONE
        for flag in flags:
            combined |= flag
        return cls(combined, quote_depth)


PLAIN = Style()
MONOSPACE = Style(StyleFlag.CODE)
