"""Structural event stream consumed by the layout engine.

The atomizer (or any other tokenizer) produces an ordered, finite sequence
of :data:`Event` values.  Block tags and break kinds form a closed set.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from .style import PLAIN, Style


class BlockTag(enum.Enum):
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"


class BreakKind(enum.Enum):
    WORD = "word"
    LINE = "line"
    PARAGRAPH = "paragraph"
    PAGE = "page"
    HORIZONTAL_RULE = "horizontal_rule"


@dataclass(slots=True, frozen=True)
class TextAtom:
    text: str
    style: Style = PLAIN


@dataclass(slots=True, frozen=True)
class ImageAtom:
    uri: str


Atom = Union[TextAtom, ImageAtom]


@dataclass(slots=True, frozen=True)
class StartBlock:
    tag: BlockTag


@dataclass(slots=True, frozen=True)
class EndBlock:
    tag: BlockTag


@dataclass(slots=True, frozen=True)
class Break:
    kind: BreakKind


@dataclass(slots=True, frozen=True)
class AtomEvent:
    atom: Atom


Event = Union[StartBlock, EndBlock, Break, AtomEvent]
