"""Markdown tokenizer producing the structural event stream.

``Atomizer`` walks the token stream of ``markdown-it-py`` and yields
``StartBlock``/``EndBlock``/``Break``/``AtomEvent`` values.  Inline markup
opens and closes style scopes; text is split into one atom per word with a
``Break(WORD)`` for every run of whitespace.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .events import AtomEvent, BlockTag, Break, BreakKind, EndBlock, Event, ImageAtom, StartBlock, TextAtom
from .style import PLAIN, Style, StyleFlag

PAGE_BREAK_RE = re.compile(
    r"page-break-(?:before|after)\s*:\s*always|<!--\s*pagebreak\s*-->",
    re.IGNORECASE,
)
WHITESPACE_RE = re.compile(r"(\s+)")

_INLINE_SCOPES = {
    "strong": StyleFlag.STRONG,
    "em": StyleFlag.EMPHASIS,
    "link": StyleFlag.LINK,
}
_LIST_OPEN = ("bullet_list_open", "ordered_list_open")
_LIST_CLOSE = ("bullet_list_close", "ordered_list_close")


def create_parser() -> MarkdownIt:
    return MarkdownIt("commonmark", {"html": True})


class Atomizer:
    """Iterable of layout events for one markdown document."""

    def __init__(self, markdown: str, parser: Optional[MarkdownIt] = None):
        self.markdown = markdown
        self.parser = parser or create_parser()

    def __iter__(self) -> Iterator[Event]:
        return self._blocks(self.parser.parse(self.markdown))

    def image_uris(self) -> List[str]:
        """Every image source in document order, for preloading."""
        uris = []
        for token in self.parser.parse(self.markdown):
            for child in token.children or ():
                if child.type == "image":
                    uris.append(child.attrGet("src") or "")
        return uris

    def _blocks(self, tokens: Sequence[Token]) -> Iterator[Event]:
        style = PLAIN
        quote_depth = 0

        for token in tokens:
            kind = token.type
            if kind == "paragraph_open":
                continue
            elif kind == "paragraph_close":
                # Paragraphs of tight lists are hidden and only end a line.
                yield Break(BreakKind.LINE if token.hidden else BreakKind.PARAGRAPH)
            elif kind == "heading_open":
                style = style.with_heading(int(token.tag[1:]))
            elif kind == "heading_close":
                style = style.without_heading(int(token.tag[1:]))
                yield Break(BreakKind.PARAGRAPH)
            elif kind == "inline":
                yield from self._inline(token.children or (), style)
            elif kind in _LIST_OPEN:
                yield StartBlock(BlockTag.LIST)
            elif kind in _LIST_CLOSE:
                yield EndBlock(BlockTag.LIST)
            elif kind == "list_item_open":
                yield StartBlock(BlockTag.LIST_ITEM)
            elif kind == "list_item_close":
                yield EndBlock(BlockTag.LIST_ITEM)
            elif kind == "blockquote_open":
                quote_depth += 1
                style = style.with_quote(quote_depth)
                yield StartBlock(BlockTag.BLOCK_QUOTE)
            elif kind == "blockquote_close":
                style = style.without_quote(quote_depth)
                quote_depth -= 1
                yield EndBlock(BlockTag.BLOCK_QUOTE)
            elif kind in ("fence", "code_block"):
                content = token.content[:-1] if token.content.endswith("\n") else token.content
                yield StartBlock(BlockTag.CODE_BLOCK)
                yield AtomEvent(TextAtom(content, style.insert(StyleFlag.CODE)))
                yield EndBlock(BlockTag.CODE_BLOCK)
            elif kind == "hr":
                yield Break(BreakKind.HORIZONTAL_RULE)
            elif kind == "html_block":
                if PAGE_BREAK_RE.search(token.content):
                    yield Break(BreakKind.PAGE)

    def _inline(self, children: Sequence[Token], style: Style) -> Iterator[Event]:
        for child in children:
            kind = child.type
            if kind == "text":
                yield from self._words(child.content, style)
            elif kind == "code_inline":
                yield AtomEvent(TextAtom(child.content, style.insert(StyleFlag.CODE)))
            elif kind == "softbreak":
                yield Break(BreakKind.WORD)
            elif kind == "hardbreak":
                yield Break(BreakKind.LINE)
            elif kind == "image":
                # Alt text lives in the children and is not emitted.
                yield AtomEvent(ImageAtom(child.attrGet("src") or ""))
            elif kind.endswith("_open") and kind[:-5] in _INLINE_SCOPES:
                style = style.insert(_INLINE_SCOPES[kind[:-5]])
            elif kind.endswith("_close") and kind[:-6] in _INLINE_SCOPES:
                style = style.remove(_INLINE_SCOPES[kind[:-6]])
            elif kind == "html_inline":
                tag = child.content.strip().lower()
                if PAGE_BREAK_RE.search(tag):
                    yield Break(BreakKind.PAGE)
                elif tag == "<sup>":
                    style = style.insert(StyleFlag.SUPERSCRIPT)
                elif tag == "</sup>":
                    style = style.remove(StyleFlag.SUPERSCRIPT)
                elif tag in ("<br>", "<br/>", "<br />"):
                    yield Break(BreakKind.LINE)

    @staticmethod
    def _words(text: str, style: Style) -> Iterator[Event]:
        for piece in WHITESPACE_RE.split(text):
            if not piece:
                continue
            if piece.isspace():
                yield Break(BreakKind.WORD)
            else:
                yield AtomEvent(TextAtom(piece, style))


def atomize(markdown: str) -> List[Event]:
    return list(Atomizer(markdown))
