"""

Line building and sectioning.

The Sectioner consumes sized events one at a time, wraps text greedily into
lines that fit the column, and groups lines into Sections.  List items and
block quotes are built in their own frame on an explicit stack; when a frame
sees its end marker it collapses into a single ``ListItem``/``BlockQuote``
section appended to the frame below it.

"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import NestingDepthError, StructureError
from .events import BlockTag, Break, BreakKind, EndBlock, ImageAtom, StartBlock, TextAtom
from .section import (
    BlockQuote,
    CodeBlock,
    ListItem,
    PageBreak,
    Plain,
    Section,
    ThematicBreak,
    VerticalSpace,
)
from .sizer import SizedAtom, SizedEvent
from .span import ImageSpan, Span, TextSpan
from .style import MONOSPACE, PLAIN, Style
from .text_metrics import MetricsProvider

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"(\s+)")


class SectionBuilder:
    """Line state and finished sections for one nesting level."""

    def __init__(self, tag: Optional[BlockTag], max_width: float):
        self.tag = tag
        self.max_width = max_width
        self.x = 0.0
        self.sections: List[Section] = []
        self.current_line: List[Span] = []
        self.code_lines: List[Tuple[Span, ...]] = []
        self.is_code = False
        self.is_alt_text = False
        self.open_lists = 0

    @property
    def at_line_start(self) -> bool:
        return not self.current_line

    def push_span(self, span: Span) -> None:
        self.current_line.append(span)
        self.x += span.width

    def push_section(self, section: Section) -> None:
        self.sections.append(section)

    def new_line(self) -> None:
        if self.is_code:
            if self.current_line:
                self.code_lines.append(tuple(self.current_line))
        else:
            while self.current_line and isinstance(self.current_line[-1], TextSpan) and self.current_line[-1].is_space:
                self.current_line.pop()
            if self.current_line:
                self.sections.append(Plain(tuple(self.current_line)))
        self.current_line.clear()
        self.x = 0.0

    def last_style(self) -> Style:
        for span in reversed(self.current_line):
            if isinstance(span, TextSpan):
                return span.style
        return PLAIN

    def finish(self) -> List[Section]:
        if self.current_line:
            self.new_line()
        # Blank trailing sections would only produce an empty last page.
        while self.sections and self.sections[-1].is_blank():
            self.sections.pop()
        return self.sections


class Sectioner:
    """

    Turns a stream of sized events into an ordered list of Sections.

    Every Plain section produced fits within the column width in effect for
    its nesting level, except when a single word or image is wider than the
    whole column.

    """

    def __init__(
        self,
        max_width: float,
        metrics: MetricsProvider,
        *,
        section_spacing: float = 0.0,
        list_indentation: float = 0.0,
        quote_indentation: float = 0.0,
        max_depth: int = 32,
    ):
        self.metrics = metrics
        self.section_spacing = section_spacing
        self.indentation: Dict[BlockTag, float] = {
            BlockTag.LIST_ITEM: list_indentation,
            BlockTag.BLOCK_QUOTE: quote_indentation,
        }
        self.max_depth = max_depth
        self._stack: List[SectionBuilder] = [SectionBuilder(None, max_width)]
        self._space_widths: Dict[Style, float] = {}

    @classmethod
    def from_config(cls, config, metrics: MetricsProvider) -> "Sectioner":
        return cls(
            config.content_width,
            metrics,
            section_spacing=config.section_spacing,
            list_indentation=config.list_indentation,
            quote_indentation=config.quote_indentation,
            max_depth=config.max_nesting_depth,
        )

    @property
    def depth(self) -> int:
        """Number of list items and quotes currently open."""
        return len(self._stack) - 1

    def extend(self, events: Iterable[SizedEvent]) -> "Sectioner":
        for event in events:
            self.process(event)
        return self

    def process(self, event: SizedEvent) -> None:
        frame = self._stack[-1]
        is_text = isinstance(event, SizedAtom) and isinstance(event.atom, TextAtom)
        if not is_text:
            frame.is_alt_text = False

        if isinstance(event, SizedAtom):
            self._atom(frame, event)
        elif isinstance(event, Break):
            self._break(frame, event.kind)
        elif isinstance(event, StartBlock):
            self._start(frame, event.tag)
        elif isinstance(event, EndBlock):
            self._end(frame, event.tag)
        else:
            raise TypeError(f"Unexpected sized event {event!r}")

    def finish(self) -> List[Section]:
        """Close the document and return the finished sections."""
        if len(self._stack) > 1:
            open_tags = ", ".join(frame.tag.value for frame in self._stack[1:])
            raise StructureError("Document ended inside an open block", open_tags)
        root = self._stack[0]
        if root.is_code:
            raise StructureError("Document ended inside an open block", BlockTag.CODE_BLOCK.value)
        if root.open_lists:
            raise StructureError("Document ended inside an open block", BlockTag.LIST.value)
        sections = root.finish()
        logger.debug("Built %d top-level sections", len(sections))
        return sections

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _atom(self, frame: SectionBuilder, sized: SizedAtom) -> None:
        atom = sized.atom
        if isinstance(atom, ImageAtom):
            span = ImageSpan(atom.uri, sized.width, sized.height)
            if not frame.at_line_start and frame.x + span.width > frame.max_width:
                frame.new_line()
            frame.push_span(span)
            frame.is_alt_text = True
            return

        if frame.is_alt_text:
            logger.debug("Suppressing image alt text %r", atom.text)
            return
        if frame.is_code:
            self._write_code(frame, atom, sized)
        else:
            self._write_wrapped(frame, atom, sized)

    def _break(self, frame: SectionBuilder, kind: BreakKind) -> None:
        if kind is BreakKind.WORD:
            if frame.is_code:
                self._push_text(frame, " ", frame.last_style())
            else:
                self._word_break(frame, frame.last_style())
        elif kind is BreakKind.LINE:
            if frame.is_code and frame.at_line_start:
                # Keep the blank line; empty code lines are otherwise dropped.
                self._push_text(frame, "", MONOSPACE)
            frame.new_line()
        elif frame.is_code:
            raise StructureError("Break inside a code block", kind.value)
        elif kind is BreakKind.PARAGRAPH:
            frame.new_line()
            self._push_space(frame)
        elif kind is BreakKind.PAGE:
            frame.new_line()
            frame.push_section(PageBreak())
        elif kind is BreakKind.HORIZONTAL_RULE:
            frame.new_line()
            frame.push_section(ThematicBreak())

    def _start(self, frame: SectionBuilder, tag: BlockTag) -> None:
        if frame.is_code:
            raise StructureError("Block opened inside a code block", tag.value)
        frame.new_line()
        if tag is BlockTag.LIST:
            frame.open_lists += 1
        elif tag is BlockTag.CODE_BLOCK:
            frame.is_code = True
        else:
            depth = len(self._stack)
            if depth > self.max_depth:
                raise NestingDepthError(depth, self.max_depth)
            child_width = frame.max_width - self.indentation[tag]
            self._stack.append(SectionBuilder(tag, child_width))

    def _end(self, frame: SectionBuilder, tag: BlockTag) -> None:
        if tag is BlockTag.CODE_BLOCK:
            if not frame.is_code:
                raise StructureError("End of code block without a matching start")
            frame.new_line()
            if frame.code_lines:
                frame.push_section(CodeBlock(tuple(frame.code_lines)))
            frame.code_lines = []
            frame.is_code = False
            self._push_space(frame)
            return

        if frame.is_code:
            raise StructureError("Block closed inside a code block", tag.value)

        if tag is BlockTag.LIST:
            if not frame.open_lists:
                raise StructureError("End of list without a matching start")
            frame.open_lists -= 1
            frame.new_line()
            self._push_space(frame)
            return

        if frame.tag is not tag:
            expected = frame.tag.value if frame.tag else "no open block"
            raise StructureError(f"Unexpected end of {tag.value}", f"expected {expected}")
        if frame.open_lists:
            raise StructureError(f"End of {tag.value} inside an open list")

        self._stack.pop()
        children = tuple(frame.finish())
        parent = self._stack[-1]
        if tag is BlockTag.LIST_ITEM:
            parent.push_section(ListItem(children))
        else:
            parent.push_section(BlockQuote(children))

    # ------------------------------------------------------------------
    # Text placement
    # ------------------------------------------------------------------
    def _space_width(self, style: Style) -> float:
        width = self._space_widths.get(style)
        if width is None:
            width, _ = self.metrics.measure_text(style, " ")
            self._space_widths[style] = width
        return width

    def _push_space(self, frame: SectionBuilder) -> None:
        frame.push_section(VerticalSpace(self.section_spacing))

    def _push_text(self, frame: SectionBuilder, text: str, style: Style, height: Optional[float] = None) -> None:
        width, measured_height = self.metrics.measure_text(style, text)
        frame.push_span(TextSpan(text, style, width, measured_height if height is None else height))

    def _word_break(self, frame: SectionBuilder, style: Style) -> None:
        if frame.at_line_start:
            return
        last = frame.current_line[-1]
        if isinstance(last, TextSpan) and last.is_space:
            return
        space = self._space_width(style)
        if frame.x + space > frame.max_width:
            frame.new_line()
            return
        self._push_text(frame, " ", style)

    def _write_wrapped(self, frame: SectionBuilder, atom: TextAtom, sized: SizedAtom) -> None:
        text, style = atom.text, atom.style
        words = text.split()
        if not words:
            if text:
                self._word_break(frame, style)
            return

        if text[0].isspace():
            self._word_break(frame, style)

        if style.code:
            # Inline code keeps its own whitespace between words.
            pieces = WHITESPACE_RE.split(text.strip())
            words, separators = pieces[0::2], [""] + pieces[1::2]
        else:
            separators = [" "] * len(words)

        buffer = ""
        buffer_width = 0.0
        for word, separator in zip(words, separators):
            if word == text:
                word_width = sized.width
            else:
                word_width, _ = self.metrics.measure_text(style, word)
            step = self._separator_width(style, separator) + word_width if buffer else word_width
            overflows = frame.x + buffer_width + step > frame.max_width
            if overflows and (buffer or not frame.at_line_start):
                self._flush_words(frame, buffer, buffer_width, style, sized.height)
                frame.new_line()
                buffer, buffer_width = word, word_width
            else:
                buffer = buffer + separator + word if buffer else word
                buffer_width += step
        self._flush_words(frame, buffer, buffer_width, style, sized.height)

        if text[-1].isspace():
            self._word_break(frame, style)

    def _separator_width(self, style: Style, separator: str) -> float:
        if separator == " ":
            return self._space_width(style)
        width, _ = self.metrics.measure_text(style, separator)
        return width

    @staticmethod
    def _flush_words(frame: SectionBuilder, text: str, width: float, style: Style, height: float) -> None:
        if text:
            frame.push_span(TextSpan(text, style, width, height))

    def _write_code(self, frame: SectionBuilder, atom: TextAtom, sized: SizedAtom) -> None:
        pieces = atom.text.split("\n")
        for index, piece in enumerate(pieces):
            if index:
                frame.new_line()
            if piece or frame.at_line_start:
                if len(pieces) == 1:
                    frame.push_span(TextSpan(piece, atom.style, sized.width, sized.height))
                else:
                    self._push_text(frame, piece, atom.style, sized.height)
