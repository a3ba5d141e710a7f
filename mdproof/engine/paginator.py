"""

Paginator - vertical placement of sections onto fixed-size pages.

Coordinates follow the PDF convention: the origin is the bottom-left corner
of the page and ``current_y`` decreases as content is placed.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from ..exceptions import NestingDepthError
from .section import BlockQuote, CodeBlock, ListItem, PageBreak, Plain, Section, ThematicBreak, VerticalSpace
from .span import PositionedSpan, RectSpan, Span, TextSpan
from .style import MONOSPACE
from .text_metrics import MetricsProvider

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Page:
    """Positioned spans of one physical sheet."""
    number: int
    spans: List[PositionedSpan] = field(default_factory=list)

    def render_spans(self, spans: Sequence[Span], start_x: float, y: float) -> None:
        x = start_x
        for span in spans:
            self.spans.append(PositionedSpan(span, x, y))
            x += span.width

    def __iter__(self) -> Iterator[PositionedSpan]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)


class Paginator:
    """

    Walks a section list, accumulating vertical offset and starting a new
    page whenever the next section would cross the bottom margin.

    List items and quotes only reserve room for their first child, so a
    marker is never left alone at the bottom of a page while the rest of the
    block is free to continue on the next one.

    """

    def __init__(self, config, metrics: MetricsProvider):
        self.config = config
        self.top = config.content_top
        self.bottom = config.content_bottom
        self.right_edge = config.page_size.width - config.margins.right
        self.line_spacing = config.line_spacing
        self.max_depth = config.max_nesting_depth

        self.list_marker = self._marker(metrics, config.list_marker)
        self.quote_marker = self._marker(metrics, config.quote_marker)

        self.pages: List[Page] = []
        self.current_page = Page(number=1)
        self.current_y = self.top

    @staticmethod
    def _marker(metrics: MetricsProvider, glyph: str) -> TextSpan:
        width, height = metrics.measure_text(MONOSPACE, glyph)
        return TextSpan(glyph, MONOSPACE, width, height)

    def new_page(self) -> None:
        self.pages.append(self.current_page)
        self.current_page = Page(number=self.current_page.number + 1)
        self.current_y = self.top

    def _at_page_top(self) -> bool:
        return not self.current_page.spans and self.current_y >= self.top

    def render_sections(
        self,
        sections: Sequence[Section],
        start_x: Optional[float] = None,
        depth: int = 0,
        first_reserved: bool = False,
    ) -> None:
        """Place ``sections`` on the current and following pages.

        ``first_reserved`` means the caller already reserved room for the
        first section, so it stays on the page that holds its marker.
        """
        if start_x is None:
            start_x = self.config.margins.left
        if depth > self.max_depth:
            raise NestingDepthError(depth, self.max_depth)

        for index, section in enumerate(sections):
            delta_y = -section.min_step * self.line_spacing
            reserved = first_reserved and index == 0
            # Content taller than a whole page is placed on a fresh page anyway.
            if self.current_y + delta_y < self.bottom and not reserved and not self._at_page_top():
                self.new_page()
            self.current_y += delta_y

            if isinstance(section, Plain):
                self.current_page.render_spans(section.spans, start_x, self.current_y)
            elif isinstance(section, VerticalSpace):
                pass
            elif isinstance(section, ThematicBreak):
                rule = RectSpan(max(self.right_edge - start_x, 0.0), self.config.rule_thickness)
                self.current_page.render_spans((rule,), start_x, self.current_y)
            elif isinstance(section, PageBreak):
                self.new_page()
            elif isinstance(section, ListItem):
                self.current_page.render_spans((self.list_marker,), start_x, self.current_y)
                self.current_y -= delta_y
                self.render_sections(section.sections, start_x + self.config.list_indentation, depth + 1, True)
            elif isinstance(section, BlockQuote):
                self.current_page.render_spans((self.quote_marker,), start_x, self.current_y)
                self.current_y -= delta_y
                self.render_sections(section.sections, start_x + self.config.quote_indentation, depth + 1, True)
            elif isinstance(section, CodeBlock):
                self.current_y -= delta_y
                lines = [Plain(line) for line in section.lines]
                self.render_sections(lines, start_x + self.config.code_indentation, depth, True)
            else:
                raise TypeError(f"Unexpected section {section!r}")

    def finish(self) -> List[Page]:
        """Return every page, including the in-progress one even if empty."""
        pages = self.pages + [self.current_page]
        logger.debug("Paginated into %d pages", len(pages))
        return pages


def paginate(sections: Sequence[Section], config, metrics: MetricsProvider) -> List[Page]:
    paginator = Paginator(config, metrics)
    paginator.render_sections(sections)
    return paginator.finish()
