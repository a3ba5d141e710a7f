"""PDF renderer drawing positioned spans with ReportLab's canvas."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional, Sequence, Union

from reportlab.pdfgen import canvas as pdf_canvas

from ..engine.paginator import Page
from ..engine.span import ImageSpan, PositionedSpan, RectSpan, TextSpan
from ..engine.text_metrics import ReportLabMetrics
from ..exceptions import RenderingError

logger = logging.getLogger(__name__)

CanvasTarget = Union[str, BytesIO]


class PdfRenderer:
    """Render layout pages into a PDF document."""

    def __init__(self, config, fonts, resources, metrics: Optional[ReportLabMetrics] = None) -> None:
        self.config = config
        self.fonts = fonts
        self.resources = resources
        self.metrics = metrics or ReportLabMetrics(config, fonts, resources)
        self.page_size = (config.page_size.width, config.page_size.height)
        self.canvas: Optional[pdf_canvas.Canvas] = None

    def render(self, pages: Sequence[Page], output: CanvasTarget) -> None:
        self._init_canvas(output)
        for page in pages:
            for positioned in page:
                self._draw(positioned)
            self.canvas.showPage()
        self._finish()
        logger.debug("Rendered %d pages", len(pages))

    def render_bytes(self, pages: Sequence[Page]) -> bytes:
        buffer = BytesIO()
        self.render(pages, buffer)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Canvas helpers
    # ------------------------------------------------------------------
    def _init_canvas(self, output: CanvasTarget) -> None:
        if hasattr(output, "write"):
            self.canvas = pdf_canvas.Canvas(output, pagesize=self.page_size)
        else:
            self.canvas = pdf_canvas.Canvas(str(output), pagesize=self.page_size)
        self.canvas.setTitle(self.config.title)
        self.canvas.setCreator("mdproof")

    def _finish(self) -> None:
        try:
            self.canvas.save()
        except OSError as exc:
            raise RenderingError("Cannot write PDF document", str(exc)) from exc
        finally:
            self.canvas = None

    def _draw(self, positioned: PositionedSpan) -> None:
        span = positioned.span
        if isinstance(span, TextSpan):
            self._draw_text(span, positioned.x, positioned.y)
        elif isinstance(span, ImageSpan):
            self._draw_image(span, positioned.x, positioned.y)
        elif isinstance(span, RectSpan):
            self.canvas.rect(positioned.x, positioned.y, span.width, span.height, stroke=0, fill=1)

    def _draw_text(self, span: TextSpan, x: float, y: float) -> None:
        if not span.text or span.is_space:
            return
        font_name, font_size = self.metrics.font_for(span.style)
        self.canvas.setFont(font_name, font_size)
        # The baseline sits above the bottom of the line box by the descent.
        self.canvas.drawString(x, y + self.metrics.descent(span.style), span.text)

    def _draw_image(self, span: ImageSpan, x: float, y: float) -> None:
        path = self.resources.image_path(span.uri) if self.resources is not None else None
        if path is None:
            logger.debug("Image %r is missing; drawing a placeholder", span.uri)
            self.canvas.rect(x, y, span.width, span.height, stroke=1, fill=0)
            return
        try:
            self.canvas.drawImage(str(path), x, y, width=span.width, height=span.height, mask="auto")
        except OSError as exc:
            logger.warning("Cannot draw image %r: %s", span.uri, exc)
            self.canvas.rect(x, y, span.width, span.height, stroke=1, fill=0)
