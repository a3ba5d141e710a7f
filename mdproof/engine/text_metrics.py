"""

Text and image metrics.

The layout core only needs two measurements: the advance width and line
height of a styled text run, and the size of an image.  ``MetricsProvider``
describes that contract; ``ReportLabMetrics`` fulfils it with ReportLab's
font metrics and the image resource cache.

"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Protocol, Tuple

from reportlab.pdfbase import pdfmetrics

from .style import Style

Measurement = Tuple[float, float]


class MetricsProvider(Protocol):
    """Measures atoms in document units (points)."""

    def measure_text(self, style: Style, text: str) -> Measurement:
        ...

    def measure_image(self, uri: str) -> Optional[Measurement]:
        ...


class ReportLabMetrics:
    """

    MetricsProvider backed by ReportLab.

    Width comes from ``pdfmetrics.stringWidth``; height is the distance
    between the face's ascender and descender at the resolved size.

    """

    def __init__(self, config, fonts, resources=None):
        self.config = config
        self.fonts = fonts
        self.resources = resources
        self._line_height = lru_cache(maxsize=64)(self._compute_line_height)

    def font_for(self, style: Style) -> Tuple[str, float]:
        """Return the ReportLab font name and size for ``style``."""
        return self.fonts.for_style(style), self.config.font_size_for(style.heading_level)

    def measure_text(self, style: Style, text: str) -> Measurement:
        font_name, font_size = self.font_for(style)
        width = pdfmetrics.stringWidth(text, font_name, font_size) if text else 0.0
        return width, self._line_height(font_name, font_size)

    def descent(self, style: Style) -> float:
        """Depth of the descender below the baseline, as a positive number."""
        font_name, font_size = self.font_for(style)
        _, descent = pdfmetrics.getAscentDescent(font_name, font_size)
        return -descent

    def measure_image(self, uri: str) -> Optional[Measurement]:
        if self.resources is None:
            return None
        return self.resources.image_dimensions(uri)

    @staticmethod
    def _compute_line_height(font_name: str, font_size: float) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(font_name, font_size)
        return ascent - descent
