"""
Layout Pipeline - entry point for the whole layout process.

Usage example:
    from mdproof.config import LayoutConfig
    from mdproof.engine.layout_pipeline import LayoutPipeline

    pipeline = LayoutPipeline(LayoutConfig())
    result = pipeline.process("# Title\n\nSome *markdown* text.")

    for page in result.pages:
        for positioned in page:
            ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..config import LayoutConfig
from ..media.font_registry import FontRegistry, FontSet
from ..media.resource_cache import ResourceCache
from .atomizer import Atomizer
from .events import Event
from .paginator import Page, Paginator
from .section import Section
from .sectioner import Sectioner
from .sizer import Sizer
from .text_metrics import MetricsProvider, ReportLabMetrics

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Pages ready for rendering plus the section tree they came from."""
    pages: List[Page]
    sections: List[Section]
    missing_resources: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


class LayoutPipeline:
    """
    Main layout pipeline.

    Flow:
    1. markdown -> Atomizer -> events
    2. events -> Sizer -> sized events
    3. sized events -> Sectioner -> sections
    4. sections -> Paginator -> pages
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        *,
        metrics: Optional[MetricsProvider] = None,
        resources: Optional[ResourceCache] = None,
        fonts: Optional[FontSet] = None,
    ):
        self.config = (config or LayoutConfig()).validate()
        self.resources = resources or ResourceCache(self.config.resources_directory, self.config.image_dpi)
        self.font_registry = FontRegistry()
        self.fonts = fonts or self.font_registry.register(self.config)
        self.metrics = metrics or ReportLabMetrics(self.config, self.fonts, self.resources)

    def events(self, markdown: str) -> Atomizer:
        return Atomizer(markdown)

    def sections(self, events: Iterable[Event]) -> List[Section]:
        sizer = Sizer(events, self.metrics, self.config.missing_image_size)
        sectioner = Sectioner.from_config(self.config, self.metrics)
        sections = sectioner.extend(sizer).finish()
        self._missing_images = sizer.missing_images
        logger.debug("Sized %d events into %d sections", sizer.count, len(sections))
        return sections

    def paginate(self, sections: List[Section]) -> List[Page]:
        paginator = Paginator(self.config, self.metrics)
        paginator.render_sections(sections)
        return paginator.finish()

    def process(self, markdown: str) -> LayoutResult:
        """Lay out ``markdown`` and return the positioned pages."""
        atomizer = self.events(markdown)
        self.resources.preload(atomizer.image_uris())

        self._missing_images: List[str] = []
        sections = self.sections(atomizer)
        pages = self.paginate(sections)

        missing = list(dict.fromkeys(self._missing_images + self.font_registry.failed))
        logger.info("Laid out %d pages (%d missing resources)", len(pages), len(missing))
        return LayoutResult(pages=pages, sections=sections, missing_resources=missing)
