"""
mdproof - markdown to paginated PDF.

The layout engine converts a stream of markup events into fixed-size pages
of positioned drawing instructions:

    markdown -> Atomizer -> Sizer -> Sectioner -> Paginator -> PdfRenderer

Quick Start:
    from mdproof import markdown_to_pdf

    markdown_to_pdf(open("notes.md").read(), "notes.pdf")

    # Pages without rendering
    from mdproof import layout_markdown
    result = layout_markdown("# Title\\n\\nBody text")
    print(result.page_count)
"""

from .version import __version__, __version_info__

from .exceptions import (
    ConfigurationError,
    FontError,
    LayoutError,
    MdproofError,
    MediaError,
    NestingDepthError,
    RenderingError,
    StructureError,
)
from .config import LayoutConfig
from .api import layout_markdown, markdown_to_pdf, render_file
from .engine.layout_pipeline import LayoutPipeline, LayoutResult

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigurationError",
    "FontError",
    "LayoutError",
    "MdproofError",
    "MediaError",
    "NestingDepthError",
    "RenderingError",
    "StructureError",
    "LayoutConfig",
    "layout_markdown",
    "markdown_to_pdf",
    "render_file",
    "LayoutPipeline",
    "LayoutResult",
]
