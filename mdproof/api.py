"""
High-level API for mdproof.

    from mdproof import markdown_to_pdf

    markdown_to_pdf("# Hello\n\nWorld", "hello.pdf")
"""

from __future__ import annotations

import dataclasses
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from .config import LayoutConfig
from .engine.layout_pipeline import LayoutPipeline, LayoutResult
from .exceptions import MdproofError
from .renderers.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

Output = Union[str, Path, BytesIO]


def layout_markdown(markdown: str, config: Optional[LayoutConfig] = None) -> LayoutResult:
    """Lay out ``markdown`` into pages without rendering them."""
    return LayoutPipeline(config).process(markdown)


def markdown_to_pdf(markdown: str, output: Output, config: Optional[LayoutConfig] = None) -> LayoutResult:
    """Lay out ``markdown`` and write the PDF document to ``output``."""
    pipeline = LayoutPipeline(config)
    result = pipeline.process(markdown)
    renderer = PdfRenderer(pipeline.config, pipeline.fonts, pipeline.resources, pipeline.metrics)
    renderer.render(result.pages, output if isinstance(output, BytesIO) else str(output))
    return result


def render_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[LayoutConfig] = None,
) -> LayoutResult:
    """Convert a markdown file to PDF.

    Images resolve relative to the markdown file unless the configuration
    names another resources directory.
    """
    input_path = Path(input_path)
    try:
        markdown = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MdproofError("Cannot read markdown file", f"{input_path}: {exc}") from exc

    config = config or LayoutConfig()
    if config.resources_directory == Path("."):
        config = dataclasses.replace(config, resources_directory=input_path.resolve().parent)

    logger.info("Rendering %s -> %s", input_path, output_path)
    return markdown_to_pdf(markdown, output_path, config)
