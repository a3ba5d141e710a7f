"""Renderers turning positioned pages into documents."""

from .pdf_renderer import PdfRenderer

__all__ = ["PdfRenderer"]
