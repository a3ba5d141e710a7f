"""Image and font resources used during layout and rendering."""

from .font_registry import FontRegistry, FontSet
from .resource_cache import ResourceCache

__all__ = ["FontRegistry", "FontSet", "ResourceCache"]
