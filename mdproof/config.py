"""Layout configuration.

All lengths are PostScript points.  Defaults are written in millimetres
through :data:`reportlab.lib.units.mm`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.units import mm

from .engine.geometry import Margins, Size, mm_to_points
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PAGE_SIZES: Dict[str, Size] = {
    "a4": Size.from_tuple(A4),
    "letter": Size.from_tuple(LETTER),
}

FONT_ROLES = ("regular", "bold", "italic", "bold_italic", "mono")


def _default_heading_sizes() -> Dict[int, float]:
    return {1: 32.0, 2: 28.0, 3: 20.0, 4: 16.0}


@dataclass(slots=True)
class LayoutConfig:
    """Configuration constant for one layout run."""
    page_size: Size = field(default_factory=lambda: PAGE_SIZES["a4"])
    margins: Margins = field(default_factory=lambda: Margins.uniform(20 * mm))
    title: str = "mdproof"
    resources_directory: Path = field(default_factory=lambda: Path("."))

    regular_font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    italic_font: str = "Helvetica-Oblique"
    bold_italic_font: str = "Helvetica-BoldOblique"
    mono_font: str = "Courier"
    font_files: Dict[str, Path] = field(default_factory=dict)

    default_font_size: float = 12.0
    heading_font_sizes: Dict[int, float] = field(default_factory=_default_heading_sizes)

    line_spacing: float = 1.0  # multiplies every vertical step
    list_indentation: float = 10 * mm
    quote_indentation: float = 20 * mm
    code_indentation: float = 10 * mm
    section_spacing: float = 5 * mm

    image_dpi: float = 300.0
    missing_image_size: Size = field(default_factory=lambda: Size.from_mm(50.0, 50.0))
    rule_thickness: float = 1.0
    list_marker: str = "•"
    quote_marker: str = "|"
    max_nesting_depth: int = 32

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return self.page_size.height - self.margins.top - self.margins.bottom

    @property
    def content_top(self) -> float:
        """Top of content area in PDF coordinates."""
        return self.page_size.height - self.margins.top

    @property
    def content_bottom(self) -> float:
        """Bottom of content area in PDF coordinates."""
        return self.margins.bottom

    def font_size_for(self, heading_level: int | None) -> float:
        if heading_level is None:
            return self.default_font_size
        return self.heading_font_sizes.get(heading_level, self.default_font_size)

    def validate(self) -> "LayoutConfig":
        """Raise :class:`ConfigurationError` if the configuration is unusable."""
        if self.content_width <= 0 or self.content_height <= 0:
            raise ConfigurationError(
                "Margins leave no room for content",
                f"content area is {self.content_width:.1f} x {self.content_height:.1f} pt",
            )
        if self.line_spacing < 1.0:
            raise ConfigurationError("line_spacing must be at least 1.0", str(self.line_spacing))
        for name in ("list_indentation", "quote_indentation", "code_indentation", "section_spacing"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative", str(getattr(self, name)))
        if self.default_font_size <= 0:
            raise ConfigurationError("default_font_size must be positive", str(self.default_font_size))
        if self.image_dpi <= 0:
            raise ConfigurationError("image_dpi must be positive", str(self.image_dpi))
        if self.max_nesting_depth < 1:
            raise ConfigurationError("max_nesting_depth must be at least 1", str(self.max_nesting_depth))
        unknown_roles = set(self.font_files) - set(FONT_ROLES)
        if unknown_roles:
            raise ConfigurationError("Unknown font roles", ", ".join(sorted(unknown_roles)))
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutConfig":
        """Build a configuration from a plain mapping.

        Lengths are given in millimetres under ``*_mm`` keys, font sizes in
        points.  Unknown keys are rejected.

        Example::

            LayoutConfig.from_dict({"page_size": "letter", "margin_mm": 25})
        """
        config = cls()
        values: Dict[str, Any] = {}
        margins = config.margins
        width = height = None

        for key, value in data.items():
            try:
                if key == "page_size":
                    try:
                        values["page_size"] = PAGE_SIZES[str(value).lower()]
                    except KeyError:
                        raise ConfigurationError("Unknown page size", str(value)) from None
                elif key == "page_width_mm":
                    width = mm_to_points(value)
                elif key == "page_height_mm":
                    height = mm_to_points(value)
                elif key == "margin_mm":
                    margins = Margins.uniform(mm_to_points(value))
                elif key in ("margin_top_mm", "margin_bottom_mm", "margin_left_mm", "margin_right_mm"):
                    side = key[len("margin_"):-len("_mm")]
                    margins = replace(margins, **{side: mm_to_points(value)})
                elif key in ("list_indentation_mm", "quote_indentation_mm", "code_indentation_mm", "section_spacing_mm"):
                    values[key[: -len("_mm")]] = mm_to_points(value)
                elif key == "missing_image_size_mm":
                    values["missing_image_size"] = Size(*(mm_to_points(v) for v in value))
                elif key == "heading_font_sizes":
                    sizes = _default_heading_sizes()
                    sizes.update({int(level): float(size) for level, size in value.items()})
                    values["heading_font_sizes"] = sizes
                elif key == "font_files":
                    values["font_files"] = {str(role): Path(path) for role, path in value.items()}
                elif key == "resources_directory":
                    values["resources_directory"] = Path(value)
                elif key in ("default_font_size", "line_spacing", "image_dpi", "rule_thickness"):
                    values[key] = float(value)
                elif key == "max_nesting_depth":
                    values[key] = int(value)
                elif key in ("title", "regular_font", "bold_font", "italic_font", "bold_italic_font",
                             "mono_font", "list_marker", "quote_marker"):
                    values[key] = str(value)
                else:
                    raise ConfigurationError("Unknown configuration key", key)
            except (TypeError, ValueError, AttributeError) as exc:
                raise ConfigurationError("Invalid value for configuration key", f"{key}: {exc}") from exc

        if width is not None or height is not None:
            base = values.get("page_size", config.page_size)
            values["page_size"] = Size(
                width if width is not None else base.width,
                height if height is not None else base.height,
            )
        values["margins"] = margins
        return replace(config, **values)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LayoutConfig":
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError("Cannot read configuration file", f"{path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError("Configuration file is not valid JSON", f"{path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must hold a JSON object", str(path))
        logger.debug("Loaded layout configuration from %s", path)
        return cls.from_dict(data)
