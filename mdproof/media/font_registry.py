from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFError, TTFont  # type: ignore

from ..engine.style import Style
from ..exceptions import FontError

logger = logging.getLogger(__name__)

FALLBACK_FONTS: Dict[str, str] = {
    "regular": "Helvetica",
    "bold": "Helvetica-Bold",
    "italic": "Helvetica-Oblique",
    "bold_italic": "Helvetica-BoldOblique",
    "mono": "Courier",
}


@dataclass(slots=True, frozen=True)
class FontSet:
    """ReportLab font names for every face the layout can select."""
    regular: str = FALLBACK_FONTS["regular"]
    bold: str = FALLBACK_FONTS["bold"]
    italic: str = FALLBACK_FONTS["italic"]
    bold_italic: str = FALLBACK_FONTS["bold_italic"]
    mono: str = FALLBACK_FONTS["mono"]

    def for_style(self, style: Style) -> str:
        # Monospace wins over bold+italic, which wins over bold or italic alone.
        if style.code:
            return self.mono
        if style.strong and style.emphasis:
            return self.bold_italic
        if style.strong:
            return self.bold
        if style.emphasis:
            return self.italic
        return self.regular


def _is_registered(font_name: str) -> bool:
    try:
        pdfmetrics.getFont(font_name)
    except KeyError:
        return False
    return True


def register_ttf(font_name: str, path: Path) -> str:
    """Register a TrueType file with ReportLab under ``font_name``."""
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name
    if not path.exists():
        raise FontError(f"Font file not found for {font_name}", str(path))
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(path)))
    except (TTFError, OSError) as exc:
        raise FontError(f"Cannot register font {font_name}", f"{path}: {exc}") from exc
    logger.debug("Registered font %s from %s", font_name, path)
    return font_name


class FontRegistry:
    """Resolves the configured faces to names ReportLab can measure and draw."""

    def __init__(self) -> None:
        self.failed: List[str] = []

    def register(self, config) -> FontSet:
        names = {}
        for role in FALLBACK_FONTS:
            names[role] = self._resolve(role, getattr(config, f"{role}_font"), config.font_files.get(role))
        return FontSet(**names)

    def _resolve(self, role: str, font_name: str, font_file: Optional[Path]) -> str:
        if font_file is not None:
            try:
                return register_ttf(f"mdproof-{role}-{Path(font_file).stem}", Path(font_file))
            except FontError as exc:
                logger.warning("%s; using %s instead", exc, FALLBACK_FONTS[role])
                self.failed.append(str(font_file))
                return FALLBACK_FONTS[role]

        if _is_registered(font_name):
            return font_name
        logger.warning("Unknown font '%s' for %s text; using %s instead", font_name, role, FALLBACK_FONTS[role])
        self.failed.append(font_name)
        return FALLBACK_FONTS[role]
