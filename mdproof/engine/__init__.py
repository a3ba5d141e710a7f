"""Layout engine: measurement, line breaking, sectioning and pagination."""

from .atomizer import Atomizer
from .events import AtomEvent, BlockTag, Break, BreakKind, EndBlock, ImageAtom, StartBlock, TextAtom
from .geometry import Margins, Size
from .paginator import Page, Paginator
from .section import BlockQuote, CodeBlock, ListItem, PageBreak, Plain, ThematicBreak, VerticalSpace
from .sectioner import Sectioner
from .sizer import SizedAtom, Sizer
from .span import ImageSpan, PositionedSpan, RectSpan, TextSpan
from .style import Style, StyleFlag
from .text_metrics import MetricsProvider, ReportLabMetrics

__all__ = [
    "Atomizer",
    "AtomEvent",
    "BlockTag",
    "Break",
    "BreakKind",
    "EndBlock",
    "ImageAtom",
    "StartBlock",
    "TextAtom",
    "Margins",
    "Size",
    "Page",
    "Paginator",
    "BlockQuote",
    "CodeBlock",
    "ListItem",
    "PageBreak",
    "Plain",
    "ThematicBreak",
    "VerticalSpace",
    "Sectioner",
    "SizedAtom",
    "Sizer",
    "ImageSpan",
    "PositionedSpan",
    "RectSpan",
    "TextSpan",
    "Style",
    "StyleFlag",
    "MetricsProvider",
    "ReportLabMetrics",
]
