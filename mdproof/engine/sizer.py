"""Atom measurement stage.

``Sizer`` wraps an event iterator and annotates every atom with its measured
size, exactly once, so later stages never re-measure.  Structural events
pass through unchanged.  It pulls one event per ``next()`` call and never
buffers or reorders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

from .events import Atom, AtomEvent, Break, EndBlock, Event, ImageAtom, StartBlock, TextAtom
from .geometry import Size
from .text_metrics import MetricsProvider

logger = logging.getLogger(__name__)

DEFAULT_MISSING_IMAGE_SIZE = Size.from_mm(50.0, 50.0)


@dataclass(slots=True, frozen=True)
class SizedAtom:
    atom: Atom
    width: float
    height: float


SizedEvent = Union[SizedAtom, StartBlock, EndBlock, Break]


class Sizer:
    """Lazily turns ``Event`` values into ``SizedEvent`` values."""

    def __init__(
        self,
        events: Iterable[Event],
        metrics: MetricsProvider,
        missing_image_size: Optional[Size] = None,
    ):
        self._events: Iterator[Event] = iter(events)
        self.metrics = metrics
        self.missing_image_size = missing_image_size or DEFAULT_MISSING_IMAGE_SIZE
        self.missing_images: List[str] = []
        self.count = 0

    def __iter__(self) -> "Sizer":
        return self

    def __next__(self) -> SizedEvent:
        event = next(self._events)
        self.count += 1
        if isinstance(event, AtomEvent):
            return self._size(event.atom)
        if isinstance(event, (StartBlock, EndBlock, Break)):
            return event
        raise TypeError(f"Unexpected event {event!r}")

    def _size(self, atom: Atom) -> SizedAtom:
        if isinstance(atom, TextAtom):
            width, height = self.metrics.measure_text(atom.style, atom.text)
            return SizedAtom(atom, width, height)

        if isinstance(atom, ImageAtom):
            dimensions = self.metrics.measure_image(atom.uri)
            if dimensions is None:
                logger.warning(
                    "Couldn't load image %r; reserving %.0fx%.0f pt",
                    atom.uri, self.missing_image_size.width, self.missing_image_size.height,
                )
                self.missing_images.append(atom.uri)
                return SizedAtom(atom, self.missing_image_size.width, self.missing_image_size.height)
            width, height = dimensions
            return SizedAtom(atom, width, height)

        raise TypeError(f"Unexpected atom {atom!r}")
