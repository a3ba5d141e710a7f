"""Geometry primitives and unit helpers for layout calculations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reportlab.lib.units import mm


POINTS_PER_INCH = 72.0


@dataclass(slots=True, frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))

    @classmethod
    def from_mm(cls, width: float, height: float) -> "Size":
        return cls(width * mm, height * mm)


@dataclass(slots=True, frozen=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


def mm_to_points(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) * mm


def px_to_points(value: float | None, dpi: float = 96.0) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_INCH / dpi
