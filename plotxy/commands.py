from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from plotxy.layout import Region


RGBA = tuple[int, int, int, int]
Anchor = Literal["start", "middle", "end"]
Baseline = Literal["top", "middle", "bottom"]


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int
    color: RGBA


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    color: RGBA
    size: int
    clip: Region | None = None


@dataclass(frozen=True)
class Column:
    """Vertical bar centred on ``x`` spanning pixel rows ``y0`` (baseline) to ``y1`` (value)."""

    x: float
    y0: float
    y1: float
    color: RGBA
    width: int
    clip: Region | None = None


@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    width: int = 1


@dataclass(frozen=True)
class Text:
    content: str
    x: float
    y: float
    font: str
    size: float
    color: RGBA = (0, 0, 0, 255)
    anchor: Anchor = "start"
    baseline: Baseline = "top"
    rotate_deg: int = 0


DrawCommand = Union[Rect, Point, Column, Line, Text]
