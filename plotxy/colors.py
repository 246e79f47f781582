from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Sequence

import numpy as np

from plotxy.scales import Domain, domain_from_values, normalize


LOGGER = logging.getLogger(__name__)

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

# Ordered, visually distinct hues; categories cycle through them by first appearance.
PALETTE: tuple[RGB, ...] = (
    (230, 25, 75),
    (60, 180, 75),
    (0, 130, 200),
    (245, 130, 48),
    (145, 30, 180),
    (70, 240, 240),
    (240, 50, 230),
    (210, 245, 60),
    (0, 128, 128),
    (170, 110, 40),
)
UNDEFINED_COLOR: RGB = (128, 128, 128)


def apply_alpha(color: RGB, alpha: float) -> RGBA:
    r, g, b = color
    return (r, g, b, int(max(0.0, min(1.0, alpha)) * 255))


def interpolate_color(low: RGB, high: RGB, position: float) -> RGB:
    """Channel-wise linear blend; 0.0 is exactly ``low`` and 1.0 exactly ``high``."""
    t = max(0.0, min(1.0, position))
    return tuple(int(round(lo + (hi - lo) * t)) for lo, hi in zip(low, high))  # type: ignore[return-value]


@dataclass
class CategoricalColorMapper:
    palette: Sequence[RGB] = PALETTE
    undefined: RGB = UNDEFINED_COLOR
    _index: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_values(cls, values: Sequence[str | None], **kwargs) -> "CategoricalColorMapper":
        mapper = cls(**kwargs)
        for value in values:
            if value:
                mapper._index.setdefault(value, len(mapper._index))
        return mapper

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._index)

    def index_of(self, value: str | None) -> int | None:
        if not value:
            return None
        return self._index.get(value)

    def color_for(self, value: str | None) -> RGB:
        idx = self.index_of(value)
        if idx is None:
            return self.undefined
        return tuple(self.palette[idx % len(self.palette)])  # type: ignore[return-value]


@dataclass
class GradientColorMapper:
    domain: Domain | None
    low: RGB = (255, 255, 0)
    high: RGB = (255, 0, 0)
    undefined: RGB = UNDEFINED_COLOR

    @classmethod
    def from_values(cls, values: Sequence[str | None], **kwargs) -> "GradientColorMapper":
        parsed = np.asarray([_parse_number(v) for v in values], dtype=np.float64)
        bad = int(np.count_nonzero(~np.isfinite(parsed)))
        if bad:
            LOGGER.warning("%d gradient facet value(s) are not numeric; using the undefined color", bad)
        domain = None
        if np.any(np.isfinite(parsed)):
            domain = domain_from_values(parsed, label="gradient")
        return cls(domain=domain, **kwargs)

    def position_of(self, value: str | None) -> float | None:
        number = _parse_number(value)
        if self.domain is None or not math.isfinite(number):
            return None
        return normalize(number, self.domain, "linear")

    def color_for(self, value: str | None) -> RGB:
        position = self.position_of(value)
        if position is None:
            return self.undefined
        return interpolate_color(self.low, self.high, position)


def _parse_number(value: str | None) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except ValueError:
        return math.nan
