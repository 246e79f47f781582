from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Literal, Sequence

import numpy as np

from plotxy.errors import DomainError
from plotxy.rows import DataPoint


LOGGER = logging.getLogger(__name__)

ScaleKind = Literal["linear", "log"]
Axis = Literal["x", "y"]


@dataclass(frozen=True)
class Domain:
    min: float
    max: float

    @property
    def degenerate(self) -> bool:
        return self.max == self.min


def axis_values(points: Sequence[DataPoint], axis: Axis) -> np.ndarray:
    if axis == "x":
        return np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    return np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))


def resolve_domain(
    points: Sequence[DataPoint],
    axis: Axis,
    explicit_min: float | None = None,
    explicit_max: float | None = None,
    *,
    kind: ScaleKind = "linear",
) -> Domain:
    return domain_from_values(
        axis_values(points, axis),
        explicit_min=explicit_min,
        explicit_max=explicit_max,
        kind=kind,
        label=axis,
    )


def domain_from_values(
    values: np.ndarray,
    *,
    explicit_min: float | None = None,
    explicit_max: float | None = None,
    kind: ScaleKind = "linear",
    label: str = "value",
) -> Domain:
    """Resolve the [min, max] range of one axis.

    Explicit bounds are taken verbatim, missing ones are derived from the finite
    observed values. On a log axis only positive values are observed and a
    non-positive minimum is clamped to the smallest positive value.
    """
    observed = values[np.isfinite(values)]
    if kind == "log":
        observed = observed[observed > 0]

    def _observed(reducer) -> float:
        if observed.size == 0:
            if kind == "log":
                raise DomainError(f"log scale on {label} axis has no positive values")
            raise DomainError(f"{label} axis has no finite values")
        return float(reducer(observed))

    lo = float(explicit_min) if explicit_min is not None else _observed(np.min)
    hi = float(explicit_max) if explicit_max is not None else _observed(np.max)

    if kind == "log":
        if hi <= 0:
            raise DomainError(f"log scale on {label} axis needs a positive maximum, got {hi:g}")
        if lo <= 0:
            clamped = _observed(np.min)
            LOGGER.warning("%s axis: log minimum %g clamped to %g", label, lo, clamped)
            lo = clamped

    if lo > hi:
        LOGGER.warning("%s axis: min %g > max %g, swapping", label, lo, hi)
        lo, hi = hi, lo
    return Domain(min=lo, max=hi)


def normalize(value: float, domain: Domain, kind: ScaleKind = "linear") -> float:
    """Map ``value`` to a [0, 1] position; results outside the domain are not clamped.

    Non-positive values on a log scale have no position and yield NaN.
    """
    if kind == "log":
        if value <= 0:
            return math.nan
        if domain.degenerate:
            return 0.5
        lo = math.log10(domain.min)
        return (math.log10(value) - lo) / (math.log10(domain.max) - lo)
    if domain.degenerate:
        return 0.5
    # halved so that spans near the float limit stay finite
    return (value / 2.0 - domain.min / 2.0) / (domain.max / 2.0 - domain.min / 2.0)


def normalize_array(values: np.ndarray, domain: Domain, kind: ScaleKind = "linear") -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    if kind == "log":
        positive = values > 0
        logs = np.full(values.shape, np.nan, dtype=np.float64)
        logs[positive] = np.log10(values[positive])
        if domain.degenerate:
            return np.where(positive, 0.5, np.nan)
        lo = math.log10(domain.min)
        return (logs - lo) / (math.log10(domain.max) - lo)
    if domain.degenerate:
        return np.full(values.shape, 0.5, dtype=np.float64)
    return (values / 2.0 - domain.min / 2.0) / (domain.max / 2.0 - domain.min / 2.0)


def axis_ticks(domain: Domain, kind: ScaleKind = "linear", target: int = 5) -> np.ndarray:
    """Evenly spaced tick values inside ``domain`` (evenly spaced in log10 on log axes).

    At least ``target`` and at most ``2 * target`` ticks are returned, except for a
    degenerate domain which gets a single tick.
    """
    if domain.degenerate:
        return np.asarray([domain.min], dtype=np.float64)
    if kind == "log":
        lo = math.log10(domain.min)
        hi = math.log10(domain.max)
        decades = np.arange(math.ceil(lo), math.floor(hi) + 1, dtype=np.float64)
        if decades.size >= target:
            stride = max(1, math.ceil(decades.size / (2 * target)))
            return np.power(10.0, decades[::stride])
        return np.power(10.0, generate_nice_ticks(lo, hi, target))
    return generate_nice_ticks(domain.min, domain.max, target)


# 10^exp first, then 5, 2.5 and 2 times 10^(exp-1)
_STEP_MANTISSAS = (10.0, 5.0, 2.5, 2.0)
_MAX_REFINEMENTS = 32


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Multiples of the coarsest 1/2/2.5/5 step that puts ``target`` ticks in [vmin, vmax].

    Consecutive candidate steps shrink by at most a factor of two, so the first
    one that reaches ``target`` ticks never yields more than ``2 * target``.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)
    span = vmax - vmin
    if not np.isfinite(span):
        return _spread_ticks(vmin, vmax, target)

    exp = math.ceil(math.log10(span))
    for _ in range(_MAX_REFINEMENTS):
        for mantissa in _STEP_MANTISSAS:
            ticks = _multiples(vmin, vmax, mantissa, exp)
            if ticks is None:
                return _spread_ticks(vmin, vmax, target)
            if ticks.size >= target:
                return ticks
        exp -= 1
    return _spread_ticks(vmin, vmax, target)


def _multiples(vmin: float, vmax: float, mantissa: float, exp: int) -> np.ndarray | None:
    if abs(exp - 1) > 300:
        return None
    # exact decimal steps: k * m / 10^n reads better than k * (m * 0.1^n)
    scale = 10.0 ** abs(exp - 1)
    step = mantissa * scale if exp - 1 >= 0 else mantissa / scale
    if not np.isfinite(step):
        return np.empty(0, dtype=np.float64)
    if step == 0.0:
        return None
    lo = vmin / step
    hi = vmax / step
    if not (np.isfinite(lo) and np.isfinite(hi)):
        return None
    first = math.ceil(lo - 1e-9)
    last = math.floor(hi + 1e-9)
    if last - first > 4096:
        return None
    k = np.arange(first, last + 1, dtype=np.float64)
    ticks = k * mantissa * scale if exp - 1 >= 0 else k * mantissa / scale
    ticks[k == 0] = 0.0
    return ticks


def _spread_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    t = np.linspace(0.0, 1.0, max(target, 2))
    ticks = vmin * (1.0 - t) + vmax * t
    ticks[0] = vmin
    ticks[-1] = vmax
    return ticks
