from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math

import numpy as np


SI_PREFIXES = {
    12: "T",
    9: "G",
    6: "M",
    3: "K",
    0: "",
    -3: "m",
    -6: "µ",
    -9: "n",
}
SI_DIGITS = 3


def format_si(value: float, digits: int = SI_DIGITS) -> str:
    """Compact ``value`` with a metric suffix, e.g. 1500 -> ``1.5K``."""
    if not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0"
    p = 3 * math.floor(math.log10(abs(value)) / 3)
    p = min(max(SI_PREFIXES), max(min(SI_PREFIXES), p))
    scaled = value / (10.0**p)
    # 999.96K rounds up to 1000K; move to the next prefix instead
    if abs(float(f"{scaled:.{digits}g}")) >= 1000 and p < max(SI_PREFIXES):
        p += 3
        scaled = value / (10.0**p)
    text = f"{scaled:.{digits}g}"
    if "e" in text:
        text = f"{scaled:.{digits}f}".rstrip("0").rstrip(".")
    return f"{text}{SI_PREFIXES[p]}"


def format_tick(value: float, *, step: float | None = None, si: bool = False) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    if si:
        return format_si(value)
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.3e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray, *, si: bool = False, log: bool = False) -> list[str]:
    if ticks.size == 0:
        return []
    if log:
        # log ticks are not evenly spaced in value; format each on its own
        return [format_tick(float(f"{v:.4g}"), si=si) for v in ticks]
    if ticks.size == 1:
        return [format_tick(float(v), si=si) for v in ticks]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step, si=si) for v in ticks]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
