from __future__ import annotations

import numpy as np

from plotxy.raster.canvas import RGBA, blend_region, fill_rect


def draw_circle(dst: np.ndarray, cx: float, cy: float, radius: int, color: RGBA) -> None:
    r = max(0, int(radius))
    x0 = int(round(cx)) - r
    y0 = int(round(cy)) - r
    yy, xx = np.mgrid[0 : 2 * r + 1, 0 : 2 * r + 1]
    mask = ((xx - r) ** 2 + (yy - r) ** 2) <= r * r
    blend_region(dst, x0, y0, mask.astype(np.float32), color)


def draw_column(dst: np.ndarray, x: float, y0: float, y1: float, color: RGBA, width: int = 1) -> None:
    w = max(1, int(width))
    left = int(round(x - (w - 1) / 2.0))
    fill_rect(dst, left, int(round(y0)), left + w - 1, int(round(y1)), color)
