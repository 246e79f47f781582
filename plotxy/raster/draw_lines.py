from __future__ import annotations

import numpy as np

from plotxy.raster.canvas import RGBA, draw_hline, draw_vline, fill_rect


def draw_line(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    ax, ay, bx, by = (int(round(v)) for v in (x0, y0, x1, y1))
    if ay == by:
        draw_hline(dst, ax, bx, ay, color, width=width)
        return
    if ax == bx:
        draw_vline(dst, ax, ay, by, color, width=width)
        return
    _draw_line_segment(dst, ax, ay, bx, by, color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    radius = max(0, width // 2)

    while True:
        fill_rect(dst, x0 - radius, y0 - radius, x0 + radius, y0 + radius, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
