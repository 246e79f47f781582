from __future__ import annotations

import io
from typing import Iterable

import numpy as np
from PIL import Image

from plotxy.commands import Column, DrawCommand, Line, Point, Rect, Text
from plotxy.layout import Region
from plotxy.raster import draw_circle, draw_column, draw_line, draw_text, fill_rect, new_canvas


def rasterize(commands: Iterable[DrawCommand], width: int, height: int) -> np.ndarray:
    """Paint commands in order onto an RGBA canvas of shape (height, width, 4)."""
    canvas = new_canvas(width, height, color=(255, 255, 255, 0))
    for cmd in commands:
        if isinstance(cmd, Rect):
            if cmd.width > 0 and cmd.height > 0:
                fill_rect(canvas, cmd.x, cmd.y, cmd.x + cmd.width - 1, cmd.y + cmd.height - 1, cmd.color)
        elif isinstance(cmd, Point):
            target, ox, oy = _clipped(canvas, cmd.clip)
            draw_circle(target, cmd.x - ox, cmd.y - oy, cmd.size, cmd.color)
        elif isinstance(cmd, Column):
            target, ox, oy = _clipped(canvas, cmd.clip)
            draw_column(target, cmd.x - ox, cmd.y0 - oy, cmd.y1 - oy, cmd.color, width=cmd.width)
        elif isinstance(cmd, Line):
            draw_line(canvas, cmd.x0, cmd.y0, cmd.x1, cmd.y1, cmd.color, width=cmd.width)
        elif isinstance(cmd, Text):
            draw_text(
                canvas,
                cmd.x,
                cmd.y,
                cmd.content,
                cmd.color,
                font_family=cmd.font,
                font_size_px=cmd.size,
                anchor=cmd.anchor,
                baseline=cmd.baseline,
                rotate_deg=cmd.rotate_deg,
            )
        else:
            raise TypeError(f"unsupported draw command: {type(cmd)!r}")
    return canvas


def encode_png(canvas: np.ndarray) -> bytes:
    if canvas.dtype != np.uint8:
        raise ValueError("canvas must be uint8")
    if canvas.ndim != 3 or canvas.shape[2] != 4:
        raise ValueError("canvas must have shape (H, W, 4)")
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(canvas)).save(buf, format="PNG")
    return buf.getvalue()


def _clipped(canvas: np.ndarray, clip: Region | None) -> tuple[np.ndarray, int, int]:
    """Return a writable view limited to ``clip`` and the view's origin on the canvas."""
    if clip is None:
        return canvas, 0, 0
    x0 = max(0, clip.x)
    y0 = max(0, clip.y)
    return canvas[y0 : max(y0, clip.bottom), x0 : max(x0, clip.right)], x0, y0
