from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_region(dst: np.ndarray, x0: int, y0: int, coverage: np.ndarray, color: RGBA) -> None:
    """Source-over blend ``color`` weighted by ``coverage`` (0..1) into ``dst`` at (x0, y0)."""
    h, w = coverage.shape
    xa = max(0, x0)
    ya = max(0, y0)
    xb = min(dst.shape[1], x0 + w)
    yb = min(dst.shape[0], y0 + h)
    if xa >= xb or ya >= yb:
        return
    cov = coverage[ya - y0 : yb - y0, xa - x0 : xb - x0]
    alpha = (color[3] / 255.0) * cov.astype(np.float32)
    if not np.any(alpha > 0):
        return
    patch = dst[ya:yb, xa:xb]
    src = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_a = patch[:, :, 3].astype(np.float32) / 255.0
    out_a = alpha + dst_a * (1.0 - alpha)
    num = src * alpha[:, :, None] + dst_rgb * (dst_a * (1.0 - alpha))[:, :, None]
    safe = np.where(out_a > 1e-6, out_a, 1.0)
    patch[:, :, :3] = np.clip(num / safe[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_a * 255.0, 0, 255).astype(np.uint8)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the inclusive pixel box spanned by the two corners."""
    left, right = sorted((int(x0), int(x1)))
    top, bottom = sorted((int(y0), int(y1)))
    coverage = np.ones((bottom - top + 1, right - left + 1), dtype=np.float32)
    blend_region(dst, left, top, coverage, color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    half = max(0, width - 1) // 2
    fill_rect(dst, x0, y - half, x1, y - half + max(1, width) - 1, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    half = max(0, width - 1) // 2
    fill_rect(dst, x - half, y0, x - half + max(1, width) - 1, y1, color)
