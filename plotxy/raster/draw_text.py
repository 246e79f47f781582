from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from plotxy.raster.canvas import RGBA, blend_region


DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE_PX = 24.0
GENERIC_FAMILIES = {
    "sans-serif": ("dejavusans", "liberationsans", "arial", "helvetica", "freesans"),
    "serif": ("dejavuserif", "liberationserif", "times", "freeserif"),
    "monospace": ("dejavusansmono", "liberationmono", "menlo", "courier", "freemono"),
}
FONT_DIRS = (
    Path.home() / ".fonts",
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("C:/Windows/Fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    anchor: str = "start",
    baseline: str = "top",
    rotate_deg: int = 0,
) -> None:
    """Blend ``text`` into ``dst`` with its box anchored at (x, y).

    ``anchor`` picks the horizontal reference (start/middle/end) and
    ``baseline`` the vertical one (top/middle/bottom) of the rotated box.
    """
    if not text:
        return
    font = _load_font(font_family, font_size_px)
    mask = _rotate_mask(_render_mask(text, font), rotate_deg=rotate_deg)
    h, w = mask.shape
    x0 = x - {"start": 0.0, "middle": w / 2.0, "end": float(w)}[anchor]
    y0 = y - {"top": 0.0, "middle": h / 2.0, "bottom": float(h)}[baseline]
    blend_region(dst, int(round(x0)), int(round(y0)), mask.astype(np.float32) / 255.0, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    font = _load_font(font_family, font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if _normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() or DEFAULT_FONT_FAMILY
    candidate_path = Path(font_family)
    if candidate_path.suffix.lower() in {".ttf", ".otf", ".ttc"} and candidate_path.is_file():
        return candidate_path
    patterns = GENERIC_FAMILIES.get(wanted, (wanted,) + GENERIC_FAMILIES["sans-serif"])

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "").replace("-", "")
        for path in sorted(candidates, key=lambda c: len(c.stem)):
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if stem == p or stem.startswith(p):
                return path
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    # counter-clockwise, matching SVG rotate(-deg)
    return np.rot90(mask, k=turns)
