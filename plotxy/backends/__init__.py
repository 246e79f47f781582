from __future__ import annotations

from typing import Iterable

from plotxy.commands import DrawCommand
from plotxy.errors import OutputError

from .raster import encode_png, rasterize
from .svg import render_svg


def encode(commands: Iterable[DrawCommand], width: int, height: int, fmt: str = "png") -> bytes:
    try:
        if fmt == "png":
            return encode_png(rasterize(commands, width, height))
        if fmt == "svg":
            return render_svg(commands, width, height).encode("utf-8")
    except (OSError, ValueError) as exc:
        raise OutputError(f"{fmt} encoding failed: {exc}") from exc
    raise OutputError(f"unsupported output format: {fmt}")


__all__ = ["encode", "encode_png", "rasterize", "render_svg"]
