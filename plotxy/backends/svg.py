from __future__ import annotations

from typing import Iterable
import xml.etree.ElementTree as ET

from plotxy.commands import RGBA, Column, DrawCommand, Line, Point, Rect, Text
from plotxy.layout import Region


SVG_NS = "http://www.w3.org/2000/svg"
_TEXT_BASELINE = {"top": "text-before-edge", "middle": "central", "bottom": "text-after-edge"}


def render_svg(commands: Iterable[DrawCommand], width: int, height: int) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(width),
            "height": str(height),
            "viewBox": f"0 0 {width} {height}",
        },
    )
    clips = _ClipPaths(root)
    for cmd in commands:
        if isinstance(cmd, Rect):
            ET.SubElement(
                root,
                "rect",
                {"x": _num(cmd.x), "y": _num(cmd.y), "width": _num(cmd.width), "height": _num(cmd.height), **_paint("fill", cmd.color)},
            )
        elif isinstance(cmd, Point):
            ET.SubElement(
                root,
                "circle",
                {"cx": _num(cmd.x), "cy": _num(cmd.y), "r": _num(cmd.size), **_paint("fill", cmd.color), **clips.attrs(cmd.clip)},
            )
        elif isinstance(cmd, Column):
            top = min(cmd.y0, cmd.y1)
            ET.SubElement(
                root,
                "rect",
                {
                    "x": _num(cmd.x - cmd.width / 2.0),
                    "y": _num(top),
                    "width": _num(cmd.width),
                    "height": _num(max(1.0, abs(cmd.y1 - cmd.y0))),
                    **_paint("fill", cmd.color),
                    **clips.attrs(cmd.clip),
                },
            )
        elif isinstance(cmd, Line):
            ET.SubElement(
                root,
                "line",
                {
                    "x1": _num(cmd.x0),
                    "y1": _num(cmd.y0),
                    "x2": _num(cmd.x1),
                    "y2": _num(cmd.y1),
                    "stroke-width": _num(cmd.width),
                    **_paint("stroke", cmd.color),
                },
            )
        elif isinstance(cmd, Text):
            attrs = {
                "x": _num(cmd.x),
                "y": _num(cmd.y),
                "font-family": cmd.font,
                "font-size": _num(cmd.size),
                "text-anchor": cmd.anchor,
                "dominant-baseline": _TEXT_BASELINE[cmd.baseline],
                **_paint("fill", cmd.color),
            }
            if cmd.rotate_deg:
                attrs["transform"] = f"rotate({-cmd.rotate_deg} {_num(cmd.x)} {_num(cmd.y)})"
            ET.SubElement(root, "text", attrs).text = cmd.content
        else:
            raise TypeError(f"unsupported draw command: {type(cmd)!r}")
    return ET.tostring(root, encoding="unicode")


def _paint(attr: str, color: RGBA) -> dict[str, str]:
    r, g, b, a = color
    out = {attr: f"#{r:02x}{g:02x}{b:02x}"}
    if a < 255:
        out[f"{attr}-opacity"] = f"{a / 255.0:.3f}"
    return out


def _num(value: float) -> str:
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class _ClipPaths:
    """Lazily emitted ``<clipPath>`` definitions, one per distinct region."""

    def __init__(self, root: ET.Element) -> None:
        self._root = root
        self._defs: ET.Element | None = None
        self._ids: dict[Region, str] = {}

    def attrs(self, region: Region | None) -> dict[str, str]:
        if region is None:
            return {}
        ident = self._ids.get(region)
        if ident is None:
            if self._defs is None:
                self._defs = ET.Element("defs")
                self._root.insert(0, self._defs)
            ident = f"clip{len(self._ids)}"
            self._ids[region] = ident
            clip = ET.SubElement(self._defs, "clipPath", {"id": ident})
            ET.SubElement(
                clip,
                "rect",
                {"x": _num(region.x), "y": _num(region.y), "width": _num(region.width), "height": _num(region.height)},
            )
        return {"clip-path": f"url(#{ident})"}
