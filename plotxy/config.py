from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


RGB = tuple[int, int, int]
Shape = Literal["circle", "column"]
OutputFormat = Literal["png", "svg"]

DEFAULT_PLOT_COLOR = "1E88E5"
DEFAULT_GRADIENT_LOW = "FFFF00"
DEFAULT_GRADIENT_HIGH = "FF0000"
DEFAULT_FONT = "sans-serif"


def parse_hex_color(value: str) -> RGB:
    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"not a hex color: {value!r}")
    try:
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    except ValueError as exc:
        raise ValueError(f"not a hex color: {value!r}") from exc


def parse_delimiter(value: str) -> str:
    if value in {"\\t", "\t"} or value.lower() == "tab":
        return "\t"
    if not value:
        raise ValueError("delimiter must not be empty")
    return value[0]


@dataclass(frozen=True)
class PlotConfig:
    # input selection (1-based columns; x=0 plots against the row ordinal)
    x: int = 1
    y: int = 2
    color: int | None = None
    gradient: int | None = None
    delimiter: str = "\t"
    header: bool = False
    skip: int = 0

    # axes
    logx: bool = False
    logy: bool = False
    x_dim_min: float | None = None
    x_dim_max: float | None = None
    y_dim_min: float | None = None
    y_dim_max: float | None = None
    ticks: int = 5
    xsi: bool = False
    ysi: bool = False

    # marks
    width: int = 2560
    height: int = 1200
    size: int = 5
    shape: Shape = "circle"
    alpha: float = 0.3
    plot_color: RGB = (0x1E, 0x88, 0xE5)
    gradient_low: RGB = (0xFF, 0xFF, 0x00)
    gradient_high: RGB = (0xFF, 0x00, 0x00)

    # text and bands
    title: str | None = None
    title_font: str = DEFAULT_FONT
    title_size: float = 20.0
    xdesc: str | None = None
    ydesc: str | None = None
    xdesc_font: str = DEFAULT_FONT
    xdesc_size: float = 22.0
    ydesc_font: str = DEFAULT_FONT
    ydesc_size: float = 22.0
    xdesc_area: int = 70
    ydesc_area: int = 100
    label_font: str = DEFAULT_FONT
    label_size: float = 24.0
    margin: int = 26

    output_format: OutputFormat = "png"

    def __post_init__(self) -> None:
        if self.x < 0:
            raise ValueError("x column must be >= 0")
        if self.y < 1:
            raise ValueError("y column must be >= 1")
        for name in ("color", "gradient"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} column must be >= 1")
        if self.color is not None and self.gradient is not None:
            raise ValueError("color and gradient facets are mutually exclusive")
        if len(self.delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        if self.skip < 0:
            raise ValueError("skip must be >= 0")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        if self.size <= 0:
            raise ValueError("size must be > 0")
        if self.shape not in ("circle", "column"):
            raise ValueError(f"unsupported shape: {self.shape}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError("alpha must be within [0, 1]")
        if self.ticks < 2:
            raise ValueError("ticks must be >= 2")
        if self.xdesc_area < 0 or self.ydesc_area < 0 or self.margin < 0:
            raise ValueError("label areas and margin must be >= 0")
        for name in ("title_size", "xdesc_size", "ydesc_size", "label_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.output_format not in ("png", "svg"):
            raise ValueError(f"unsupported output format: {self.output_format}")

    @property
    def facet_column(self) -> int | None:
        return self.color if self.color is not None else self.gradient
