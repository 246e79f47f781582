from __future__ import annotations

from dataclasses import dataclass

from plotxy.errors import LayoutError


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.right - 1 and self.y <= py <= self.bottom - 1


@dataclass(frozen=True)
class PlotLayout:
    width: int
    height: int
    plot: Region
    title: Region
    x_label: Region
    y_label: Region
    x_ticks: Region
    y_ticks: Region


def compute_layout(
    width: int,
    height: int,
    *,
    title_height: int = 0,
    x_label_height: int = 0,
    y_label_width: int = 0,
    x_tick_height: int = 0,
    y_tick_width: int = 0,
    margin: int = 0,
) -> PlotLayout:
    """Carve the image into bands; the plot area is whatever interior remains.

    Top holds the title band, bottom the x tick labels then the x description,
    left the y description then the y tick labels. Every band is inset by
    ``margin`` from the image edge.
    """
    bands = {
        "title_height": title_height,
        "x_label_height": x_label_height,
        "y_label_width": y_label_width,
        "x_tick_height": x_tick_height,
        "y_tick_width": y_tick_width,
        "margin": margin,
    }
    for name, value in bands.items():
        if value < 0:
            raise LayoutError(f"{name} must be >= 0, got {value}")

    used_w = 2 * margin + y_label_width + y_tick_width
    used_h = 2 * margin + title_height + x_tick_height + x_label_height
    plot_w = width - used_w
    plot_h = height - used_h
    if plot_w < 1 or plot_h < 1:
        raise LayoutError(
            f"label/title bands ({used_w}x{used_h}px) leave no plot area in a {width}x{height} image"
        )

    plot = Region(x=margin + y_label_width + y_tick_width, y=margin + title_height, width=plot_w, height=plot_h)
    return PlotLayout(
        width=width,
        height=height,
        plot=plot,
        title=Region(x=margin, y=margin, width=width - 2 * margin, height=title_height),
        x_ticks=Region(x=plot.x, y=plot.bottom, width=plot_w, height=x_tick_height),
        x_label=Region(x=plot.x, y=plot.bottom + x_tick_height, width=plot_w, height=x_label_height),
        y_ticks=Region(x=margin + y_label_width, y=plot.y, width=y_tick_width, height=plot_h),
        y_label=Region(x=margin, y=plot.y, width=y_label_width, height=plot_h),
    )
