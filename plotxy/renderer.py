from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Sequence

import numpy as np

from plotxy.colors import CategoricalColorMapper, GradientColorMapper, apply_alpha
from plotxy.commands import Column, DrawCommand, Line, Point, Rect, Text
from plotxy.config import PlotConfig
from plotxy.labels import format_ticks_for_axis
from plotxy.layout import PlotLayout, Region, compute_layout
from plotxy.raster.draw_text import text_size
from plotxy.rows import DataPoint
from plotxy.scales import Domain, ScaleKind, axis_ticks, axis_values, normalize, normalize_array, resolve_domain


LOGGER = logging.getLogger(__name__)

MeasureText = Callable[[str, str, float], tuple[int, int]]

BACKGROUND = (255, 255, 255, 255)
AXIS_COLOR = (0, 0, 0, 255)
TEXT_COLOR = (0, 0, 0, 255)
GRID_COLOR = (160, 160, 160, 76)
TICK_LEN = 5
TICK_PAD = 4
TITLE_PAD = 8


@dataclass(frozen=True)
class RenderPlan:
    commands: tuple[DrawCommand, ...]
    layout: PlotLayout
    x_domain: Domain
    y_domain: Domain
    x_kind: ScaleKind
    y_kind: ScaleKind
    plotted: int
    excluded: int
    clipped: int
    categories: tuple[str, ...] | None = None


def default_measure_text(text: str, font: str, size: float) -> tuple[int, int]:
    return text_size(text, font_family=font, font_size_px=size)


def resolve_axis_descriptions(config: PlotConfig, header: Sequence[str] | None = None) -> tuple[str, str]:
    xdesc = config.xdesc
    ydesc = config.ydesc
    if xdesc is None:
        if header and config.x == 0:
            xdesc = "index"
        elif header and config.x <= len(header) and header[config.x - 1]:
            xdesc = header[config.x - 1]
        else:
            xdesc = "X"
    if ydesc is None:
        if header and config.y <= len(header) and header[config.y - 1]:
            ydesc = header[config.y - 1]
        else:
            ydesc = "Y"
    return xdesc, ydesc


def point_colors(points: Sequence[DataPoint], config: PlotConfig) -> tuple[list[tuple[int, int, int, int]], tuple[str, ...] | None]:
    facets = [p.facet_raw for p in points]
    if config.color is not None:
        mapper = CategoricalColorMapper.from_values(facets)
        return [apply_alpha(mapper.color_for(v), config.alpha) for v in facets], mapper.categories
    if config.gradient is not None:
        gradient = GradientColorMapper.from_values(facets, low=config.gradient_low, high=config.gradient_high)
        return [apply_alpha(gradient.color_for(v), config.alpha) for v in facets], None
    color = apply_alpha(config.plot_color, config.alpha)
    return [color] * len(points), None


def column_baseline(domain: Domain, kind: ScaleKind) -> float:
    if kind == "linear" and domain.min <= 0.0 <= domain.max:
        return 0.0
    return domain.min


def build_plot(
    points: Sequence[DataPoint],
    config: PlotConfig,
    *,
    header: Sequence[str] | None = None,
    measure_text: MeasureText | None = None,
) -> RenderPlan:
    """Turn parsed points into an ordered draw-command list.

    Order is background, grid, axes with ticks and tick labels, data marks, axis
    descriptions, title. Marks whose centre lies outside the plot area are
    dropped but still counted; the rest carry the plot area as their clip region
    so no part of them is painted over the margins.
    """
    measure = measure_text or default_measure_text
    x_kind: ScaleKind = "log" if config.logx else "linear"
    y_kind: ScaleKind = "log" if config.logy else "linear"
    x_domain = resolve_domain(points, "x", config.x_dim_min, config.x_dim_max, kind=x_kind)
    y_domain = resolve_domain(points, "y", config.y_dim_min, config.y_dim_max, kind=y_kind)

    nx = normalize_array(axis_values(points, "x"), x_domain, x_kind)
    ny = normalize_array(axis_values(points, "y"), y_domain, y_kind)
    visible = np.isfinite(nx) & np.isfinite(ny)
    excluded = int(np.count_nonzero(~visible))
    if excluded:
        LOGGER.warning("%d point(s) with non-positive values excluded from log axes", excluded)
    colors, categories = point_colors(points, config)

    x_ticks = axis_ticks(x_domain, x_kind, config.ticks)
    y_ticks = axis_ticks(y_domain, y_kind, config.ticks)
    x_labels = format_ticks_for_axis(x_ticks, si=config.xsi, log=x_kind == "log")
    y_labels = format_ticks_for_axis(y_ticks, si=config.ysi, log=y_kind == "log")
    xdesc, ydesc = resolve_axis_descriptions(config, header)

    tick_w = max((measure(lbl, config.label_font, config.label_size)[0] for lbl in y_labels), default=0)
    tick_h = max((measure(lbl, config.label_font, config.label_size)[1] for lbl in x_labels), default=0)
    title_height = 0
    if config.title:
        title_height = measure(config.title, config.title_font, config.title_size)[1] + 2 * TITLE_PAD
    layout = compute_layout(
        config.width,
        config.height,
        title_height=title_height,
        x_label_height=config.xdesc_area,
        y_label_width=config.ydesc_area,
        x_tick_height=TICK_LEN + TICK_PAD + tick_h,
        y_tick_width=TICK_LEN + TICK_PAD + tick_w,
        margin=config.margin,
    )
    plot = layout.plot

    commands: list[DrawCommand] = [Rect(0, 0, config.width, config.height, BACKGROUND)]
    commands.extend(_axis_commands(plot, x_ticks, x_labels, y_ticks, y_labels, x_domain, y_domain, x_kind, y_kind, config))

    plotted = 0
    clipped = 0
    if config.shape == "column":
        base = normalize(column_baseline(y_domain, y_kind), y_domain, y_kind)
        base_y = _clamp(_to_py(plot, base), plot.y, plot.bottom - 1)
    for i in np.flatnonzero(visible).tolist():
        px = _to_px(plot, float(nx[i]))
        py = _to_py(plot, float(ny[i]))
        if config.shape == "circle":
            if not plot.contains(px, py):
                clipped += 1
                continue
            commands.append(Point(x=px, y=py, color=colors[i], size=config.size, clip=plot))
        else:
            if not plot.x <= px <= plot.right - 1:
                clipped += 1
                continue
            top = _clamp(py, plot.y, plot.bottom - 1)
            commands.append(Column(x=px, y0=base_y, y1=top, color=colors[i], width=max(1, 2 * config.size), clip=plot))
        plotted += 1

    commands.extend(_description_commands(layout, xdesc, ydesc, config))
    if config.title:
        commands.append(
            Text(
                config.title,
                layout.title.x + layout.title.width / 2,
                layout.title.y + layout.title.height / 2,
                font=config.title_font,
                size=config.title_size,
                color=TEXT_COLOR,
                anchor="middle",
                baseline="middle",
            )
        )

    LOGGER.info(
        "x domain [%g, %g] (%s), y domain [%g, %g] (%s): %d plotted, %d excluded, %d clipped",
        x_domain.min,
        x_domain.max,
        x_kind,
        y_domain.min,
        y_domain.max,
        y_kind,
        plotted,
        excluded,
        clipped,
    )
    return RenderPlan(
        commands=tuple(commands),
        layout=layout,
        x_domain=x_domain,
        y_domain=y_domain,
        x_kind=x_kind,
        y_kind=y_kind,
        plotted=plotted,
        excluded=excluded,
        clipped=clipped,
        categories=categories,
    )


def _axis_commands(
    plot: Region,
    x_ticks: np.ndarray,
    x_labels: list[str],
    y_ticks: np.ndarray,
    y_labels: list[str],
    x_domain: Domain,
    y_domain: Domain,
    x_kind: ScaleKind,
    y_kind: ScaleKind,
    config: PlotConfig,
) -> list[DrawCommand]:
    out: list[DrawCommand] = []
    left = plot.x
    right = plot.right - 1
    bottom = plot.bottom - 1
    y_pixels = [_to_py(plot, normalize(float(v), y_domain, y_kind)) for v in y_ticks]
    x_pixels = [_to_px(plot, normalize(float(v), x_domain, x_kind)) for v in x_ticks]

    for py in y_pixels:
        out.append(Line(left, py, right, py, GRID_COLOR))
    out.append(Line(left, plot.y, left, bottom, AXIS_COLOR))
    out.append(Line(left, bottom, right, bottom, AXIS_COLOR))

    for px, label in zip(x_pixels, x_labels, strict=False):
        out.append(Line(px, bottom, px, bottom + TICK_LEN, AXIS_COLOR))
        out.append(
            Text(label, px, bottom + TICK_LEN + TICK_PAD, font=config.label_font, size=config.label_size, color=TEXT_COLOR, anchor="middle", baseline="top")
        )
    for py, label in zip(y_pixels, y_labels, strict=False):
        out.append(Line(left - TICK_LEN, py, left, py, AXIS_COLOR))
        out.append(
            Text(label, left - TICK_LEN - TICK_PAD, py, font=config.label_font, size=config.label_size, color=TEXT_COLOR, anchor="end", baseline="middle")
        )
    return out


def _description_commands(layout: PlotLayout, xdesc: str, ydesc: str, config: PlotConfig) -> list[DrawCommand]:
    out: list[DrawCommand] = []
    if xdesc:
        xl = layout.x_label
        out.append(
            Text(xdesc, xl.x + xl.width / 2, xl.y + xl.height / 2, font=config.xdesc_font, size=config.xdesc_size, color=TEXT_COLOR, anchor="middle", baseline="middle")
        )
    if ydesc:
        yl = layout.y_label
        out.append(
            Text(
                ydesc,
                yl.x + yl.width / 2,
                yl.y + yl.height / 2,
                font=config.ydesc_font,
                size=config.ydesc_size,
                color=TEXT_COLOR,
                anchor="middle",
                baseline="middle",
                rotate_deg=90,
            )
        )
    return out


def _to_px(plot: Region, position: float) -> float:
    return plot.x + position * (plot.width - 1)


def _to_py(plot: Region, position: float) -> float:
    return plot.y + (1.0 - position) * (plot.height - 1)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
