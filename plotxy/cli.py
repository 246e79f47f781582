from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence

from plotxy.config import (
    DEFAULT_FONT,
    DEFAULT_GRADIENT_HIGH,
    DEFAULT_GRADIENT_LOW,
    DEFAULT_PLOT_COLOR,
    PlotConfig,
    parse_delimiter,
    parse_hex_color,
)
from plotxy.errors import PlotxyError
from plotxy.pipeline import plot_file


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="plotxy", description="Plots tabular data as a scatter or column chart.")
    p.add_argument("input", nargs="?", type=Path, default=None, help="file with one entry per line [default: STDIN]")

    cols = p.add_argument_group("columns")
    cols.add_argument("-x", "--x", type=int, default=1, help="column index to be used as X (0: row number)")
    cols.add_argument("-y", "--y", type=int, default=2, help="column index to be used as Y")
    facet = cols.add_mutually_exclusive_group()
    facet.add_argument("-c", "--color", type=int, default=None, help="column index to be used as color facet")
    facet.add_argument("--gradient", type=int, default=None, help="column index to be used as color gradient facet")
    cols.add_argument("-d", "--delimiter", default=r"\t", help=r"column delimiter (default: \t)")
    cols.add_argument("-H", "--Header", action="store_true", help="input has header line (see also --skip)")
    cols.add_argument("-s", "--skip", type=int, default=0, help="skip lines before header")

    axes = p.add_argument_group("axes")
    axes.add_argument("--logx", action="store_true", help="plot logarithmic X-axis")
    axes.add_argument("--logy", action="store_true", help="plot logarithmic Y-axis")
    axes.add_argument("--x_dim_min", type=float, default=None, help="minimum X dimension")
    axes.add_argument("--x_dim_max", type=float, default=None, help="maximum X dimension")
    axes.add_argument("--y_dim_min", type=float, default=None, help="minimum Y dimension")
    axes.add_argument("--y_dim_max", type=float, default=None, help="maximum Y dimension")
    axes.add_argument("--ticks", type=int, default=5, help="minimum number of ticks per axis (at most twice as many are drawn)")
    axes.add_argument("--xsi", action="store_true", help="SI suffixes (K, M, G, ...) on X tick labels")
    axes.add_argument("--ysi", action="store_true", help="SI suffixes (K, M, G, ...) on Y tick labels")

    marks = p.add_argument_group("marks")
    marks.add_argument("-a", "--alpha", type=float, default=0.3, help="transparency channel")
    marks.add_argument("-p", "--plot_color", default=DEFAULT_PLOT_COLOR, help="default plot color (hex RRGGBB)")
    marks.add_argument("--gradient_low", default=DEFAULT_GRADIENT_LOW, help="gradient color for the lowest facet value")
    marks.add_argument("--gradient_high", default=DEFAULT_GRADIENT_HIGH, help="gradient color for the highest facet value")
    marks.add_argument("--size", type=int, default=5, help="point radius / half column width in pixels")
    marks.add_argument("--shape", choices=["circle", "column"], default="circle")

    text = p.add_argument_group("text")
    text.add_argument("-t", "--title", default=None, help="title above the plot, default output filename")
    text.add_argument("--title_font", default=DEFAULT_FONT)
    text.add_argument("--title_size", type=float, default=20.0)
    text.add_argument("--xdesc", default=None, help="x-axis label (default: header name or X)")
    text.add_argument("--ydesc", default=None, help="y-axis label (default: header name or Y)")
    text.add_argument("--xdesc_font", default=DEFAULT_FONT)
    text.add_argument("--xdesc_size", type=float, default=22.0)
    text.add_argument("--ydesc_font", default=DEFAULT_FONT)
    text.add_argument("--ydesc_size", type=float, default=22.0)
    text.add_argument("--xdesc_area", type=int, default=70, help="x-axis label area size")
    text.add_argument("--ydesc_area", type=int, default=100, help="y-axis label area size")
    text.add_argument("--label_font", default=DEFAULT_FONT, help="tick label font")
    text.add_argument("--label_size", type=float, default=24.0, help="tick label font size")

    out = p.add_argument_group("output")
    out.add_argument("-o", "--outfile", type=Path, default=None, help="file to save the plot to, default appends .plotxy.png to the input filename")
    out.add_argument("--svg", action="store_true", help="write SVG instead of PNG")
    out.add_argument("--width", type=int, default=2560, help="image width")
    out.add_argument("--height", type=int, default=1200, help="image height")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return p


def config_from_args(args: argparse.Namespace) -> PlotConfig:
    svg = args.svg or (args.outfile is not None and args.outfile.suffix.lower() == ".svg")
    return PlotConfig(
        x=args.x,
        y=args.y,
        color=args.color,
        gradient=args.gradient,
        delimiter=parse_delimiter(args.delimiter),
        header=args.Header,
        skip=args.skip,
        logx=args.logx,
        logy=args.logy,
        x_dim_min=args.x_dim_min,
        x_dim_max=args.x_dim_max,
        y_dim_min=args.y_dim_min,
        y_dim_max=args.y_dim_max,
        ticks=args.ticks,
        xsi=args.xsi,
        ysi=args.ysi,
        width=args.width,
        height=args.height,
        size=args.size,
        shape=args.shape,
        alpha=args.alpha,
        plot_color=parse_hex_color(args.plot_color),
        gradient_low=parse_hex_color(args.gradient_low),
        gradient_high=parse_hex_color(args.gradient_high),
        title=args.title,
        title_font=args.title_font,
        title_size=args.title_size,
        xdesc=args.xdesc,
        ydesc=args.ydesc,
        xdesc_font=args.xdesc_font,
        xdesc_size=args.xdesc_size,
        ydesc_font=args.ydesc_font,
        ydesc_size=args.ydesc_size,
        xdesc_area=args.xdesc_area,
        ydesc_area=args.ydesc_area,
        label_font=args.label_font,
        label_size=args.label_size,
        output_format="svg" if svg else "png",
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        out, _plan = plot_file(args.input, config, output_path=args.outfile)
    except PlotxyError as exc:
        print(f"plotxy: error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        LOGGER.debug("unexpected failure", exc_info=True)
        print(f"plotxy: fatal: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
