from __future__ import annotations

from dataclasses import replace
import logging
import os
from pathlib import Path
import sys
import tempfile
from typing import TextIO

from plotxy.backends import encode
from plotxy.config import PlotConfig
from plotxy.errors import InputError, OutputError
from plotxy.renderer import MeasureText, RenderPlan, build_plot
from plotxy.rows import parse_rows


LOGGER = logging.getLogger(__name__)

STDIN_NAME = "STDIN"


def read_input(path: Path | None, stdin: TextIO | None = None) -> str:
    """Buffer the whole input; domains need a full scan before anything is drawn.

    Bytes that are not valid UTF-8 are replaced so only the rows holding them end
    up skipped by the parser.
    """
    source = STDIN_NAME if path is None else str(path)
    try:
        if path is None:
            stream = stdin or sys.stdin
            raw = getattr(stream, "buffer", None)
            if raw is None:
                return stream.read()
            data = raw.read()
        else:
            data = path.read_bytes()
    except OSError as exc:
        raise InputError(f"cannot read {source}: {exc}") from exc
    return _decode(data, source)


def _decode(data: bytes, source: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        LOGGER.warning("%s is not valid UTF-8 (%s); replacing undecodable bytes", source, exc.reason)
        return data.decode("utf-8", errors="replace")


def default_output_path(input_path: Path | None, fmt: str = "png") -> Path:
    base = STDIN_NAME if input_path is None else str(input_path)
    return Path(f"{base}.plotxy.{fmt}")


def render_bytes(
    text: str,
    config: PlotConfig,
    *,
    measure_text: MeasureText | None = None,
) -> tuple[bytes, RenderPlan]:
    rows = parse_rows(
        text,
        delimiter=config.delimiter,
        skip=config.skip,
        header=config.header,
        x_col=config.x,
        y_col=config.y,
        facet_col=config.facet_column,
    )
    plan = build_plot(rows.points, config, header=rows.header, measure_text=measure_text)
    data = encode(plan.commands, config.width, config.height, config.output_format)
    return data, plan


def write_output(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` atomically; on failure no file is left behind."""
    directory = path.parent if str(path.parent) else Path(".")
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(dir=directory, prefix=f".{path.name}.", delete=False) as handle:
            tmp_name = handle.name
            handle.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"cannot write {path}: {exc}") from exc
    LOGGER.info("wrote %d bytes to %s", len(data), path)


def plot_file(
    input_path: Path | None,
    config: PlotConfig,
    *,
    output_path: Path | None = None,
    stdin: TextIO | None = None,
) -> tuple[Path, RenderPlan]:
    out = output_path or default_output_path(input_path, config.output_format)
    if config.title is None:
        config = replace(config, title=str(out))
    text = read_input(input_path, stdin=stdin)
    data, plan = render_bytes(text, config)
    write_output(out, data)
    return out, plan
