from __future__ import annotations

import csv
from dataclasses import dataclass
import logging
import math
from typing import Sequence

from plotxy.errors import FormatError


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float
    facet_raw: str | None = None


@dataclass(frozen=True)
class ParsedRows:
    points: tuple[DataPoint, ...]
    header: tuple[str, ...] | None
    skipped: int


def parse_rows(
    text: str,
    *,
    delimiter: str = "\t",
    skip: int = 0,
    header: bool = False,
    x_col: int = 1,
    y_col: int = 2,
    facet_col: int | None = None,
) -> ParsedRows:
    """Split delimited text into data points, one record per line.

    Columns are 1-based; ``x_col=0`` uses the data-row ordinal as X. Rows that
    are too short, carry a non-numeric X/Y, or cannot be split (an unclosed
    quote, an oversized field) are skipped and counted; only an input without a
    single usable row raises :class:`FormatError`.
    """
    lines = text.splitlines()[skip:]

    header_fields: tuple[str, ...] | None = None
    if header:
        if not lines:
            raise FormatError("input has no header line")
        first = _split_line(lines[0], delimiter)
        if first is None:
            raise FormatError(f"cannot split header line {lines[0][:80]!r}")
        header_fields = tuple(field.strip() for field in first)
        lines = lines[1:]

    points: list[DataPoint] = []
    skipped = 0
    ordinal = 0
    for line in lines:
        if not line.strip():
            continue
        fields = _split_line(line, delimiter)
        if fields is not None and all(not f.strip() for f in fields):
            continue
        row_index = ordinal
        ordinal += 1
        if fields is None:
            skipped += 1
            continue
        x = float(row_index) if x_col == 0 else _numeric_field(fields, x_col)
        y = _numeric_field(fields, y_col)
        if x is None or y is None:
            skipped += 1
            continue
        facet = _text_field(fields, facet_col) if facet_col is not None else None
        points.append(DataPoint(x=x, y=y, facet_raw=facet))

    if skipped:
        LOGGER.warning("skipped %d malformed row(s)", skipped)
    if not points:
        raise FormatError("no usable rows; if the input has a header use --Header or --skip")
    return ParsedRows(points=tuple(points), header=header_fields, skipped=skipped)


def _split_line(line: str, delimiter: str) -> list[str] | None:
    # strict mode rejects a quote left open at end of line
    try:
        return next(csv.reader([line], delimiter=delimiter, strict=True), [])
    except csv.Error as exc:
        LOGGER.debug("cannot split line %r: %s", line[:80], exc)
        return None


def _numeric_field(fields: Sequence[str], column: int) -> float | None:
    if column > len(fields):
        return None
    try:
        value = float(fields[column - 1])
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _text_field(fields: Sequence[str], column: int) -> str | None:
    if column > len(fields):
        return None
    value = fields[column - 1].strip()
    return value or None
