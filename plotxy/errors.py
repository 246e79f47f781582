from __future__ import annotations


class PlotxyError(RuntimeError):
    """Fatal plotting error; the CLI exits non-zero and writes no output."""


class InputError(PlotxyError):
    pass


class FormatError(PlotxyError):
    pass


class DomainError(PlotxyError):
    pass


class LayoutError(PlotxyError):
    pass


class OutputError(PlotxyError):
    pass
