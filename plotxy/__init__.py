from plotxy.colors import CategoricalColorMapper, GradientColorMapper
from plotxy.config import PlotConfig
from plotxy.errors import DomainError, FormatError, InputError, LayoutError, OutputError, PlotxyError
from plotxy.layout import PlotLayout, Region, compute_layout
from plotxy.pipeline import plot_file, render_bytes
from plotxy.renderer import RenderPlan, build_plot
from plotxy.rows import DataPoint, ParsedRows, parse_rows
from plotxy.scales import Domain, normalize, resolve_domain

__all__ = [
    "CategoricalColorMapper",
    "DataPoint",
    "Domain",
    "DomainError",
    "FormatError",
    "GradientColorMapper",
    "InputError",
    "LayoutError",
    "OutputError",
    "ParsedRows",
    "PlotConfig",
    "PlotLayout",
    "PlotxyError",
    "Region",
    "RenderPlan",
    "build_plot",
    "compute_layout",
    "normalize",
    "parse_rows",
    "plot_file",
    "render_bytes",
    "resolve_domain",
]
