from .canvas import blend_region, draw_hline, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_line
from .draw_markers import draw_circle, draw_column
from .draw_text import draw_text, text_size

__all__ = [
    "blend_region",
    "draw_circle",
    "draw_column",
    "draw_hline",
    "draw_line",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "text_size",
]
