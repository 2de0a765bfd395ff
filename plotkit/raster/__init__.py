from .canvas import fill_rect, new_canvas
from .draw_lines import draw_line_segment, draw_polyline
from .draw_text import draw_text, text_size
from .surface import RasterSurface

__all__ = [
    "RasterSurface",
    "draw_line_segment",
    "draw_polyline",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "text_size",
]
