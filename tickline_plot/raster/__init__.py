from .canvas import draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment
from .draw_text import anchored_origin, draw_text, text_size, typeset_plain
from .sink import RasterSink

__all__ = [
    "RasterSink",
    "anchored_origin",
    "draw_hline",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "text_size",
    "typeset_plain",
]
