from .ascii_renderer import ASCIIRenderer
from .overlay import render_overlay, save_overlay

__all__ = ["ASCIIRenderer", "render_overlay", "save_overlay"]
