"""PDF rendering: font resources and the bold-first-letter reflow."""

from .fonts import FontResources, find_font_path, load_fonts
from .reflow import Layout, PageBreakPolicy, ReflowRenderer

__all__ = [
    "FontResources",
    "find_font_path",
    "load_fonts",
    "Layout",
    "PageBreakPolicy",
    "ReflowRenderer",
]
