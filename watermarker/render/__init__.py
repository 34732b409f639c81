"""Banner rendering."""

from watermarker.render.banner import BannerRenderer, BannerSpec, DisplayLines
from watermarker.render.canvas import Canvas, PillowCanvas
from watermarker.render.fonts import FontResolver
from watermarker.render.exceptions import RenderError, FontResolutionError

__all__ = [
    "BannerRenderer",
    "BannerSpec",
    "DisplayLines",
    "Canvas",
    "PillowCanvas",
    "FontResolver",
    "RenderError",
    "FontResolutionError",
]
