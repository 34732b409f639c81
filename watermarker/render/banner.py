"""Banner layout: geometry and drawing order."""

import logging
from dataclasses import dataclass
from typing import Optional

from watermarker.config import ConfigManager
from watermarker.render.canvas import Box, Canvas
from watermarker.render.fonts import FontResolver

logger = logging.getLogger(__name__)

TEXT_COLOR = "white"


@dataclass(frozen=True)
class DisplayLines:
    """The four banner text lines; blank lines are not drawn.

    Attributes:
        left_line1: Copyright
        left_line2: Camera, lens and exposure
        right_line1: GPS location
        right_line2: Capture date and time
    """
    left_line1: str = ""
    left_line2: str = ""
    right_line1: str = ""
    right_line2: str = ""


@dataclass(frozen=True)
class BannerSpec:
    """Banner geometry for one image.

    The banner is a strip 5% of the image height along the bottom edge. It
    holds two lines of text, each a third of the banner high.

    Attributes:
        width: Image width
        banner_height: Height of the strip
        banner_margin: Padding around the text
        banner_top: Y coordinate of the top edge of the strip
        font_size: Text size in pixels
        line1_y: Top of the first text line
        line2_y: Top of the second text line
    """
    width: int
    banner_height: int
    banner_margin: int
    banner_top: int
    font_size: int
    line1_y: float
    line2_y: float

    @classmethod
    def for_size(cls, width: int, height: int) -> "BannerSpec":
        """Compute the banner geometry for an image size.

        Examples:
            >>> spec = BannerSpec.for_size(1500, 1000)
            >>> spec.banner_top, spec.font_size, spec.line2_y
            (950, 16, 978.0)
        """
        banner_height = height * 5 // 100
        banner_margin = banner_height // 6
        banner_top = height - banner_height
        font_size = banner_height // 3
        line1_y = banner_top + banner_margin / 2
        line2_y = line1_y + font_size + banner_margin
        return cls(
            width=width,
            banner_height=banner_height,
            banner_margin=banner_margin,
            banner_top=banner_top,
            font_size=font_size,
            line1_y=line1_y,
            line2_y=line2_y,
        )

    @property
    def box(self) -> Box:
        """The banner rectangle as (left, top, right, bottom)."""
        return (0, self.banner_top, self.width, self.banner_top + self.banner_height)


class BannerRenderer:
    """Draws the information banner onto a canvas.

    Drawing order matters: the strip is blurred and darkened first, then a
    divider line is drawn along its top edge, then the text lines.

    Attributes:
        font_resolver: Source of the banner font
        blur_radius: Gaussian blur radius for the strip
        brightness: Brightness factor for the strip
    """

    def __init__(
        self,
        font_resolver: FontResolver,
        blur_radius: float = 50,
        brightness: float = 0.5
    ) -> None:
        self.font_resolver = font_resolver
        self.blur_radius = blur_radius
        self.brightness = brightness

    @classmethod
    def from_config(cls, config: ConfigManager) -> "BannerRenderer":
        """Create a renderer from the ``banner`` configuration section."""
        resolver = FontResolver(
            family=config.get("banner.font_family", "Arial"),
            font_path=config.get("banner.font_path") or None,
        )
        return cls(
            resolver,
            blur_radius=config.get("banner.blur_radius", 50),
            brightness=config.get("banner.brightness", 0.5),
        )

    def prepare(self) -> None:
        """Locate the font up front.

        Raises:
            FontResolutionError: If the font cannot be found
        """
        self.font_resolver.resolve()

    def render(self, canvas: Canvas, lines: DisplayLines) -> Optional[BannerSpec]:
        """Draw the banner.

        Args:
            canvas: Surface to draw on
            lines: Text for the four banner positions

        Returns:
            The geometry used, or None if the image is too small to hold text

        Raises:
            FontResolutionError: If the font cannot be found
        """
        spec = BannerSpec.for_size(canvas.width, canvas.height)
        if spec.font_size < 1:
            logger.warning(
                f"Image too small for a banner ({canvas.width} x {canvas.height})"
            )
            return None

        font = self.font_resolver.font(spec.font_size)

        canvas.blur_region(spec.box, self.blur_radius)
        canvas.brightness_region(spec.box, self.brightness)
        canvas.draw_line(
            (0, spec.banner_top), (spec.width, spec.banner_top), fill=TEXT_COLOR, width=1
        )

        self._draw_left(canvas, "1<", lines.left_line1, spec.line1_y, spec, font)
        self._draw_left(canvas, "2<", lines.left_line2, spec.line2_y, spec, font)
        self._draw_right(canvas, "1>", lines.right_line1, spec.line1_y, spec, font)
        self._draw_right(canvas, "2>", lines.right_line2, spec.line2_y, spec, font)

        return spec

    @staticmethod
    def _draw_left(canvas: Canvas, label: str, text: str, y: float, spec: BannerSpec, font) -> None:
        if not text or text.isspace():
            return
        print(f"  {label} {text}")
        canvas.draw_text((spec.banner_margin, y), text, font, TEXT_COLOR)

    @staticmethod
    def _draw_right(canvas: Canvas, label: str, text: str, y: float, spec: BannerSpec, font) -> None:
        if not text or text.isspace():
            return
        print(f"  {label} {text}")
        x = spec.width - canvas.measure_text(text, font) - spec.banner_margin
        canvas.draw_text((x, y), text, font, TEXT_COLOR)
