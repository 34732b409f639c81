"""Drawing surface used to render the banner."""

from abc import ABC, abstractmethod
from typing import Any, Tuple

from PIL import Image, ImageDraw, ImageEnhance, ImageFilter

Box = Tuple[int, int, int, int]
Point = Tuple[float, float]


class Canvas(ABC):
    """Abstract drawing surface.

    The banner layout only talks to this interface, which keeps the layout
    independent of the imaging library and lets tests record the drawing
    calls. Boxes are (left, top, right, bottom) in pixels.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Width of the surface in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Height of the surface in pixels."""
        pass

    @abstractmethod
    def blur_region(self, box: Box, radius: float) -> None:
        """Apply a Gaussian blur inside box."""
        pass

    @abstractmethod
    def brightness_region(self, box: Box, factor: float) -> None:
        """Scale the brightness inside box (1.0 leaves it unchanged)."""
        pass

    @abstractmethod
    def draw_line(self, start: Point, end: Point, fill: Any, width: int = 1) -> None:
        """Draw a straight line."""
        pass

    @abstractmethod
    def draw_text(self, xy: Point, text: str, font: Any, fill: Any) -> None:
        """Draw text with its top-left corner at xy."""
        pass

    @abstractmethod
    def measure_text(self, text: str, font: Any) -> float:
        """Return the rendered width of text in pixels."""
        pass


class PillowCanvas(Canvas):
    """Canvas drawing directly onto a Pillow image.

    Attributes:
        image: Image being drawn on (modified in place)
    """

    def __init__(self, image: Image.Image) -> None:
        self.image = image
        self._draw = ImageDraw.Draw(image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def blur_region(self, box: Box, radius: float) -> None:
        region = self.image.crop(box).filter(ImageFilter.GaussianBlur(radius))
        self.image.paste(region, box[:2])

    def brightness_region(self, box: Box, factor: float) -> None:
        region = ImageEnhance.Brightness(self.image.crop(box)).enhance(factor)
        self.image.paste(region, box[:2])

    def draw_line(self, start: Point, end: Point, fill: Any, width: int = 1) -> None:
        self._draw.line([start, end], fill=fill, width=width)

    def draw_text(self, xy: Point, text: str, font: Any, fill: Any) -> None:
        self._draw.text(xy, text, font=font, fill=fill)

    def measure_text(self, text: str, font: Any) -> float:
        return self._draw.textlength(text, font=font)
