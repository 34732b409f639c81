"""Shared fixtures for the watermarker tests."""

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
from PIL import ExifTags, Image, ImageFont
from PIL.TiffImagePlugin import IFDRational

from watermarker.config import ConfigManager
from watermarker.processing import CopyrightRewriter, MetadataFormatter, OwnerIdentity
from watermarker.render import BannerRenderer, Canvas, FontResolver

FIXED_TODAY = date(2024, 6, 1)

OWNER = OwnerIdentity(
    first_name="Lasse",
    last_name="Karlsen",
    full_name="Lasse Vågsæther Karlsen",
    software="LVK Watermarker",
)


def default_font_loader(source: str, size: int):
    """Load Pillow's built-in font whatever the requested source."""
    return ImageFont.load_default(size=size)


def sample_exif(
    ifd0: Optional[Dict[int, Any]] = None,
    exif_ifd: Optional[Dict[int, Any]] = None,
    gps_ifd: Optional[Dict[int, Any]] = None
) -> Image.Exif:
    """Build an EXIF block with in-memory sub-directories."""
    exif = Image.Exif()
    for tag_id, value in (ifd0 or {}).items():
        exif[tag_id] = value
    if exif_ifd:
        exif[ExifTags.IFD.Exif] = dict(exif_ifd)
    if gps_ifd:
        exif[ExifTags.IFD.GPSInfo] = dict(gps_ifd)
    return exif


CAMERA_IFD0 = {
    0x010F: "Canon",
    0x0110: "Canon EOS R5",
    0x8298: "Copyright Lasse Karlsen",
    0x013C: "studio-pc",
}

CAMERA_EXIF_IFD = {
    0x9003: "2023:07:14 18:22:05",
    0x920A: IFDRational(50, 1),
    0x829A: IFDRational(1, 250),
    0x9202: IFDRational(28, 10),
    0x8833: 400,
    0xA431: "012345678",
    0xA434: "RF50mm F1.8 STM",
}

CAMERA_GPS_IFD = {
    0x0001: "N",
    0x0002: (IFDRational(45, 1), IFDRational(30, 1), IFDRational(15, 1)),
    0x0003: "E",
    0x0004: (IFDRational(73, 1), IFDRational(45, 1), IFDRational(0, 1)),
}


def write_image(
    path: Path,
    size=(400, 300),
    exif: Optional[Image.Exif] = None,
    color: str = "skyblue"
) -> Path:
    """Write a solid colour image, in the format implied by its suffix."""
    image = Image.new("RGB", size, color)
    options = {}
    if exif is not None:
        options["exif"] = exif
    image.save(path, **options)
    return path


@pytest.fixture
def camera_exif() -> Image.Exif:
    return sample_exif(CAMERA_IFD0, CAMERA_EXIF_IFD, CAMERA_GPS_IFD)


@pytest.fixture
def camera_jpeg(tmp_path, camera_exif) -> Path:
    return write_image(tmp_path / "IMG_0001.jpg", exif=camera_exif)


@pytest.fixture
def font_resolver() -> FontResolver:
    return FontResolver(family="Arial", loader=default_font_loader)


@pytest.fixture
def renderer(font_resolver) -> BannerRenderer:
    return BannerRenderer(font_resolver)


@pytest.fixture
def formatter() -> MetadataFormatter:
    return MetadataFormatter(OWNER, today=lambda: FIXED_TODAY)


@pytest.fixture
def rewriter() -> CopyrightRewriter:
    return CopyrightRewriter(OWNER, today=lambda: FIXED_TODAY)


@pytest.fixture
def config() -> ConfigManager:
    return ConfigManager.from_dict({})


class RecordingCanvas(Canvas):
    """Canvas that records every drawing call instead of drawing.

    Text is measured as ten pixels per character.
    """

    CHAR_WIDTH = 10

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self.calls = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def blur_region(self, box, radius):
        self.calls.append(("blur", box, radius))

    def brightness_region(self, box, factor):
        self.calls.append(("brightness", box, factor))

    def draw_line(self, start, end, fill, width=1):
        self.calls.append(("line", start, end, fill, width))

    def draw_text(self, xy, text, font, fill):
        self.calls.append(("text", xy, text, fill))

    def measure_text(self, text, font):
        return len(text) * self.CHAR_WIDTH

    def texts(self):
        return [call for call in self.calls if call[0] == "text"]
