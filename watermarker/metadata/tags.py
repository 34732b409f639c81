"""EXIF tag vocabulary used by watermarker."""

from enum import Enum

from PIL import ExifTags


class Directory(Enum):
    """EXIF image file directory a tag lives in."""
    IFD0 = 0
    EXIF = ExifTags.IFD.Exif
    GPS = ExifTags.IFD.GPSInfo


class TagKind(Enum):
    """Shape of the value stored under a tag."""
    STRING = "string"
    UINT = "uint"
    RATIONAL = "rational"
    RATIONAL_TRIPLE = "rational_triple"


class Tag(Enum):
    """Metadata tags read or written while building the banner.

    Each member carries the directory, numeric tag id and value kind.
    """
    COPYRIGHT = (Directory.IFD0, 0x8298, TagKind.STRING)
    ARTIST = (Directory.IFD0, 0x013B, TagKind.STRING)
    SOFTWARE = (Directory.IFD0, 0x0131, TagKind.STRING)
    HOST_COMPUTER = (Directory.IFD0, 0x013C, TagKind.STRING)
    MAKE = (Directory.IFD0, 0x010F, TagKind.STRING)
    MODEL = (Directory.IFD0, 0x0110, TagKind.STRING)

    OWNER_NAME = (Directory.EXIF, 0xA430, TagKind.STRING)
    SERIAL_NUMBER = (Directory.EXIF, 0xA431, TagKind.STRING)
    LENS_MAKE = (Directory.EXIF, 0xA433, TagKind.STRING)
    LENS_MODEL = (Directory.EXIF, 0xA434, TagKind.STRING)
    LENS_SERIAL_NUMBER = (Directory.EXIF, 0xA435, TagKind.STRING)
    DATE_TIME_ORIGINAL = (Directory.EXIF, 0x9003, TagKind.STRING)
    FOCAL_LENGTH = (Directory.EXIF, 0x920A, TagKind.RATIONAL)
    EXPOSURE_TIME = (Directory.EXIF, 0x829A, TagKind.RATIONAL)
    APERTURE_VALUE = (Directory.EXIF, 0x9202, TagKind.RATIONAL)
    ISO_SPEED = (Directory.EXIF, 0x8833, TagKind.UINT)
    RECOMMENDED_EXPOSURE_INDEX = (Directory.EXIF, 0x8832, TagKind.UINT)

    GPS_LATITUDE = (Directory.GPS, 0x0002, TagKind.RATIONAL_TRIPLE)
    GPS_LONGITUDE = (Directory.GPS, 0x0004, TagKind.RATIONAL_TRIPLE)

    @property
    def directory(self) -> Directory:
        return self.value[0]

    @property
    def tag_id(self) -> int:
        return self.value[1]

    @property
    def kind(self) -> TagKind:
        return self.value[2]
