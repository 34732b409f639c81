"""Typed access to the EXIF metadata of a single image."""

import logging
import numbers
import unicodedata
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from PIL import ExifTags, Image

from watermarker.metadata.rational import Rational
from watermarker.metadata.tags import Directory, Tag, TagKind

logger = logging.getLogger(__name__)

RationalTriple = Tuple[Rational, Rational, Rational]


def _clean_string(value: Any) -> Optional[str]:
    """Decode an EXIF string and drop NUL padding and control characters.

    Pillow hands ASCII tags back as Latin-1 decoded text, which turns UTF-8
    names such as "Vågsæther" into mojibake; that is undone here when the
    text round-trips cleanly.
    """
    if isinstance(value, bytes):
        text = value.decode("utf-8", errors="replace")
    elif isinstance(value, str):
        text = value
        try:
            text = value.encode("latin-1").decode("utf-8")
        except UnicodeError:
            pass
    else:
        return None

    return "".join(ch for ch in text if unicodedata.category(ch) != "Cc")


def _sub_ifd(exif: Image.Exif, pointer: int) -> Mapping[int, Any]:
    """Return a sub-directory, whether loaded from a file or built in memory."""
    value = exif.get(pointer)
    if isinstance(value, dict):
        return value
    return exif.get_ifd(pointer)


def _encode_string(value: str) -> Any:
    """Prepare a string for writing; non-ASCII text is stored as UTF-8."""
    try:
        value.encode("ascii")
        return value
    except UnicodeEncodeError:
        return value.encode("utf-8")


class MetadataStore:
    """The metadata tags of one image, keyed by Tag.

    Lookups are partial: any tag may be missing, and a missing tag is
    reported as None rather than raised. Values of an unexpected shape are
    treated the same way. The store may be mutated (see set_value/remove)
    and written back out with to_exif(), which keeps every other tag of
    the source image intact.

    Examples:
        >>> store = MetadataStore({Tag.MAKE: "Canon", Tag.MODEL: "EOS R5"})
        >>> store.get_value(Tag.MODEL)
        'EOS R5'
        >>> store.get_value(Tag.LENS_MODEL) is None
        True
    """

    def __init__(
        self,
        values: Optional[Mapping[Tag, Any]] = None,
        source: Optional[Image.Exif] = None
    ) -> None:
        """Initialize the store.

        Args:
            values: Raw tag values
            source: EXIF block the values were read from, if any
        """
        self._values: Dict[Tag, Any] = dict(values or {})
        self._source = source
        self._changed: Set[Tag] = set()

    @classmethod
    def from_exif(cls, exif: Image.Exif) -> "MetadataStore":
        """Build a store from a Pillow EXIF block.

        Args:
            exif: EXIF block, e.g. from Image.getexif()

        Returns:
            MetadataStore holding every known tag present in the block
        """
        directories = {
            Directory.IFD0: exif,
            Directory.EXIF: _sub_ifd(exif, ExifTags.IFD.Exif),
            Directory.GPS: _sub_ifd(exif, ExifTags.IFD.GPSInfo),
        }

        values = {}
        for tag in Tag:
            directory = directories[tag.directory]
            if tag.tag_id in directory:
                values[tag] = directory[tag.tag_id]

        logger.debug(f"Read {len(values)} known metadata tag(s)")
        return cls(values, source=exif)

    @classmethod
    def from_image(cls, image: Image.Image) -> "MetadataStore":
        """Build a store from the EXIF data of an opened image."""
        return cls.from_exif(image.getexif())

    def contains(self, tag: Tag) -> bool:
        """Return True if the tag is present."""
        return tag in self._values

    def get_value(self, tag: Tag) -> Any:
        """Get a scalar tag value.

        Args:
            tag: String, unsigned integer or rational tag

        Returns:
            str, int or Rational according to the tag kind, or None when the
            tag is absent or its value cannot be interpreted
        """
        if tag not in self._values:
            return None

        raw = self._values[tag]
        if tag.kind is TagKind.STRING:
            return _clean_string(raw)
        if tag.kind is TagKind.UINT:
            return self._as_uint(raw)
        if tag.kind is TagKind.RATIONAL:
            if isinstance(raw, tuple) and raw and Rational.from_value(raw) is None:
                raw = raw[0]
            return Rational.from_value(raw)

        return self.get_triple(tag)

    def get_triple(self, tag: Tag) -> Optional[RationalTriple]:
        """Get a degrees/minutes/seconds triple such as GPSLatitude.

        Args:
            tag: Rational triple tag

        Returns:
            Tuple of three Rationals, or None when absent or malformed
        """
        raw = self._values.get(tag)
        if not isinstance(raw, (tuple, list)) or len(raw) != 3:
            return None

        parts = tuple(Rational.from_value(part) for part in raw)
        if any(part is None for part in parts):
            return None
        return parts

    @staticmethod
    def _as_uint(raw: Any) -> Optional[int]:
        if isinstance(raw, (tuple, list)) and raw:
            raw = raw[0]
        if isinstance(raw, bool) or not isinstance(raw, numbers.Integral):
            return None
        if raw < 0:
            return None
        return int(raw)

    def set_value(self, tag: Tag, value: Any) -> None:
        """Set a tag value, replacing any existing one."""
        self._values[tag] = value
        self._changed.add(tag)

    def remove(self, tag: Tag) -> None:
        """Remove a tag; removing an absent tag is a no-op."""
        self._values.pop(tag, None)
        self._changed.add(tag)

    def to_exif(self) -> Image.Exif:
        """Build an EXIF block with the source tags and all changes applied.

        Returns:
            New Pillow EXIF block suitable for Image.save(exif=...)
        """
        directories: Dict[Directory, Dict[int, Any]] = {
            Directory.IFD0: {},
            Directory.EXIF: {},
            Directory.GPS: {},
        }

        if self._source is not None:
            for tag_id, value in self._source.items():
                if tag_id in (ExifTags.IFD.Exif, ExifTags.IFD.GPSInfo):
                    continue
                directories[Directory.IFD0][tag_id] = value

            exif_ifd = dict(_sub_ifd(self._source, ExifTags.IFD.Exif))
            interop = exif_ifd.get(ExifTags.IFD.Interop)
            if interop is not None and not isinstance(interop, dict):
                # A raw offset would point into the old file
                interop_ifd = self._source.get_ifd(ExifTags.IFD.Interop)
                if interop_ifd:
                    exif_ifd[ExifTags.IFD.Interop] = dict(interop_ifd)
                else:
                    del exif_ifd[ExifTags.IFD.Interop]
            directories[Directory.EXIF] = exif_ifd
            directories[Directory.GPS] = dict(_sub_ifd(self._source, ExifTags.IFD.GPSInfo))

        for tag in self._changed:
            directory = directories[tag.directory]
            if tag in self._values:
                value = self._values[tag]
                directory[tag.tag_id] = _encode_string(value) if isinstance(value, str) else value
            else:
                directory.pop(tag.tag_id, None)

        exif = Image.Exif()
        for tag_id, value in directories[Directory.IFD0].items():
            exif[tag_id] = value
        if directories[Directory.EXIF]:
            exif[ExifTags.IFD.Exif] = directories[Directory.EXIF]
        if directories[Directory.GPS]:
            exif[ExifTags.IFD.GPSInfo] = directories[Directory.GPS]

        return exif

    def __repr__(self) -> str:
        tags = ", ".join(tag.name for tag in self._values)
        return f"<MetadataStore [{tags}]>"
