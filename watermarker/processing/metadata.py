"""Formatting of image metadata into banner text."""

import logging
import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Mapping, Optional

from watermarker.config import ConfigManager
from watermarker.metadata import MetadataStore, Rational, RationalTriple, Tag
from watermarker.processing.models import OwnerIdentity
from watermarker.render.banner import DisplayLines

logger = logging.getLogger(__name__)

DATE_TIME_PATTERN = re.compile(
    r"^(?P<yyyy>\d{4}):(?P<mm>\d{2}):(?P<dd>\d{2}) (?P<time>\d{2}:\d{2}:\d{2})$"
)


def format_fixed(value: float, decimals: int = 0, min_integer_digits: int = 1) -> str:
    """Format a number with a fixed number of decimals.

    Rounds half away from zero and zero-pads the integer part, so
    ``format_fixed(5.25, 1, 2)`` gives ``"05.3"``.

    Args:
        value: Number to format
        decimals: Digits after the decimal point
        min_integer_digits: Minimum digits before the decimal point

    Returns:
        Formatted number
    """
    if not math.isfinite(value):
        return str(value)

    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    integer, _, fraction = f"{abs(rounded):f}".partition(".")
    text = integer.zfill(min_integer_digits)
    if fraction:
        text = f"{text}.{fraction}"
    return f"-{text}" if rounded < 0 else text


def coalesce_make_model(make: Optional[str], model: Optional[str]) -> str:
    """Combine a make and model into one display name.

    Cameras often repeat the make inside the model ("Canon" / "Canon EOS R5"),
    in which case the model is used alone.

    Args:
        make: Manufacturer, e.g. from the Make or LensMake tag
        model: Model, e.g. from the Model or LensModel tag

    Returns:
        Combined name, or "" when there is no model

    Examples:
        >>> coalesce_make_model("Canon", "Canon EOS R5")
        'Canon EOS R5'
        >>> coalesce_make_model("Canon", "EOS R5")
        'Canon EOS R5'
        >>> coalesce_make_model(None, "EOS R5")
        'EOS R5'
    """
    if model is None:
        return ""
    if make is None:
        return model
    if make.upper().strip() in model.upper():
        return model
    return f"{make.strip()} {model}"


class ReplacementTable:
    """Maps camera and lens names found in metadata to display names.

    Lookups are exact and case-sensitive; names without an entry are
    returned unchanged.
    """

    def __init__(self, replacements: Optional[Mapping[str, str]] = None) -> None:
        self._replacements: Dict[str, str] = {
            str(key): str(value)
            for key, value in (replacements or {}).items()
            if value is not None
        }

    @classmethod
    def from_config(cls, config: ConfigManager) -> "ReplacementTable":
        """Create the table from the ``replacements`` configuration section."""
        return cls(config.section("replacements"))

    def lookup(self, name: str) -> str:
        """Return the display name for a raw name."""
        return self._replacements.get(name, name)

    def __len__(self) -> int:
        return len(self._replacements)


class MetadataFormatter:
    """Builds the banner text lines from an image's metadata.

    Every method reads the store only; a missing tag simply leaves its part
    of the text out, it never raises.

    Attributes:
        identity: Owner used for the fallback copyright line
        replacements: Camera and lens display names
    """

    def __init__(
        self,
        identity: OwnerIdentity,
        replacements: Optional[ReplacementTable] = None,
        today: Callable[[], date] = date.today
    ) -> None:
        """Initialize the formatter.

        Args:
            identity: Owner used for the fallback copyright line
            replacements: Camera and lens display names (identity if omitted)
            today: Provider of the current date
        """
        self.identity = identity
        self.replacements = replacements or ReplacementTable()
        self._today = today

    @classmethod
    def from_config(cls, config: ConfigManager) -> "MetadataFormatter":
        """Create a formatter from configuration."""
        return cls(
            identity=OwnerIdentity.from_config(config),
            replacements=ReplacementTable.from_config(config),
        )

    def display_lines(self, store: MetadataStore) -> DisplayLines:
        """Build all four banner lines.

        Args:
            store: Metadata of the image, after any copyright rewrite

        Returns:
            DisplayLines for the banner
        """
        lines = DisplayLines(
            left_line1=self.format_copyright(store),
            left_line2=self.format_camera_line(store),
            right_line1=self.format_location(store),
            right_line2=self.format_date_time(store),
        )
        logger.debug(f"Banner lines: {lines}")
        return lines

    def format_copyright(self, store: MetadataStore) -> str:
        """Return the Copyright tag, or a generated notice when it is absent."""
        copyright_text = store.get_value(Tag.COPYRIGHT)
        if copyright_text is None:
            return f"Copyright {self._today().year} {self.identity.full_name}"
        return copyright_text

    def format_camera_and_lens(self, store: MetadataStore) -> str:
        """Return "camera + lens", or whichever of the two is known."""
        camera = self._display_name(
            store.get_value(Tag.MAKE), store.get_value(Tag.MODEL)
        )
        lens = self._display_name(
            store.get_value(Tag.LENS_MAKE), store.get_value(Tag.LENS_MODEL)
        )

        if camera and lens:
            return f"{camera} + {lens}"
        return camera or lens

    def _display_name(self, make: Optional[str], model: Optional[str]) -> str:
        name = coalesce_make_model(make, model)
        if not name:
            return ""
        return self.replacements.lookup(name)

    def format_exposure(self, store: MetadataStore) -> str:
        """Return focal length, exposure time, aperture and ISO, space separated.

        Example: ``"50mm 1/250s f/2.8 ISO 400"``.
        """
        focal_length: Optional[Rational] = store.get_value(Tag.FOCAL_LENGTH)
        exposure_time: Optional[Rational] = store.get_value(Tag.EXPOSURE_TIME)
        aperture: Optional[Rational] = store.get_value(Tag.APERTURE_VALUE)
        iso = store.get_value(Tag.ISO_SPEED)
        if iso is None:
            iso = store.get_value(Tag.RECOMMENDED_EXPOSURE_INDEX)

        parts = []
        if focal_length is not None:
            parts.append(f"{format_fixed(focal_length.to_float())}mm")
        if exposure_time is not None:
            parts.append(f"{exposure_time}s")
        if aperture is not None:
            parts.append(f"f/{format_fixed(aperture.to_float(), 1)}")
        if iso is not None:
            parts.append(f"ISO {iso}")

        return " ".join(parts)

    def format_camera_line(self, store: MetadataStore) -> str:
        """Return "camera + lens @ exposure".

        The separator is always present, even when one side is empty.
        """
        return f"{self.format_camera_and_lens(store)} @ {self.format_exposure(store)}"

    def format_location(self, store: MetadataStore) -> str:
        """Return the GPS position as degrees, minutes and seconds.

        Both hemisphere letters follow the sign of the latitude degrees.
        Example: ``45°30'15.0" N, 73°45'00.0" E``.
        """
        latitude = store.get_triple(Tag.GPS_LATITUDE)
        longitude = store.get_triple(Tag.GPS_LONGITUDE)
        if latitude is None or longitude is None:
            return ""

        northern = latitude[0].to_float() > 0
        return (
            f"{self._format_dms(latitude, 'N' if northern else 'S')}, "
            f"{self._format_dms(longitude, 'E' if northern else 'W')}"
        )

    @staticmethod
    def _format_dms(parts: RationalTriple, hemisphere: str) -> str:
        degrees, minutes, seconds = (part.to_float() for part in parts)
        return (
            f"{format_fixed(abs(degrees))}°"
            f"{format_fixed(minutes, 0, 2)}'"
            f"{format_fixed(seconds, 1, 2)}\" {hemisphere}"
        )

    def format_date_time(self, store: MetadataStore) -> str:
        """Return DateTimeOriginal as "YYYY/MM/DD HH:MM:SS".

        Values in any other layout are returned unchanged.
        """
        value = store.get_value(Tag.DATE_TIME_ORIGINAL)
        if value is None:
            return ""

        match = DATE_TIME_PATTERN.match(value)
        if not match:
            return value

        return f"{match['yyyy']}/{match['mm']}/{match['dd']} {match['time']}"
