"""Rational numbers as stored in EXIF."""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Rational:
    """A numerator/denominator pair such as an exposure time of 1/250.

    The pair is kept as stored in the file, it is never reduced, so that
    the textual form matches what the camera wrote.

    Attributes:
        numerator: Numerator
        denominator: Denominator (may be 0 in damaged files)
    """
    numerator: int
    denominator: int = 1

    @classmethod
    def from_value(cls, value: Any) -> Optional["Rational"]:
        """Convert a raw EXIF value into a Rational.

        Accepts Pillow's IFDRational (or any numbers.Rational), a
        (numerator, denominator) pair and plain integers.

        Args:
            value: Raw value read from the image

        Returns:
            Rational, or None when the value has another shape
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        if isinstance(value, numbers.Rational):
            try:
                return cls(int(value.numerator), int(value.denominator))
            except (TypeError, ValueError):
                return None
        if isinstance(value, tuple) and len(value) == 2:
            numerator, denominator = value
            if all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in value):
                return cls(int(numerator), int(denominator))
        return None

    def to_float(self) -> float:
        """Return the value as a float (NaN or infinity for a zero denominator)."""
        if self.denominator == 0:
            if self.numerator == 0:
                return math.nan
            return math.copysign(math.inf, self.numerator)
        return self.numerator / self.denominator

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        if self.numerator == 0 and self.denominator != 0:
            return "0"
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"
