"""Custom exceptions for image processing."""


class WatermarkerError(Exception):
    """Base exception for errors while processing an image file."""
    pass


class ImageDecodeError(WatermarkerError):
    """Raised when an input file cannot be opened or decoded."""
    pass


class ImageEncodeError(WatermarkerError):
    """Raised when the output JPEG cannot be written."""
    pass
