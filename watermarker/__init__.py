"""watermarker - metadata banners for photo files.

Reads camera metadata from photos, stamps a translucent banner with the
copyright, camera, exposure, location and capture date along the bottom of
each image, and saves the result as a JPEG next to the original.
"""

from watermarker._version import __version__, __version_info__
from watermarker.config import ConfigManager
from watermarker.metadata import MetadataStore, Rational, Tag
from watermarker.processing import ImageProcessor

__author__ = "Lasse Vågsæther Karlsen"
__license__ = "MIT"
__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "MetadataStore",
    "Rational",
    "Tag",
    "ImageProcessor",
]
