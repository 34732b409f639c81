"""Processing pipeline for watermarker."""

from watermarker.processing.copyright import CopyrightRewriter
from watermarker.processing.exceptions import (
    ImageDecodeError,
    ImageEncodeError,
    WatermarkerError,
)
from watermarker.processing.metadata import (
    MetadataFormatter,
    ReplacementTable,
    coalesce_make_model,
    format_fixed,
)
from watermarker.processing.models import (
    BatchProcessingStats,
    OwnerIdentity,
    ProcessingResult,
)
from watermarker.processing.processor import ImageProcessor

__all__ = [
    "BatchProcessingStats",
    "CopyrightRewriter",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageProcessor",
    "MetadataFormatter",
    "OwnerIdentity",
    "ProcessingResult",
    "ReplacementTable",
    "WatermarkerError",
    "coalesce_make_model",
    "format_fixed",
]
