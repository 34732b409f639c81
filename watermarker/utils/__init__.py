"""Utility functions for watermarker."""

from watermarker.utils.files import (
    FileTimes,
    apply_file_times,
    output_path_for,
    read_file_times,
    remove_original,
)

__all__ = [
    "FileTimes",
    "apply_file_times",
    "output_path_for",
    "read_file_times",
    "remove_original",
]
