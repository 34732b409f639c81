"""File-system helpers for output naming, timestamps and clean-up."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

OUTPUT_SUFFIX = ".jpg"


@dataclass(frozen=True)
class FileTimes:
    """Timestamps of a file.

    Attributes:
        accessed_ns: Last access time (nanoseconds since the epoch)
        modified_ns: Last modification time (nanoseconds since the epoch)
    """
    accessed_ns: int
    modified_ns: int


def output_path_for(path: PathLike) -> Path:
    """Return the output path: the same name with a .jpg extension.

    Examples:
        >>> str(output_path_for("shots/IMG_0001.png"))
        'shots/IMG_0001.jpg'
    """
    return Path(path).with_suffix(OUTPUT_SUFFIX)


def read_file_times(path: PathLike) -> FileTimes:
    """Read the timestamps of a file.

    Args:
        path: File to inspect

    Returns:
        FileTimes of the file
    """
    stat = os.stat(path)
    return FileTimes(
        accessed_ns=stat.st_atime_ns,
        modified_ns=stat.st_mtime_ns,
    )


def apply_file_times(path: PathLike, times: FileTimes) -> None:
    """Give a file the timestamps read from another file.

    Only access and modification times are copied. Creation time cannot be
    set portably and is left as the operating system assigns it.

    Args:
        path: File to update
        times: Timestamps to apply
    """
    os.utime(path, ns=(times.accessed_ns, times.modified_ns))
    logger.debug(f"Copied timestamps to {path}")


def is_same_file(first: PathLike, second: PathLike) -> bool:
    """Return True if both paths name the same file."""
    try:
        return os.path.samefile(first, second)
    except OSError:
        return Path(first).resolve() == Path(second).resolve()


def remove_original(source: PathLike, output: PathLike) -> bool:
    """Delete the input file once its output has been written.

    When the output replaced the input in place (a .jpg input), there is
    nothing left to delete and the file is kept.

    Args:
        source: Input file
        output: Output file that was written

    Returns:
        True if the input file was deleted
    """
    if is_same_file(source, output):
        logger.debug(f"Output replaced {source} in place, nothing to delete")
        return False

    os.remove(source)
    logger.debug(f"Deleted original: {source}")
    return True
