#!/usr/bin/env python3
"""watermarker - metadata banners for photo files.

This is the main CLI entry point for watermarker. Every file named on the
command line gets a banner with its copyright, camera, exposure, location
and capture date, and is saved as a JPEG next to the original.

Usage:
    python -m watermarker IMG_0001.HEIC IMG_0002.png
    watermarker *.jpg
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from ._version import __version__
from .config import ConfigManager
from .config.manager import ConfigError
from .processing import ImageProcessor
from .processing.exceptions import WatermarkerError
from .render.exceptions import FontResolutionError


def setup_logging(config: ConfigManager) -> None:
    """Configure logging for the application.

    Args:
        config: Configuration providing the ``logging`` section
    """
    level_name = str(config.get("logging.level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)

    app_logger = logging.getLogger("watermarker")
    app_logger.setLevel(logging.DEBUG)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    # Console handler with simpler format
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)s - %(name)s - %(message)s'
    ))
    app_logger.addHandler(console_handler)

    # Also log to file if configured
    log_file = config.get("logging.file")
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
        file_handler.setFormatter(logging.Formatter(
            config.get(
                "logging.format",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        ))
        app_logger.addHandler(file_handler)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="watermarker",
        description=f"watermarker {__version__} - stamp a metadata banner onto photos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Each file is saved as <name>.jpg in its own directory and the original
is deleted. Settings are read from ~/.watermarker/config.yaml or
./config.yaml.

Examples:
  watermarker IMG_0001.HEIC
  watermarker shots/*.png
"""
    )
    parser.add_argument(
        "filenames",
        nargs="*",
        metavar="FILE",
        help="Image files to process"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the watermarker CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments(argv)

    if not args.filenames:
        print("error: no filenames specified", file=sys.stderr)
        return 1

    logger = logging.getLogger("watermarker")
    cancel_event = threading.Event()

    def request_cancel(signum, frame):
        logger.warning("Termination requested, finishing current file")
        cancel_event.set()

    previous_handler = signal.signal(signal.SIGTERM, request_cancel)

    try:
        config = ConfigManager.load()
        setup_logging(config)
        logger.debug(f"Configuration loaded from: {config.config_path or 'defaults'}")

        processor = ImageProcessor(config=config)
        stats = processor.process_files(args.filenames, cancel_event=cancel_event)

        if stats.errors > 0:
            logger.warning(f"{stats.errors} of {stats.total_files} file(s) failed")
        return 0

    except ConfigError as e:
        logger.debug(f"Configuration error: {e}")
        print(f"error: configuration: {e}", file=sys.stderr)
        return 2

    except FontResolutionError as e:
        logger.debug(f"Font error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    except WatermarkerError as e:
        logger.debug(f"Processing aborted: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print(file=sys.stderr)
        print("Processing interrupted by user", file=sys.stderr)
        return 130

    finally:
        signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    sys.exit(main())
