"""Main image processing orchestrator."""

import logging
import sys
import threading
import time
from pathlib import Path
from typing import Iterable, Optional, Union

from PIL import Image

from watermarker.config import ConfigManager
from watermarker.metadata import MetadataStore
from watermarker.processing.copyright import CopyrightRewriter
from watermarker.processing.exceptions import (
    ImageDecodeError,
    ImageEncodeError,
    WatermarkerError,
)
from watermarker.processing.metadata import MetadataFormatter
from watermarker.processing.models import (
    BatchProcessingStats,
    OwnerIdentity,
    ProcessingResult,
)
from watermarker.render import BannerRenderer, PillowCanvas
from watermarker.utils.files import (
    FileTimes,
    apply_file_times,
    output_path_for,
    read_file_times,
    remove_original,
)

# Register HEIF/HEIC support if available
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HEIC_SUPPORT = True
except ImportError:
    HEIC_SUPPORT = False

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Source modes whose ICC profile still describes the RGB output
ICC_COMPATIBLE_MODES = ("RGB", "RGBA")


class ImageProcessor:
    """Orchestrates the per-file pipeline.

    For every file, in order:
    - decode the first frame
    - read its metadata and apply the copyright rewrite
    - format the banner lines from the (rewritten) metadata
    - draw the banner and save a JPEG next to the input
    - carry over the timestamps and delete the input

    Files are processed one at a time; nothing is shared between files.
    """

    def __init__(
        self,
        config: ConfigManager,
        renderer: Optional[BannerRenderer] = None,
        formatter: Optional[MetadataFormatter] = None,
        rewriter: Optional[CopyrightRewriter] = None
    ) -> None:
        """Initialize image processor.

        Args:
            config: Configuration manager
            renderer: Banner renderer (created from config if not provided)
            formatter: Metadata formatter (created from config if not provided)
            rewriter: Copyright rewriter (created from config if not provided)
        """
        self.config = config
        self.renderer = renderer or BannerRenderer.from_config(config)
        self.formatter = formatter or MetadataFormatter.from_config(config)
        self.rewriter = rewriter or CopyrightRewriter(OwnerIdentity.from_config(config))

        self.quality = int(config.get("output.quality", 85))
        self.continue_on_error = bool(config.get("processing.continue_on_error", False))
        self.delete_original = bool(config.get("processing.delete_original", True))

        logger.debug(
            f"ImageProcessor initialized: quality={self.quality}, "
            f"continue_on_error={self.continue_on_error}, "
            f"heic_support={HEIC_SUPPORT}"
        )

    def process_files(
        self,
        paths: Iterable[PathLike],
        cancel_event: Optional[threading.Event] = None
    ) -> BatchProcessingStats:
        """Process files one after another.

        The font is located before any file is touched. A set cancel_event
        stops the run before the next file starts.

        Args:
            paths: Input files, processed in the given order
            cancel_event: Optional cancellation signal

        Returns:
            BatchProcessingStats with results

        Raises:
            FontResolutionError: If the banner font cannot be found
            WatermarkerError: If a file fails and continue_on_error is off
        """
        files = [Path(path) for path in paths]
        stats = BatchProcessingStats(total_files=len(files))

        if not files:
            logger.warning("No files to process")
            return stats

        self.renderer.prepare()
        start_time = time.time()

        for i, path in enumerate(files, 1):
            if cancel_event is not None and cancel_event.is_set():
                stats.cancelled = len(files) - i + 1
                logger.warning(f"Cancelled, skipping {stats.cancelled} remaining file(s)")
                break

            logger.info(f"[{i}/{len(files)}] Processing: {path.name}")

            try:
                result = self.process_file(path)
            except WatermarkerError as e:
                if not self.continue_on_error:
                    raise
                logger.debug(f"Failed to process {path}: {e}")
                print(f"error: {e}", file=sys.stderr)
                result = ProcessingResult(input_path=path, success=False, error=str(e))

            stats.add(result)

        stats.total_time = time.time() - start_time

        logger.info(
            f"Batch complete: {stats.processed} processed, {stats.errors} errors, "
            f"{stats.cancelled} cancelled (Total time: {stats.total_time:.1f}s)"
        )

        return stats

    def process_file(self, path: PathLike) -> ProcessingResult:
        """Process a single file.

        Args:
            path: Input image file

        Returns:
            ProcessingResult

        Raises:
            ImageDecodeError: If the file cannot be decoded
            ImageEncodeError: If the output cannot be written
            FontResolutionError: If the banner font cannot be found
        """
        start_time = time.time()
        source = Path(path)
        output = output_path_for(source)
        result = ProcessingResult(input_path=source, success=False, output_path=output)

        print(f"processing {source}")
        times = self._read_times(source)

        with self._open_image(source) as image:
            result.width, result.height = image.size
            print(f"  {image.width} x {image.height}")

            # The rewrite must come first: the banner shows the rewritten tags
            store = MetadataStore.from_image(image)
            result.copyright_rewritten = self.rewriter.apply(store)
            if result.copyright_rewritten:
                logger.info(f"  Copyright rewritten for {source.name}")

            result.lines = self.formatter.display_lines(store)
            icc_profile = None
            if image.mode in ICC_COMPATIBLE_MODES:
                icc_profile = image.info.get("icc_profile")

            canvas_image = image.convert("RGB")
            try:
                self.renderer.render(PillowCanvas(canvas_image), result.lines)
                self._save_jpeg(canvas_image, output, store, icc_profile)
            finally:
                canvas_image.close()

        apply_file_times(output, times)
        print("   Done!")

        if self.delete_original:
            result.original_removed = remove_original(source, output)

        result.success = True
        result.processing_time = time.time() - start_time
        return result

    @staticmethod
    def _read_times(source: Path) -> FileTimes:
        try:
            return read_file_times(source)
        except OSError as e:
            raise ImageDecodeError(f"Cannot read {source}: {e}") from e

    @staticmethod
    def _open_image(source: Path) -> Image.Image:
        """Open and fully decode the first frame of an image."""
        try:
            image = Image.open(source)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(f"Failed to open image {source}: {e}") from e

        try:
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            image.close()
            raise ImageDecodeError(f"Failed to decode image {source}: {e}") from e

        return image

    def _save_jpeg(
        self,
        image: Image.Image,
        output: Path,
        store: MetadataStore,
        icc_profile: Optional[bytes]
    ) -> None:
        """Encode the image as JPEG with the store's metadata."""
        options = {
            "quality": self.quality,
            "exif": store.to_exif(),
        }
        if icc_profile:
            options["icc_profile"] = icc_profile

        try:
            image.save(output, format="JPEG", **options)
        except (OSError, ValueError) as e:
            raise ImageEncodeError(f"Failed to write {output}: {e}") from e

        logger.debug(f"Wrote {output}")
