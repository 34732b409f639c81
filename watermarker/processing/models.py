"""Data models for watermarker processing."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from watermarker.config import ConfigManager
from watermarker.render.banner import DisplayLines


@dataclass(frozen=True)
class OwnerIdentity:
    """Photographer identity used for copyright text.

    Attributes:
        first_name: First name that must appear in a copyright to rewrite it
        last_name: Last name that must appear in a copyright to rewrite it
        full_name: Name written into copyright, owner and artist tags
        software: Value written into the Software tag on rewrite
    """
    first_name: str
    last_name: str
    full_name: str
    software: str

    @classmethod
    def from_config(cls, config: ConfigManager) -> "OwnerIdentity":
        """Create the identity from the ``owner`` configuration section."""
        return cls(
            first_name=config.get("owner.first_name", ""),
            last_name=config.get("owner.last_name", ""),
            full_name=config.get("owner.full_name", ""),
            software=config.get("owner.software", ""),
        )


@dataclass
class ProcessingResult:
    """Result of processing a single file.
    
    Attributes:
        input_path: File that was processed
        success: Whether processing succeeded
        output_path: JPEG that was written
        width: Image width in pixels
        height: Image height in pixels
        copyright_rewritten: Whether the copyright rewrite was applied
        original_removed: Whether the input file was deleted
        lines: Banner text that was drawn
        processing_time: Time taken to process (seconds)
        error: Error message if failed
    """
    input_path: Path
    success: bool
    output_path: Optional[Path] = None
    width: int = 0
    height: int = 0
    copyright_rewritten: bool = False
    original_removed: bool = False
    lines: Optional[DisplayLines] = None
    processing_time: float = 0.0
    error: Optional[str] = None


@dataclass
class BatchProcessingStats:
    """Statistics for a batch run.
    
    Attributes:
        total_files: Number of files given
        processed: Number successfully processed
        errors: Number that failed (only with continue_on_error)
        cancelled: Number not started because the run was cancelled
        total_time: Total processing time (seconds)
        results: Individual processing results
    """
    total_files: int
    processed: int = 0
    errors: int = 0
    cancelled: int = 0
    total_time: float = 0.0
    results: List[ProcessingResult] = field(default_factory=list)
    
    def add(self, result: ProcessingResult) -> None:
        """Record the result of one file."""
        self.results.append(result)
        if result.success:
            self.processed += 1
        else:
            self.errors += 1
