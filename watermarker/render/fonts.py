"""Font lookup for the banner text."""

import logging
from pathlib import Path
from typing import Any, Callable, List, Optional

from PIL import ImageFont

from watermarker.render.exceptions import FontResolutionError

logger = logging.getLogger(__name__)

FontLoader = Callable[[str, int], Any]


class FontResolver:
    """Finds the banner font once and creates it at any size.

    An explicit font file takes precedence. Otherwise the family name is
    tried as a TrueType file name ("Arial" -> "Arial.ttf", "arial.ttf", ...),
    which Pillow also looks up in the system font directories.

    Attributes:
        family: Font family name
        font_path: Explicit font file, if configured
    """

    # Size used to probe candidates; the real size is chosen per image
    PROBE_SIZE = 12

    def __init__(
        self,
        family: str = "Arial",
        font_path: Optional[str] = None,
        loader: FontLoader = ImageFont.truetype
    ) -> None:
        """Initialize the resolver.

        Args:
            family: Font family name
            font_path: Font file to use instead of searching for the family
            loader: Callable creating a font from (source, size)
        """
        self.family = family
        self.font_path = font_path or None
        self._loader = loader
        self._source: Optional[str] = None

    def candidates(self) -> List[str]:
        """Return the font sources to try, in order."""
        if self.font_path:
            return [str(Path(self.font_path).expanduser())]

        names = []
        for base in (self.family, self.family.replace(" ", "")):
            for name in (base, base.lower()):
                for suffix in (".ttf", ".ttc"):
                    candidate = f"{name}{suffix}"
                    if candidate not in names:
                        names.append(candidate)
        return names

    def resolve(self) -> str:
        """Locate the font.

        Returns:
            The font source that loaded

        Raises:
            FontResolutionError: If no candidate can be loaded
        """
        if self._source is not None:
            return self._source

        candidates = self.candidates()
        for candidate in candidates:
            try:
                self._loader(candidate, self.PROBE_SIZE)
            except OSError as e:
                logger.debug(f"Font candidate {candidate} not usable: {e}")
                continue

            logger.info(f"Using font: {candidate}")
            self._source = candidate
            return candidate

        raise FontResolutionError(
            f"Unable to locate font '{self.family}' "
            f"(tried: {', '.join(candidates)})"
        )

    def font(self, size: int) -> Any:
        """Create the font at the given size.

        Raises:
            FontResolutionError: If the font cannot be located
        """
        source = self.resolve()
        try:
            return self._loader(source, size)
        except (OSError, ValueError) as e:
            raise FontResolutionError(f"Unable to load font {source} at size {size}: {e}") from e
