"""Custom exceptions for banner rendering."""


class RenderError(Exception):
    """Base exception for rendering errors."""
    pass


class FontResolutionError(RenderError):
    """Raised when the banner font cannot be found.

    This is a configuration problem and aborts the whole run.
    """
    pass
