"""Custom exceptions for mdproof."""

from typing import Optional


class MdproofError(Exception):
    """Base exception for mdproof errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(MdproofError):
    """Exception raised for invalid layout configuration."""

    pass


class LayoutError(MdproofError):
    """Exception raised during layout calculation."""

    pass


class StructureError(LayoutError):
    """Exception raised when block markers do not pair up."""

    pass


class NestingDepthError(LayoutError):
    """Exception raised when lists or quotes nest deeper than allowed."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(
            "Maximum nesting depth exceeded",
            f"depth {depth} is deeper than the limit of {limit}",
        )


class MediaError(MdproofError):
    """Exception raised when an image cannot be read."""

    pass


class FontError(MdproofError):
    """Exception raised during font registration."""

    pass


class RenderingError(MdproofError):
    """Exception raised when the PDF document cannot be written."""

    pass
