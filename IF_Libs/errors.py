"""
Exception types for InstaFilter.

Classes:
    InstaFilterError: Base class for all InstaFilter errors
    AcquisitionError: A source image could not be fetched or decoded
    RenderError: A filter produced no usable output
"""


class InstaFilterError(Exception):
    """Base class for InstaFilter errors."""


class AcquisitionError(InstaFilterError):
    """Raised when a source image cannot be fetched or decoded."""


class RenderError(InstaFilterError):
    """Raised when a filter yields no output for the current configuration."""
