"""
Exception hierarchy for the WebP conversion tools.

Per-file errors derive from ``ConversionError`` so the batch driver can
record them and move on to the next file.
"""


class ConversionError(Exception):
    """Base class for all errors raised while converting a file."""


class GeometryParseError(ConversionError):
    """Raised when a crop or resize string cannot be parsed."""

    pass


class DimensionError(ConversionError):
    """Raised when a crop rectangle does not fit inside the image."""

    pass


class DecodeError(ConversionError):
    """Raised when an input file cannot be decoded as an image."""

    pass


class EncodeError(ConversionError):
    """Raised when the WebP encoder rejects an image."""

    pass


class WriteError(ConversionError):
    """Raised when an output file cannot be written."""

    pass


class ResolutionError(ConversionError):
    """Raised when the input path or pattern cannot be expanded."""

    pass


class OptimizationError(ConversionError):
    """Raised when an SVG document cannot be optimized."""

    pass


class ConfigurationError(ConversionError, ValueError):
    """Raised for option values that can never produce a valid output."""

    pass
