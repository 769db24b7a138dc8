"""Inkwell error hierarchy.

All inkwell-specific errors inherit from InkwellError for easy catching.
"""


class InkwellError(Exception):
    """Base error for all inkwell operations."""


class ConfigError(InkwellError):
    """Invalid or missing configuration."""


class RenderError(InkwellError):
    """A source document could not be converted to HTML."""


class OutputError(InkwellError):
    """Filesystem error while reading sources or writing output."""


class ServerError(InkwellError):
    """The development server could not start (bind failure, bad output dir)."""
