"""Path-derived metadata for filesystem-backed content sites."""

__version__ = "0.1.0"
