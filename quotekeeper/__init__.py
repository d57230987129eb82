"""An HTTP server for storing, tagging and searching quotes in SQLite."""

__version__ = "0.1.0"

__all__ = ["__version__"]