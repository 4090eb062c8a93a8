"""inkwell — a static blog generator with live preview."""

__version__ = "0.1.0"
