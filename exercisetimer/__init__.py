"""Exercise Timer: work/break interval timer built on PyQt6."""

__version__ = "0.1.0"
