"""Live dog park presence service."""

__version__ = "0.1.0"
