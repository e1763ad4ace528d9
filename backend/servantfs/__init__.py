"""Servant FS — remote file-system action service."""

__version__ = "0.1.0"
