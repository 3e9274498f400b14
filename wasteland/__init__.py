"""Wasteland Survivor: character builder and progression tracker for zombie survival games."""

__version__ = "1.0.0"
