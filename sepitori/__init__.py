"""Sepitori / non-Sepitori text classification service."""

__version__ = "1.0.0"
