"""Merge duplicate sprite captures and repair their unknown pixels."""

__version__ = "0.1.0"
