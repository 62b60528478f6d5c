"""Rext scaffold -- project generator for Rext applications."""

__version__ = "0.1.0"
