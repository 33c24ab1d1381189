"""Marginalia - intent-driven document annotation and research search."""

__version__ = "0.1.0"
