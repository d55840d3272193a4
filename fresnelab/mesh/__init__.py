"""Mesh subpackage initialization file for importing utilities."""

from .grid import Grid

__all__ = ["Grid"]
