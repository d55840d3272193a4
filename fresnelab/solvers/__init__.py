"""Solvers subpackage initialization file for importing utilities."""

from .sampler import FieldSampler
from .session import Session

__all__ = ["FieldSampler", "Session"]
