"""Data subpackage initialization file for importing utilities."""

from .diagnostics import classify_diffraction, describe_state, validate_field
from .store import OutputManager

__all__ = [
    "OutputManager",
    "classify_diffraction",
    "describe_state",
    "validate_field",
]
