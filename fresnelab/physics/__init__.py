"""Physics subpackage initialization file for importing utilities."""

from .geometry import Geometry
from .parameters import ParameterLimits, WaveParameters, clamp_parameters

__all__ = [
    "Geometry",
    "WaveParameters",
    "ParameterLimits",
    "clamp_parameters",
]
