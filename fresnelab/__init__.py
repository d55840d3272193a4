"""
Root initialization file for importing fresnelab package and modules.
"""

from ._version import __version__
from .config import ConfigOptions
from .data.store import OutputManager
from .engine import DiffractionSimulation, Frame
from .errors import BufferMismatchError, DegenerateGeometryError
from .mesh.grid import Grid
from .physics.geometry import Geometry
from .physics.parameters import WaveParameters
from .solvers.sampler import FieldSampler
from .solvers.session import Session

__all__ = [
    "__version__",
    "ConfigOptions",
    "OutputManager",
    "DiffractionSimulation",
    "Frame",
    "Grid",
    "Geometry",
    "WaveParameters",
    "FieldSampler",
    "Session",
    "DegenerateGeometryError",
    "BufferMismatchError",
]
