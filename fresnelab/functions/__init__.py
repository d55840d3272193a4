"""Functions subpackage initialization file for importing functions."""

from .colormap import colorize, displacement_colormap, to_color
from .huygens import (
    compute_wave_field,
    huygens_sum,
    incident_wave,
    sample_downstream,
    sample_upstream,
)
from .intensity import sample_screen, screen_positions, steady_intensity
from .spread import angular_spread, expected_minima, find_minima, screen_angles

__all__ = [
    "to_color",
    "colorize",
    "displacement_colormap",
    "incident_wave",
    "huygens_sum",
    "compute_wave_field",
    "sample_downstream",
    "sample_upstream",
    "sample_screen",
    "screen_positions",
    "steady_intensity",
    "angular_spread",
    "find_minima",
    "expected_minima",
    "screen_angles",
]
