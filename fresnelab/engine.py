"""
Single-slit diffraction engine driven by a host animation loop.

How this works
--------------

1. `init(width, height)` builds the grid, the field buffer and the
layout for a canvas. `resize` does the same for new dimensions and
swaps all of them at once, so no read can mix a stale buffer with
a new grid.

2. `update(dt, params)` merges the new parameters, validates them,
advances the time and recomputes the whole field. Nothing but the
time carries over from one frame to the next.

3. `render()` turns the current buffer into a `Frame`: per-cell
colors at grid resolution plus the intensity profile along the
screen. Magnifying the colors to the canvas is left to the
renderer.

"""

from dataclasses import dataclass

import numpy as np

from .config import ConfigOptions
from .data.diagnostics import describe_state
from .functions.colormap import colorize
from .functions.intensity import sample_screen, screen_positions, steady_intensity
from .mesh.grid import Grid
from .physics.geometry import Geometry
from .physics.parameters import WaveParameters
from .solvers.sampler import FieldSampler


@dataclass
class Frame:
    """Output of one rendered frame."""

    colors: np.ndarray
    field: np.ndarray
    profile: np.ndarray
    positions: np.ndarray
    geometry: Geometry
    grid: Grid
    time: float


class DiffractionSimulation:
    """Single-slit diffraction session."""

    def __init__(self, config=None):
        self.config = config or ConfigOptions()
        self.parameters = WaveParameters.from_config(self.config.wave).validate()
        self.sampler = None
        self.geometry = None
        self._colors = None

    @property
    def initialized(self):
        return self.sampler is not None and self.sampler.allocated

    @property
    def grid(self):
        return self.sampler.grid if self.sampler else None

    @property
    def field(self):
        return self.sampler.field if self.sampler else None

    @property
    def time(self):
        return self.parameters.time

    def init(self, width=None, height=None):
        """Allocate buffers for a canvas (defaults to the configured size)."""
        width = self.config.canvas.width if width is None else width
        height = self.config.canvas.height if height is None else height

        grid = Grid(width, height, self.config.sampling.scale)
        geometry = Geometry.from_canvas(
            width, height, self.parameters.slit_width, self.config.geometry
        )
        sampler = FieldSampler(grid, self.config.sampling)

        self.sampler, self.geometry = sampler, geometry
        self._colors = np.zeros(grid.shape + (3,), dtype=np.uint8)
        return self

    def resize(self, width, height):
        """Rebuild grid, buffers and layout for new canvas dimensions."""
        self._require_init()

        grid = Grid(width, height, self.config.sampling.scale)
        geometry = Geometry.from_canvas(
            width, height, self.parameters.slit_width, self.config.geometry
        )
        colors = np.zeros(grid.shape + (3,), dtype=np.uint8)

        self.sampler.allocate(grid)
        self.geometry, self._colors = geometry, colors

    def update(self, dt, params=None):
        """
        Advance one frame and recompute the field.

        Parameters
        ----------
        dt : float
            Elapsed time since the previous frame, non-negative.
        params : mapping, optional
            New wave parameters. Missing entries keep their value.

        Returns
        -------
        field : (M, N) ndarray
            The recomputed field buffer.

        """
        self._require_init()
        if dt < 0:
            raise ValueError(f"Time step must be non-negative, got {dt}.")

        parameters = self.parameters.merged(params).advanced(dt).validate()
        self.parameters = parameters
        self.geometry = self.geometry.with_slit_width(parameters.slit_width)

        return self.sampler.compute_field(parameters, self.geometry)

    def compute_at(self, time):
        """Recompute the field at a given time without advancing the clock."""
        self._require_init()
        return self.sampler.compute_field(self.parameters.at_time(time), self.geometry)

    def steady_profile(self):
        """
        Time-independent intensity along the screen.

        Two quadrature frames, a quarter period apart, are computed
        at the current time and the buffer is left holding the field
        of the current time again.
        """
        self._require_init()
        samples = self.config.sampling.screen_samples
        t_now = self.time
        quarter = 0.25 / self.parameters.frequency

        prof_quarter = sample_screen(
            self.compute_at(t_now + quarter), self.grid, self.geometry, samples
        )
        prof_now = sample_screen(
            self.compute_at(t_now), self.grid, self.geometry, samples
        )
        return steady_intensity(prof_now, prof_quarter)

    def render(self):
        """Convert the current buffer into colors and a screen profile."""
        self._require_init()
        samples = self.config.sampling.screen_samples
        field = self.sampler.field
        grid = self.sampler.grid

        colors = colorize(field, self._colors)
        profile = sample_screen(field, grid, self.geometry, samples)

        return Frame(
            colors=colors,
            field=field,
            profile=profile,
            positions=screen_positions(self.geometry, samples),
            geometry=self.geometry,
            grid=grid,
            time=self.parameters.time,
        )

    def reset(self):
        """Zero the field and the time, keeping the buffers."""
        self._require_init()
        self.sampler.reset()
        self.parameters = self.parameters.at_time(0.0)

    def destroy(self):
        """Release all buffers."""
        if self.sampler is not None:
            self.sampler.release()
        self.sampler = None
        self._colors = None

    def get_state_description(self):
        return describe_state(self.parameters)

    def _require_init(self):
        if not self.initialized:
            raise RuntimeError("Simulation not initialized. Call init() first.")
