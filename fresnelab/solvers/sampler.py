"""Field sampler module."""

import numpy as np

from ..errors import BufferMismatchError
from ..functions.huygens import compute_wave_field


class FieldSampler:
    """Owner of the field buffer and its grid."""

    def __init__(self, grid, sampling):
        """Initialize sampler and allocate the field buffer.

        Parameters
        ----------
        grid : object
            Contains the grid of sample points.
        sampling : object
            Contains the sampling options (secondary source count,
            singularity threshold).

        """
        self.secondary_source_count = int(sampling.secondary_source_count)
        self.epsilon = float(sampling.epsilon)
        self.grid = None
        self.field = None

        self.allocate(grid)

    def allocate(self, grid):
        """Swap in a new grid together with a zeroed buffer of its shape."""
        field = np.zeros(grid.shape, dtype=np.float64)
        self.grid, self.field = grid, field

    def release(self):
        """Drop the grid and the buffer."""
        self.grid = None
        self.field = None

    @property
    def allocated(self):
        return self.field is not None

    def reset(self):
        """Zero the buffer in place."""
        self._check_buffer()
        self.field.fill(0.0)

    def compute_field(self, parameters, geometry):
        """
        Overwrite the whole buffer for the current wave state.

        Parameters
        ----------
        parameters : object
            Contains the wave parameters (validated by the caller).
        geometry : object
            Contains the source, wall and slit positions.

        Returns
        -------
        field : (M, N) ndarray
            The field buffer, owned by the sampler.

        """
        self._check_buffer()
        compute_wave_field(
            self.field,
            self.grid.x_grid,
            self.grid.y_grid,
            float(geometry.source_x),
            float(geometry.source_y),
            float(geometry.wall_x),
            float(geometry.wall_thickness),
            float(geometry.slit_top),
            float(geometry.slit_width),
            float(parameters.wavenumber),
            float(parameters.angular_frequency),
            float(parameters.time),
            float(parameters.amplitude),
            self.secondary_source_count,
            self.epsilon,
        )
        return self.field

    def _check_buffer(self):
        if self.field is None:
            raise RuntimeError("Field buffer not allocated yet.")
        if not self.grid.matches(self.field):
            raise BufferMismatchError(
                f"Field of shape {self.field.shape} does not match {self.grid!r}."
            )
