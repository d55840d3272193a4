"""Downsampled sampling grid over the canvas."""

import math

import numpy as np


class Grid:
    """
    Fixed lattice of sample points covering the canvas.

    One grid cell stands for `scale` x `scale` canvas pixels and
    the field is evaluated at the cell center. A coarser grid is
    cheaper to compute and blockier once magnified.
    """

    def __init__(self, width, height, scale):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size: {width}x{height}.")
        if scale < 1:
            raise ValueError(f"Grid scale must be >= 1, got {scale}.")

        # Initialize parameters
        self.width = int(width)
        self.height = int(height)
        self.scale = int(scale)

        self._init_grid_resolution()
        self._init_grid_arrays()

    def _init_grid_resolution(self):
        """Set grid resolution."""
        self.x_nodes = math.ceil(self.width / self.scale)
        self.y_nodes = math.ceil(self.height / self.scale)
        self.shape = (self.y_nodes, self.x_nodes)

    def _init_grid_arrays(self):
        """Set 1D arrays of cell-center coordinates."""
        half = 0.5 * self.scale
        self.x_grid = np.arange(self.x_nodes, dtype=np.float64) * self.scale + half
        self.y_grid = np.arange(self.y_nodes, dtype=np.float64) * self.scale + half

    @property
    def size(self):
        return self.x_nodes * self.y_nodes

    def cell_index(self, x, y):
        """
        Map a canvas point to the grid cell containing it.

        Returns
        -------
        index : tuple of int or None
            `(gy, gx)` row-major index, or None outside the grid.

        """
        gx = math.floor(x / self.scale)
        gy = math.floor(y / self.scale)
        if 0 <= gx < self.x_nodes and 0 <= gy < self.y_nodes:
            return gy, gx
        return None

    def matches(self, array):
        return array.shape == self.shape

    def __repr__(self):
        return (
            f"Grid(width={self.width}, height={self.height}, "
            f"scale={self.scale}, shape={self.shape})"
        )
