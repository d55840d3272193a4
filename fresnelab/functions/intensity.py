"""Intensity profile along the screen line."""

import numpy as np

from ..errors import BufferMismatchError


def screen_positions(geometry, samples=100):
    """Evenly spaced y positions covering the full canvas height."""
    return np.linspace(0.0, geometry.canvas_height, samples, dtype=np.float64)


def sample_screen(field_a, grid, geometry, samples=100, prof_a=None):
    """
    Compute the magnitude profile of the field along the screen.

    Parameters
    ----------
    field_a : (M, N) array_like
        Field buffer at current frame.
    grid : object
        Grid the buffer was computed on.
    geometry : object
        Layout holding the screen x position.
    samples : integer, default: 100
        Number of positions along the screen.
    prof_a : (samples,) array_like, optional
        Intensity profile (output).

    Returns
    -------
    profile : (samples,) ndarray
        `abs(value)` of the nearest cell to each position, zero for
        positions falling outside the grid.

    """
    if not grid.matches(field_a):
        raise BufferMismatchError(
            f"Field of shape {field_a.shape} does not match {grid!r}."
        )

    y_pos = screen_positions(geometry, samples)
    gy = np.floor(y_pos / grid.scale).astype(np.int64)
    gx = int(np.floor(geometry.screen_x / grid.scale))

    inside = (gy >= 0) & (gy < grid.y_nodes)
    if not 0 <= gx < grid.x_nodes:
        inside[:] = False

    profile = np.zeros(samples, dtype=np.float64)
    profile[inside] = np.abs(field_a[gy[inside], gx])

    if prof_a is None:
        return profile

    prof_a[:] = profile
    return prof_a


def steady_intensity(field_now_a, field_quarter_a):
    """
    Compute the time-independent intensity from two quadrature frames.

    Every contribution to the field oscillates as `sin(φ - ωt)`, so a
    frame taken a quarter period later holds the `-cos(φ - ωt)` part of
    the same phasor and the sum of both squares is the squared local
    amplitude.

    Parameters
    ----------
    field_now_a : array_like
        Field (or profile of signed values) at time t.
    field_quarter_a : array_like
        Same quantity at time t + 1/(4f).

    Returns
    -------
    intensity : ndarray
        Squared wave amplitude, same shape as the inputs.

    """
    field_now_a = np.asarray(field_now_a, dtype=np.float64)
    field_quarter_a = np.asarray(field_quarter_a, dtype=np.float64)
    if field_now_a.shape != field_quarter_a.shape:
        raise BufferMismatchError(
            f"Quadrature frames differ in shape: {field_now_a.shape} "
            f"and {field_quarter_a.shape}."
        )
    return field_now_a**2 + field_quarter_a**2
