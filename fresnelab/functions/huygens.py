"""
Huygens-Fresnel synthesis of the scalar wave field.

How this works
--------------

1. Upstream of the wall the field is the direct wave of the primary
point source, a spherical wave with a `r^(-1/2)` amplitude decay
(`incident_wave`).

2. Downstream of the wall the slit is replaced by `n_sec` secondary
point sources evenly spaced over the opening. Each one re-emits the
wave it receives, so its contribution travels the total path
`r1 + r2` (primary source -> slit point -> observation point) and
is scaled by `1 / (n_sec sqrt(r1 + r2))` (`huygens_sum`).

3. Cells inside the wall material are zero. `compute_wave_field`
classifies every cell and fills the whole buffer in parallel rows.
Every cell depends on nothing but its own coordinates, so rows are
distributed with `prange`.

4. Distances below `eps` give no contribution instead of a
singular value.

"""

import numpy as np
from numba import njit, prange


@njit
def incident_wave(px, py, src_x, src_y, k, omega, t, amplitude, eps):
    """
    Compute the direct wave of the primary source at one point.

    Parameters
    ----------
    px, py : float
        Observation point.
    src_x, src_y : float
        Primary source position.
    k : float
        Wavenumber 2π/λ.
    omega : float
        Angular frequency 2πf.
    t : float
        Elapsed time.
    amplitude : float
        Source amplitude.
    eps : float
        Minimum distance with a non-zero contribution.

    Returns
    -------
    value : float
        Wave displacement at (px, py).

    """
    dx = px - src_x
    dy = py - src_y
    r = np.sqrt(dx * dx + dy * dy)
    if r <= eps:
        return 0.0
    return amplitude * np.sin(k * r - omega * t) / np.sqrt(r)


@njit
def huygens_sum(
    px, py, src_x, src_y, wall_x, slit_top, slit_width, k, omega, t, amplitude,
    n_sec, eps
):
    """
    Sum the secondary wavelets of the slit at one downstream point.

    Parameters
    ----------
    px, py : float
        Observation point.
    src_x, src_y : float
        Primary source position.
    wall_x : float
        Wall position, where the secondary sources lie.
    slit_top : float
        Upper edge of the slit opening.
    slit_width : float
        Height of the slit opening.
    k, omega, t, amplitude : float
        Wave state, as in `incident_wave`.
    n_sec : int
        Number of secondary sources across the slit.
    eps : float
        Minimum total path with a non-zero contribution.

    Returns
    -------
    value : float
        Wave displacement at (px, py).

    """
    total = 0.0
    weight = amplitude / n_sec
    dx1 = wall_x - src_x
    dx2 = px - wall_x

    for ii in range(n_sec):
        if n_sec > 1:
            slit_y = slit_top + ii * slit_width / (n_sec - 1)
        else:
            slit_y = slit_top + 0.5 * slit_width

        dy1 = slit_y - src_y
        dy2 = py - slit_y
        r_1 = np.sqrt(dx1 * dx1 + dy1 * dy1)
        r_2 = np.sqrt(dx2 * dx2 + dy2 * dy2)
        r_t = r_1 + r_2

        if r_t > eps:
            total += weight * np.sin(k * r_t - omega * t) / np.sqrt(r_t)

    return total


@njit(parallel=True)
def compute_wave_field(
    field_a, x_g_a, y_g_a, src_x, src_y, wall_x, wall_thick, slit_top,
    slit_width, k, omega, t, amplitude, n_sec, eps
):
    """
    Overwrite every cell of the field buffer for the current instant.

    Parameters
    ----------
    field_a : (M, N) array_like
        Field buffer (output). M is the number of grid rows and N
        the number of grid columns.
    x_g_a : (N,) array_like
        Cell-center x coordinates.
    y_g_a : (M,) array_like
        Cell-center y coordinates.
    wall_thick : float
        Half-thickness of the wall around `wall_x`.
    Remaining arguments as in `huygens_sum`.

    """
    n_y, n_x = field_a.shape
    slit_bottom = slit_top + slit_width

    for jj in prange(n_y):  # pylint: disable=not-an-iterable
        py = y_g_a[jj]
        opening = py >= slit_top and py <= slit_bottom
        for ii in range(n_x):
            px = x_g_a[ii]
            if abs(px - wall_x) < wall_thick and not opening:
                field_a[jj, ii] = 0.0
            elif px < wall_x:
                field_a[jj, ii] = incident_wave(
                    px, py, src_x, src_y, k, omega, t, amplitude, eps
                )
            else:
                field_a[jj, ii] = huygens_sum(
                    px, py, src_x, src_y, wall_x, slit_top, slit_width,
                    k, omega, t, amplitude, n_sec, eps
                )


def sample_downstream(px, py, parameters, geometry, secondary_source_count=20,
                      epsilon=1.0):
    """
    Wave displacement at a single point behind the wall.

    Parameters
    ----------
    px, py : float
        Observation point in canvas pixels.
    parameters : WaveParameters
        Current wave state.
    geometry : Geometry
        Current layout.
    secondary_source_count : integer, default: 20
        Number of secondary sources across the slit.
    epsilon : float, default: 1.0
        Singularity threshold for the total path length.

    """
    return huygens_sum(
        float(px),
        float(py),
        geometry.source_x,
        geometry.source_y,
        geometry.wall_x,
        geometry.slit_top,
        geometry.slit_width,
        parameters.wavenumber,
        parameters.angular_frequency,
        parameters.time,
        parameters.amplitude,
        int(secondary_source_count),
        float(epsilon),
    )


def sample_upstream(px, py, parameters, geometry, epsilon=1.0):
    """Wave displacement of the direct source wave at a single point."""
    return incident_wave(
        float(px),
        float(py),
        geometry.source_x,
        geometry.source_y,
        parameters.wavenumber,
        parameters.angular_frequency,
        parameters.time,
        parameters.amplitude,
        float(epsilon),
    )
