"""Helper module for characterizing the diffraction pattern on the screen."""

import numpy as np
from scipy.signal import find_peaks


def screen_angles(positions, geometry):
    """Angles of screen positions seen from the slit center."""
    return np.arctan2(np.asarray(positions) - geometry.slit_y, geometry.screen_distance)


def angular_spread(profile, positions, geometry, fraction=0.9):
    """
    Compute the angular width of the diffracted beam.

    Parameters
    ----------
    profile : (N,) array_like
        Intensity along the screen.
    positions : (N,) array_like
        Screen y coordinates of the profile samples.
    geometry : object
        Layout holding the slit and screen positions.
    fraction : float, default: 0.9
        Share of the summed intensity the window must hold.

    Returns
    -------
    width : float
        Full angle (radians) of the narrowest window centered on the
        slit axis that contains `fraction` of the total intensity.

    """
    profile = np.asarray(profile, dtype=np.float64)
    total = np.sum(profile)
    if total <= 0:
        return 0.0

    theta = np.abs(screen_angles(positions, geometry))
    order = np.argsort(theta, kind="stable")
    cumulative = np.cumsum(profile[order])
    idx = np.searchsorted(cumulative, fraction * total)
    idx = min(idx, len(order) - 1)

    return 2 * theta[order[idx]]


def find_minima(profile, relative_prominence=0.02):
    """
    Find interior local minima of a profile.

    Parameters
    ----------
    profile : (N,) array_like
        Intensity along the screen.
    relative_prominence : float, default: 0.02
        Minimum dip depth, as a fraction of the profile maximum.

    Returns
    -------
    indices : ndarray
        Indices of the minima, in increasing order.

    """
    profile = np.asarray(profile, dtype=np.float64)
    peak = np.max(profile) if profile.size else 0.0
    if peak <= 0:
        return np.array([], dtype=np.int64)

    indices, _ = find_peaks(-profile, prominence=relative_prominence * peak)
    return indices


def expected_minima(geometry, wavelength, slit_width, orders=(1, 2, 3)):
    """
    Screen positions of the single-slit minima sin θ = nλ/a.

    Orders with nλ/a >= 1 have no minimum and are left out.

    Returns
    -------
    positions : ndarray
        Sorted y coordinates on the screen, both sides of the axis.

    """
    positions = []
    for n in orders:
        s = n * wavelength / slit_width
        if s >= 1:
            continue
        offset = geometry.screen_distance * np.tan(np.arcsin(s))
        positions.extend([geometry.slit_y - offset, geometry.slit_y + offset])

    return np.sort(np.array(positions, dtype=np.float64))
