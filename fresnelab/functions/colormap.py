"""
Signed displacement to RGB color mapping.

Displacements are clamped to [-2, 2] and normalized to [-1, 1].
Negative values go black -> blue -> cyan, positive values go
black -> red -> yellow, each in two linear stages split at half
of the normalized magnitude. Zero is black.
"""

import numpy as np
from matplotlib.colors import ListedColormap

from ..errors import BufferMismatchError

DISPLACEMENT_LIMIT = 2.0


def _round_half_up(x):
    return np.floor(x + 0.5)


def to_color(value):
    """
    Map one displacement value to an RGB triple.

    Parameters
    ----------
    value : float
        Wave displacement. Values outside [-2, 2] saturate.

    Returns
    -------
    rgb : tuple of int
        Red, green and blue channels in [0, 255].

    """
    norm = min(max(float(value), -DISPLACEMENT_LIMIT), DISPLACEMENT_LIMIT)
    norm /= DISPLACEMENT_LIMIT

    if norm < 0:
        t = -norm
        if t < 0.5:
            u = 2 * t
            return 0, 0, int(_round_half_up(u * 180))
        u = 2 * (t - 0.5)
        return 0, int(_round_half_up(u * 120)), int(_round_half_up(180 + u * 75))

    if norm > 0:
        t = norm
        if t < 0.5:
            u = 2 * t
            return int(_round_half_up(u * 200)), 0, 0
        u = 2 * (t - 0.5)
        return int(_round_half_up(200 + u * 55)), int(_round_half_up(u * 200)), 0

    return 0, 0, 0


def colorize(field_a, out_a=None):
    """
    Map a whole field buffer to colors.

    Parameters
    ----------
    field_a : (M, N) array_like
        Wave displacement per grid cell.
    out_a : (M, N, 3) uint8 array_like, optional
        Color buffer (output). Allocated when not given.

    Returns
    -------
    colors : (M, N, 3) uint8 ndarray
        Same mapping as `to_color`, cell by cell.

    """
    field_a = np.asarray(field_a, dtype=np.float64)
    if out_a is None:
        out_a = np.zeros(field_a.shape + (3,), dtype=np.uint8)
    elif out_a.shape != field_a.shape + (3,):
        raise BufferMismatchError(
            f"Color buffer of shape {out_a.shape} does not match "
            f"field of shape {field_a.shape}."
        )

    norm = np.clip(field_a, -DISPLACEMENT_LIMIT, DISPLACEMENT_LIMIT) / DISPLACEMENT_LIMIT
    t = np.abs(norm)
    low = t < 0.5
    u_low = 2 * t
    u_high = 2 * (t - 0.5)

    neg = norm < 0
    pos = norm > 0

    red = np.where(low, u_low * 200, 200 + u_high * 55)
    green_pos = np.where(low, 0.0, u_high * 200)
    green_neg = np.where(low, 0.0, u_high * 120)
    blue = np.where(low, u_low * 180, 180 + u_high * 75)

    out_a[..., 0] = np.where(pos, _round_half_up(red), 0)
    out_a[..., 1] = np.where(
        pos, _round_half_up(green_pos), np.where(neg, _round_half_up(green_neg), 0)
    )
    out_a[..., 2] = np.where(neg, _round_half_up(blue), 0)

    return out_a


def displacement_colormap(n_colors=256):
    """Matplotlib colormap spanning [-2, 2] with the same mapping."""
    values = np.linspace(-DISPLACEMENT_LIMIT, DISPLACEMENT_LIMIT, n_colors)
    colors = colorize(values[np.newaxis, :])[0] / 255.0
    return ListedColormap(colors, name="fresnelab_displacement")
