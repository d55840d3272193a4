"""Diagnosing tools module."""

import pstats
from pstats import SortKey

import numpy as np

STRONG_RATIO = 1.0
WEAK_RATIO = 5.0

_REGIME_TEXT = {
    "strong": "Strong diffraction - slit smaller than wavelength",
    "moderate": "Moderate diffraction - comparable sizes",
    "weak": "Weak diffraction - slit much larger than wavelength",
}


def validate_field(field_a, exit_on_error=False):
    """
    Check that every value of a field buffer is finite.

    Parameters
    ----------
    field_a : array_like
        Field buffer at current frame.
    exit_on_error : bool, default: False
        Whether to raise instead of warning on failure.

    Returns
    -------
    binary : bool
        True if valid, False if invalid (when exit_on_error is False).

    """
    if np.all(np.isfinite(field_a)):
        return True

    bad = int(np.count_nonzero(~np.isfinite(field_a)))
    if exit_on_error:
        raise FloatingPointError(f"{bad} non-finite values detected in field")

    print(f"WARNING: {bad} non-finite values detected in field")
    return False


def classify_diffraction(ratio):
    """
    Qualitative diffraction strength for a slit-to-wavelength ratio.

    Returns
    -------
    regime : str
        "strong" (a/λ < 1), "moderate" (a/λ < 5) or "weak".

    """
    if ratio < STRONG_RATIO:
        return "strong"
    if ratio < WEAK_RATIO:
        return "moderate"
    return "weak"


def describe_state(parameters):
    """Textual summary of the current wave state."""
    ratio = parameters.slit_ratio
    regime = classify_diffraction(ratio)
    return (
        "Single-Slit Diffraction: Wave bending when passing through an opening. "
        f"Slit width={parameters.slit_width:g}px, "
        f"wavelength={parameters.wavelength:g}px (ratio {ratio:.2f}). "
        f"Frequency={parameters.frequency:.1f}Hz, "
        f"amplitude={parameters.amplitude:g}. "
        f"{_REGIME_TEXT[regime]}. "
        "Minima occur at angles where sin θ = nλ/a. "
        "Intensity pattern shows on screen."
    )


def profiler_log(profiler, log_path, top_n=20):
    """
    Profiler analysis for the session execution and save a detailed report.

    Parameters
    ----------
    profiler : object
        cProfile.Profile object after disable() is called.
    log_path : str or Path
        File where the report is written.
    top_n : integer, default: 20
        Top N time-consuming functions to display.

    Returns
    -------
    stats : object
        pstats.Stats object with profiling report.

    """
    with open(log_path, "w", encoding="utf-8") as f:
        f.write("=" * 80 + "\n")
        f.write("PERFORMANCE PROFILE REPORT\n")
        f.write("=" * 80 + "\n\n")

        f.write("TOP TIME-CONSUMING FUNCTIONS\n")
        f.write("-" * 80 + "\n")
        stats = pstats.Stats(profiler, stream=f)
        stats.strip_dirs().sort_stats(SortKey.TIME).print_stats(top_n)

        f.write("\n\nTOP TIME-ACCUMULATED FUNCTIONS\n")
        f.write("-" * 80 + "\n")
        stats = pstats.Stats(profiler, stream=f)
        stats.strip_dirs().sort_stats(SortKey.CUMULATIVE).print_stats(top_n)

        for func_chr in ["compute_field", "render", "sample_screen", "colorize"]:
            f.write(f"\n--- Analysis of {func_chr} ---\n")
            stats = pstats.Stats(profiler, stream=f)
            stats.strip_dirs()
            stats.print_callees(func_chr)

    return pstats.Stats(profiler)
