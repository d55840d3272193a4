"""
Wave parameters updated once per frame by the host loop.

How this works
--------------

1. `WaveParameters` stores the wavelength, amplitude, temporal
frequency, slit width and elapsed time of the session, together
with the derived wavenumber and angular frequency used by the
field kernels.

2. The host loop hands a mapping of new values every frame. The
mapping is merged with `merged`, where missing or `None` entries
keep the current value, so a partial update is always valid.

3. The engine never corrects bad values on its own. `validate`
raises `DegenerateGeometryError` for non-positive wavelength,
frequency or slit width. Callers which prefer clamping (sliders,
text inputs) can use `clamp_parameters` before handing the values.

"""

from dataclasses import dataclass, replace

import numpy as np

from ..errors import DegenerateGeometryError

_PARAMETER_ALIASES = {
    "wavelength": "wavelength",
    "amplitude": "amplitude",
    "frequency": "frequency",
    "slit_width": "slit_width",
    "slitwidth": "slit_width",
}


@dataclass(frozen=True)
class ParameterLimits:
    """Input ranges offered by the parameter controls."""

    wavelength: tuple = (10.0, 80.0)
    amplitude: tuple = (0.0, 2.0)
    frequency: tuple = (0.5, 5.0)
    slit_width: tuple = (5.0, 150.0)


@dataclass(frozen=True)
class WaveParameters:
    """Wave and aperture state."""

    wavelength: float
    amplitude: float
    frequency: float
    slit_width: float
    time: float = 0.0

    @classmethod
    def from_config(cls, wave_config):
        return cls(
            wavelength=float(wave_config.wavelength),
            amplitude=float(wave_config.amplitude),
            frequency=float(wave_config.frequency),
            slit_width=float(wave_config.slit_width),
        )

    @property
    def wavenumber(self):
        return 2 * np.pi / self.wavelength

    @property
    def angular_frequency(self):
        return 2 * np.pi * self.frequency

    @property
    def slit_ratio(self):
        """Slit-width-to-wavelength ratio a/λ."""
        return self.slit_width / self.wavelength

    def validate(self):
        """Raise if the parameters cannot produce a field."""
        for name in ("wavelength", "frequency", "slit_width"):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise DegenerateGeometryError(
                    f"Invalid {name}: {value!r}. It must be a positive number."
                )
        if not np.isfinite(self.amplitude) or self.amplitude < 0:
            raise DegenerateGeometryError(
                f"Invalid amplitude: {self.amplitude!r}. "
                "It must be a non-negative number."
            )
        if self.time < 0:
            raise DegenerateGeometryError(f"Invalid time: {self.time!r}.")
        return self

    def merged(self, params=None):
        """
        Return a copy with the entries of a parameter mapping applied.

        Parameters
        ----------
        params : mapping or None
            New values keyed by "wavelength", "amplitude", "frequency"
            and "slit_width" (or "slitWidth"). Missing keys and `None`
            values keep the current state, unknown keys are rejected.

        """
        if not params:
            return self

        changes = {}
        for key, value in params.items():
            name = _PARAMETER_ALIASES.get(key.lower())
            if name is None:
                raise KeyError(f"Unknown wave parameter: '{key}'.")
            if value is not None:
                changes[name] = float(value)

        return replace(self, **changes)

    def advanced(self, dt):
        return replace(self, time=self.time + dt)

    def at_time(self, time):
        return replace(self, time=float(time))


def clamp_parameters(params, limits=None):
    """
    Clamp raw control values into the accepted input ranges.

    Parameters
    ----------
    params : mapping
        Raw values keyed as in `WaveParameters.merged`.
    limits : ParameterLimits, optional
        Ranges to clamp into. Defaults to `ParameterLimits()`.

    Returns
    -------
    clamped : dict
        New mapping with canonical keys and clamped values.

    """
    limits = limits or ParameterLimits()
    clamped = {}
    for key, value in params.items():
        name = _PARAMETER_ALIASES.get(key.lower())
        if name is None or value is None:
            continue
        low, high = getattr(limits, name)
        clamped[name] = float(np.clip(value, low, high))

    return clamped
