"""Exceptions raised by the wave-field engine."""


class DegenerateGeometryError(ValueError):
    """Wave parameters that leave the field undefined (non-positive
    wavelength, frequency or slit width, or negative amplitude)."""


class BufferMismatchError(RuntimeError):
    """A field buffer read against a grid of a different shape."""
