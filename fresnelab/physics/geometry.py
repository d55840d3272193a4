"""Source, wall, slit and screen positions on the canvas."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Geometry:
    """
    Fixed layout of the single-slit setup.

    All positions are given in canvas pixels. The wall is an
    infinite vertical line at `wall_x` with a single opening of
    height `slit_width` centered on `slit_y`.
    """

    source_x: float
    source_y: float
    wall_x: float
    slit_y: float
    slit_width: float
    screen_x: float
    wall_thickness: float
    canvas_width: int
    canvas_height: int

    @classmethod
    def from_canvas(cls, width, height, slit_width, geometry_config):
        """Derive every position as a fraction of the canvas size."""
        return cls(
            source_x=geometry_config.source_x * width,
            source_y=geometry_config.source_y * height,
            wall_x=geometry_config.wall_x * width,
            slit_y=geometry_config.slit_y * height,
            slit_width=float(slit_width),
            screen_x=geometry_config.screen_x * width,
            wall_thickness=float(geometry_config.wall_thickness),
            canvas_width=int(width),
            canvas_height=int(height),
        )

    @property
    def slit_top(self):
        return self.slit_y - 0.5 * self.slit_width

    @property
    def slit_bottom(self):
        return self.slit_y + 0.5 * self.slit_width

    @property
    def screen_distance(self):
        """Horizontal distance from the wall to the screen."""
        return self.screen_x - self.wall_x

    def in_slit(self, y):
        return self.slit_top <= y <= self.slit_bottom

    def is_blocked(self, x, y):
        """Whether a point lies inside the wall material."""
        if abs(x - self.wall_x) < self.wall_thickness:
            return not self.in_slit(y)
        return False

    def with_slit_width(self, slit_width):
        if slit_width == self.slit_width:
            return self
        return replace(self, slit_width=float(slit_width))
