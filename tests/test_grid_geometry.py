"""Unit tests for the sampling grid and the canvas layout."""

import numpy as np
import pytest

from fresnelab.config import GeometryConfig
from fresnelab.mesh.grid import Grid
from fresnelab.physics.geometry import Geometry


def test_grid_resolution_rounds_up() -> None:
    grid = Grid(800, 600, 3)

    assert grid.x_nodes == 267
    assert grid.y_nodes == 200
    assert grid.shape == (200, 267)
    assert grid.size == 267 * 200


def test_grid_cell_centers() -> None:
    grid = Grid(10, 7, 3)

    np.testing.assert_allclose(grid.x_grid, [1.5, 4.5, 7.5, 10.5])
    np.testing.assert_allclose(grid.y_grid, [1.5, 4.5, 7.5])


def test_grid_cell_index_floor_mapping() -> None:
    grid = Grid(800, 600, 3)

    assert grid.cell_index(0.0, 0.0) == (0, 0)
    assert grid.cell_index(680.0, 300.0) == (100, 226)
    assert grid.cell_index(680.0, 600.0) is None
    assert grid.cell_index(-1.0, 10.0) is None


def test_grid_rejects_bad_dimensions() -> None:
    with pytest.raises(ValueError):
        Grid(0, 600, 3)
    with pytest.raises(ValueError):
        Grid(800, 600, 0)


def test_geometry_fractions_of_canvas() -> None:
    geometry = Geometry.from_canvas(800, 600, 40, GeometryConfig())

    assert geometry.source_x == pytest.approx(50.0)
    assert geometry.source_y == pytest.approx(300.0)
    assert geometry.wall_x == pytest.approx(320.0)
    assert geometry.slit_y == pytest.approx(300.0)
    assert geometry.screen_x == pytest.approx(680.0)
    assert geometry.slit_top == pytest.approx(280.0)
    assert geometry.slit_bottom == pytest.approx(320.0)
    assert geometry.screen_distance == pytest.approx(360.0)


def test_geometry_follows_canvas_on_resize() -> None:
    small = Geometry.from_canvas(400, 300, 40, GeometryConfig())

    assert small.wall_x == pytest.approx(160.0)
    assert small.slit_y == pytest.approx(150.0)
    assert small.slit_width == 40.0


def test_blocked_only_on_wall_outside_slit() -> None:
    geometry = Geometry.from_canvas(800, 600, 40, GeometryConfig())

    assert geometry.is_blocked(322.0, 100.0)
    assert geometry.is_blocked(318.0, 500.0)
    assert not geometry.is_blocked(322.0, 300.0)
    assert not geometry.is_blocked(322.0, 280.0)
    assert not geometry.is_blocked(330.0, 100.0)
    assert geometry.in_slit(320.0)
    assert not geometry.in_slit(320.5)


def test_with_slit_width_keeps_everything_else() -> None:
    geometry = Geometry.from_canvas(800, 600, 40, GeometryConfig())
    wider = geometry.with_slit_width(80)

    assert wider.slit_width == 80.0
    assert wider.wall_x == geometry.wall_x
    assert wider.slit_top == pytest.approx(260.0)
    assert geometry.with_slit_width(40) is geometry
