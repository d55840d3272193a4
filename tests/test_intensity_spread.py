"""Tests for the screen profile and the characterization of the pattern."""

import numpy as np
import pytest

from fresnelab.config import GeometryConfig
from fresnelab.errors import BufferMismatchError
from fresnelab.functions.intensity import (
    sample_screen,
    screen_positions,
    steady_intensity,
)
from fresnelab.functions.spread import (
    angular_spread,
    expected_minima,
    find_minima,
)
from fresnelab.mesh.grid import Grid
from fresnelab.physics.geometry import Geometry

from .conftest import make_engine


@pytest.fixture
def small_layout():
    grid = Grid(30, 30, 3)
    geometry = Geometry.from_canvas(30, 30, 6.0, GeometryConfig())
    return grid, geometry


def test_screen_positions_cover_canvas_height(small_layout) -> None:
    _, geometry = small_layout
    positions = screen_positions(geometry, 4)
    np.testing.assert_allclose(positions, [0.0, 10.0, 20.0, 30.0])


def test_sample_screen_uses_nearest_cell(small_layout) -> None:
    grid, geometry = small_layout
    field = -np.tile(np.arange(1.0, 11.0)[:, np.newaxis], (1, 10))

    profile = sample_screen(field, grid, geometry, samples=4)

    # Rows 0, 3 and 6; the last position lies below the grid.
    np.testing.assert_allclose(profile, [1.0, 4.0, 7.0, 0.0])


def test_sample_screen_fills_output_buffer(small_layout) -> None:
    grid, geometry = small_layout
    field = np.ones(grid.shape)
    out = np.full(5, -1.0)

    result = sample_screen(field, grid, geometry, samples=5, prof_a=out)

    assert result is out
    np.testing.assert_allclose(out, [1.0, 1.0, 1.0, 1.0, 0.0])


def test_sample_screen_rejects_foreign_buffer(small_layout) -> None:
    grid, geometry = small_layout
    with pytest.raises(BufferMismatchError):
        sample_screen(np.zeros((4, 4)), grid, geometry)


def test_steady_intensity_of_quadrature_pair() -> None:
    phase = np.linspace(0, 2 * np.pi, 50)
    np.testing.assert_allclose(steady_intensity(2 * np.sin(phase), -2 * np.cos(phase)), 4.0)
    with pytest.raises(BufferMismatchError):
        steady_intensity(np.zeros(3), np.zeros(4))


def test_find_minima_of_synthetic_pattern() -> None:
    x = np.linspace(-3, 3, 601)
    profile = np.sinc(x) ** 2

    minima = find_minima(profile, relative_prominence=0.01)

    np.testing.assert_allclose(np.sort(np.abs(x[minima])), [1, 1, 2, 2], atol=0.011)
    assert find_minima(np.zeros(10)).size == 0


def test_expected_minima_positions() -> None:
    geometry = Geometry.from_canvas(800, 600, 40.0, GeometryConfig())

    positions = expected_minima(geometry, 30.0, 40.0)

    offset = 360.0 * np.tan(np.arcsin(0.75))
    np.testing.assert_allclose(positions, [300.0 - offset, 300.0 + offset])
    assert expected_minima(geometry, 30.0, 20.0).size == 0


def test_angular_spread_of_flat_and_empty_profiles() -> None:
    geometry = Geometry.from_canvas(800, 600, 40.0, GeometryConfig())
    positions = screen_positions(geometry, 101)

    assert angular_spread(np.zeros(101), positions, geometry) == 0.0

    spike = np.zeros(101)
    spike[50] = 1.0
    assert angular_spread(spike, positions, geometry) == pytest.approx(0.0)

    flat = angular_spread(np.ones(101), positions, geometry)
    assert 0.0 < flat < 2 * np.arctan(300.0 / 360.0)


def steady(wave, sampling=None):
    engine = make_engine(wave=wave, sampling=sampling)
    engine.update(0.0)
    return engine, engine.steady_profile()


def test_narrower_slit_spreads_more() -> None:
    spreads = []
    for slit_width in (15.0, 30.0, 60.0):
        engine, profile = steady({"wavelength": 30.0, "slit_width": slit_width})
        positions = screen_positions(engine.geometry, profile.size)
        spreads.append(angular_spread(profile, positions, engine.geometry))

    assert spreads[0] > spreads[1] > spreads[2]


def test_subwavelength_slit_has_no_minima() -> None:
    _, profile = steady({"wavelength": 30.0, "slit_width": 20.0})

    assert profile.max() > 0
    assert find_minima(profile).size == 0


def test_wide_slit_shows_minima_near_expected_angle() -> None:
    engine, profile = steady(
        {"wavelength": 6.0, "slit_width": 36.0},
        {"scale": 2, "screen_samples": 301, "secondary_source_count": 40},
    )
    positions = screen_positions(engine.geometry, profile.size)

    minima = find_minima(profile, relative_prominence=0.005)
    offsets = np.abs(positions[minima] - engine.geometry.slit_y)

    assert minima.size >= 2
    expected = engine.geometry.screen_distance * np.tan(np.arcsin(6.0 / 36.0))
    assert 0.5 * expected < offsets.min() < 1.5 * expected


def test_steady_profile_consistent_across_scales() -> None:
    _, coarse = steady({}, {"scale": 3})
    _, fine = steady({}, {"scale": 2})

    assert np.corrcoef(coarse, fine)[0, 1] > 0.9


def test_far_field_minima_follow_slit_law() -> None:
    engine, profile = steady(
        {"wavelength": 3.0, "slit_width": 30.0},
        {"scale": 1, "screen_samples": 601, "secondary_source_count": 60},
    )
    positions = screen_positions(engine.geometry, profile.size)
    measured = positions[find_minima(profile, relative_prominence=0.005)]

    expected = expected_minima(engine.geometry, 3.0, 30.0, orders=(1, 2, 3))

    assert expected.size == 6
    for y_min in expected:
        assert np.min(np.abs(measured - y_min)) < 4.0
