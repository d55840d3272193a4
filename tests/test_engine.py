"""Tests for the session lifecycle of the diffraction engine."""

import numpy as np
import pytest

from fresnelab.engine import DiffractionSimulation
from fresnelab.errors import DegenerateGeometryError

from .conftest import make_engine


def test_update_before_init_fails() -> None:
    engine = DiffractionSimulation()

    assert not engine.initialized
    with pytest.raises(RuntimeError):
        engine.update(0.1)
    with pytest.raises(RuntimeError):
        engine.render()


def test_init_allocates_for_configured_canvas(engine) -> None:
    assert engine.initialized
    assert engine.grid.shape == (200, 267)
    assert engine.field.shape == engine.grid.shape
    assert engine.time == 0.0


def test_update_advances_time_and_fills_field(engine) -> None:
    engine.update(0.1)
    field = engine.update(0.1)

    assert engine.time == pytest.approx(0.2)
    assert np.all(np.isfinite(field))
    assert np.abs(field).max() > 0


def test_negative_time_step_is_rejected(engine) -> None:
    with pytest.raises(ValueError):
        engine.update(-0.1)


def test_degenerate_parameters_keep_previous_state(engine) -> None:
    engine.update(0.1)
    with pytest.raises(DegenerateGeometryError):
        engine.update(0.1, {"wavelength": 0.0})

    assert engine.parameters.wavelength == 30.0
    assert engine.time == pytest.approx(0.1)


def test_partial_update_moves_slit(engine) -> None:
    engine.update(0.0, {"slitWidth": 80.0})

    assert engine.parameters.slit_width == 80.0
    assert engine.parameters.wavelength == 30.0
    assert engine.geometry.slit_width == 80.0
    assert engine.geometry.slit_top == pytest.approx(260.0)


def test_render_frame(engine) -> None:
    engine.update(0.25)
    frame = engine.render()

    assert frame.colors.shape == (200, 267, 3)
    assert frame.colors.dtype == np.uint8
    assert frame.profile.shape == (100,)
    assert frame.positions[0] == 0.0
    assert frame.positions[-1] == 600.0
    assert frame.time == pytest.approx(0.25)
    assert frame.field is engine.field


def test_render_reuses_color_buffer(engine) -> None:
    engine.update(0.1)
    first = engine.render().colors
    engine.update(0.1)
    assert engine.render().colors is first


def test_reset_then_update_matches_fresh_session(engine) -> None:
    for _ in range(3):
        engine.update(0.1)
    engine.reset()

    assert engine.time == 0.0
    assert not engine.field.any()

    fresh = make_engine()
    np.testing.assert_array_equal(engine.update(0.05), fresh.update(0.05))


def test_resize_rebuilds_layout(engine) -> None:
    engine.update(0.1)
    engine.resize(400, 300)

    assert engine.grid.shape == (100, 134)
    assert engine.field.shape == (100, 134)
    assert engine.geometry.wall_x == pytest.approx(160.0)
    assert engine.geometry.slit_y == pytest.approx(150.0)

    engine.update(0.1)
    assert engine.render().colors.shape == (100, 134, 3)


def test_destroy_releases_buffers(engine) -> None:
    engine.destroy()

    assert not engine.initialized
    assert engine.field is None
    with pytest.raises(RuntimeError):
        engine.update(0.1)
    engine.destroy()


def test_steady_profile_leaves_current_field(engine) -> None:
    engine.update(0.3)
    before = engine.field.copy()

    engine.steady_profile()

    np.testing.assert_array_equal(engine.field, before)
    assert engine.time == pytest.approx(0.3)


def test_steady_profile_does_not_depend_on_time(engine) -> None:
    engine.update(0.0)
    early = engine.steady_profile()
    engine.update(0.37)
    late = engine.steady_profile()

    np.testing.assert_allclose(early, late, rtol=1e-6, atol=1e-12)


def test_state_description(engine) -> None:
    text = engine.get_state_description()

    assert "ratio 1.33" in text
    assert "Moderate diffraction" in text
    assert "sin θ = nλ/a" in text

    engine.update(0.0, {"slit_width": 20.0})
    assert "Strong diffraction" in engine.get_state_description()
    engine.update(0.0, {"slit_width": 150.0})
    assert "Weak diffraction" in engine.get_state_description()
