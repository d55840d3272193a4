"""Shared fixtures for the fresnelab test suite."""

import matplotlib
import pytest

matplotlib.use("Agg")

from fresnelab.config import ConfigOptions  # noqa: E402
from fresnelab.engine import DiffractionSimulation  # noqa: E402


def make_engine(wave=None, sampling=None, canvas=None, run=None):
    """Initialized engine for an 800x600 canvas unless told otherwise."""
    config = ConfigOptions.build(
        wave_parameters=wave,
        canvas_parameters=canvas,
        sampling_parameters=sampling,
        run_parameters=run,
    )
    return DiffractionSimulation(config).init()


@pytest.fixture
def engine():
    return make_engine()


@pytest.fixture
def small_config():
    return ConfigOptions.build(
        canvas_parameters={"width": 120, "height": 90},
        run_parameters={
            "frames": 6,
            "time_step": 0.05,
            "snapshots": 2,
            "monitoring_steps": 2,
        },
    )
