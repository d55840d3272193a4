"""Tests for headless sessions and the HDF5 output files."""

import numpy as np
import pytest
from h5py import File

from fresnelab.__main__ import main as run_main
from fresnelab.config import RunConfig
from fresnelab.data.paths import (
    BASE_DIR_ENV,
    DIAGNOSTICS_FILE,
    MONITORING_FILE,
    PROFILER_FILE,
    SNAPSHOTS_FILE,
    get_result_files,
)
from fresnelab.data.store import OutputManager
from fresnelab.engine import DiffractionSimulation
from fresnelab.monitoring import load_monitoring_data
from fresnelab.solvers.session import Session


@pytest.fixture
def finished_session(small_config, tmp_path):
    engine = DiffractionSimulation(small_config).init()
    output = OutputManager(tmp_path)
    session = Session(engine, small_config.run, output).run()
    output.save_results(session)
    return session, output


def test_session_records_every_frame(finished_session) -> None:
    session, _ = finished_session

    np.testing.assert_allclose(session.time_f, np.arange(7) * 0.05)
    assert session.profile_fs.shape == (7, 100)
    assert np.all(np.isfinite(session.profile_fs))
    assert session.profile_fs[1:].any()
    np.testing.assert_array_equal(session.snapshot_frame, [0, 3, 6])
    assert session.field_snapshot_fyx.shape == (3, 30, 40)
    assert session.steady_profile.max() > 0


def test_snapshot_file(finished_session, tmp_path) -> None:
    session, _ = finished_session

    with File(tmp_path / SNAPSHOTS_FILE, "r") as f:
        np.testing.assert_array_equal(f["field_snapshot_fyx"][()], session.field_snapshot_fyx)
        np.testing.assert_array_equal(f["snapshot_frame"][()], [0, 3, 6])


def test_diagnostics_file(finished_session, tmp_path) -> None:
    session, _ = finished_session

    with File(tmp_path / DIAGNOSTICS_FILE, "r") as f:
        np.testing.assert_array_equal(f["profile/history_fs"][()], session.profile_fs)
        np.testing.assert_array_equal(f["profile/steady_s"][()], session.steady_profile)
        assert f["coordinates/canvas_width"][()] == 120
        assert f["coordinates/scale"][()] == 3
        assert f["coordinates/wall_x"][()] == pytest.approx(48.0)
        assert f["parameters/wavelength"][()] == 30.0
        assert f["parameters/secondary_source_count"][()] == 20
        assert "Moderate diffraction" in f["parameters"].attrs["description"]


def test_monitoring_file_holds_whole_history(finished_session, tmp_path) -> None:
    session, _ = finished_session

    data = load_monitoring_data(tmp_path / MONITORING_FILE)

    assert data["last_step"] == 6
    np.testing.assert_array_equal(data["history_fs"], session.profile_fs)
    np.testing.assert_allclose(data["time_f"], session.time_f)


def test_command_line_run(tmp_path, capsys) -> None:
    run_main(
        [
            "--width", "120",
            "--height", "90",
            "--frames", "4",
            "--snapshots", "2",
            "--monitoring-steps", "2",
            "--slit-width", "20",
            "--output", str(tmp_path),
            "--profile",
        ]
    )

    for name in (SNAPSHOTS_FILE, DIAGNOSTICS_FILE, MONITORING_FILE, PROFILER_FILE):
        assert (tmp_path / name).exists()
    out = capsys.readouterr().out
    assert "Strong diffraction" in out

    with File(tmp_path / DIAGNOSTICS_FILE, "r") as f:
        assert f["profile/history_fs"].shape == (5, 100)
        assert f["parameters/slit_width"][()] == 20.0


def test_output_directory_from_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(BASE_DIR_ENV, str(tmp_path / "env_results"))

    output = OutputManager()

    assert output.save_path == tmp_path / "env_results"
    assert output.save_path.is_dir()
    assert output.monitoring_path == get_result_files()["monitoring"]


@pytest.mark.parametrize(
    "frames, snapshots, expected",
    [(10, 4, [0, 2, 5, 8, 10]), (3, 5, [0, 1, 2, 3]), (0, 4, [0])],
)
def test_snapshots_end_on_last_frame(small_config, frames, snapshots, expected) -> None:
    engine = DiffractionSimulation(small_config).init()
    run = RunConfig(frames=frames, time_step=0.05, snapshots=snapshots)

    session = Session(engine, run).run()

    np.testing.assert_array_equal(session.snapshot_frame, expected)
    assert session.field_snapshot_fyx.shape == (len(expected),) + engine.grid.shape
    np.testing.assert_allclose(session.snapshot_time, np.array(expected) * 0.05)
    assert all(snapshot.any() for snapshot in session.field_snapshot_fyx)
