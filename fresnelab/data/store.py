"""Session results data saving module."""

from pathlib import Path

from h5py import File

from .paths import get_base_dir, get_result_files


class OutputManager:
    """Handles session data storage."""

    def __init__(self, save_path=None, compression="gzip", compression_opts=9):
        """Initialize output manager.

        Parameters
        ----------
        save_path : str
            Directory where data files will be stored.
        compression : str, default: "gzip"
            Compression method for HDF5 files.
        compression_opts : integer, default: 9
            Compression level chosen.

        """
        self.save_path = Path(save_path) if save_path else get_base_dir()
        self.save_path.mkdir(parents=True, exist_ok=True)
        self.compression = compression
        self.compression_opts = compression_opts

        files = get_result_files(self.save_path)
        self.snapshots_path = files["snapshots"]
        self.diagnostics_path = files["diagnostics"]
        self.monitoring_path = files["monitoring"]
        self.profiler_path = files["profiler"]

    def save_snapshots(self, session):
        """Save field snapshots to HDF5 file.

        Parameters
        ----------
        session : object
            Session object with recorded data.

        """
        with File(self.snapshots_path, "w") as f:
            f.create_dataset(
                "field_snapshot_fyx",
                data=session.field_snapshot_fyx,
                compression=self.compression,
                compression_opts=self.compression_opts,
                chunks=True,
                shuffle=True,
            )
            f.create_dataset("snapshot_time", data=session.snapshot_time)
            f.create_dataset("snapshot_frame", data=session.snapshot_frame)

    def save_diagnostics(self, session):
        """Save profile history, layout and parameters to HDF5 file.

        Parameters
        ----------
        session : object
            Session object with recorded data.

        """
        engine = session.engine
        geometry = engine.geometry
        grid = engine.grid
        parameters = engine.parameters

        with File(self.diagnostics_path, "w") as f:
            profile_grp = f.create_group("profile")
            profile_grp.create_dataset(
                "history_fs", data=session.profile_fs, compression=self.compression
            )
            profile_grp.create_dataset("time_f", data=session.time_f)
            profile_grp.create_dataset("steady_s", data=session.steady_profile)
            profile_grp.create_dataset("positions_s", data=session.positions)

            coords_grp = f.create_group("coordinates")
            coords_grp.create_dataset("canvas_width", data=geometry.canvas_width)
            coords_grp.create_dataset("canvas_height", data=geometry.canvas_height)
            coords_grp.create_dataset("scale", data=grid.scale)
            coords_grp.create_dataset("x_grid", data=grid.x_grid)
            coords_grp.create_dataset("y_grid", data=grid.y_grid)
            coords_grp.create_dataset("source_x", data=geometry.source_x)
            coords_grp.create_dataset("source_y", data=geometry.source_y)
            coords_grp.create_dataset("wall_x", data=geometry.wall_x)
            coords_grp.create_dataset("wall_thickness", data=geometry.wall_thickness)
            coords_grp.create_dataset("slit_y", data=geometry.slit_y)
            coords_grp.create_dataset("slit_width", data=geometry.slit_width)
            coords_grp.create_dataset("screen_x", data=geometry.screen_x)

            params_grp = f.create_group("parameters")
            params_grp.create_dataset("wavelength", data=parameters.wavelength)
            params_grp.create_dataset("amplitude", data=parameters.amplitude)
            params_grp.create_dataset("frequency", data=parameters.frequency)
            params_grp.create_dataset("slit_width", data=parameters.slit_width)
            params_grp.create_dataset(
                "secondary_source_count", data=engine.sampler.secondary_source_count
            )
            params_grp.attrs["description"] = engine.get_state_description()

    def save_results(self, session):
        """Save all session results.

        Parameters
        ----------
        session : object
            Session object with recorded data.

        """
        self.save_snapshots(session)
        self.save_diagnostics(session)

    def monitoring_diagnostics(self, session, step):
        """
        Save the profile history progressively every desired number
        of frames and write it in a HDF5 file on the run.

        Parameters
        ----------
        session : object
            Session object with recorded data.
        step : integer
            Current frame.

        """
        if step == 1:
            with File(self.monitoring_path, "w") as f:
                profile_grp = f.create_group("profile")
                profile_grp.create_dataset(
                    "history_fs",
                    shape=session.profile_fs.shape,
                    dtype=session.profile_fs.dtype,
                    compression="gzip",
                    chunks=(
                        min(session.monitoring_steps, session.frames + 1),
                        session.samples,
                    ),
                )
                profile_grp.create_dataset("time_f", data=session.time_f)
                profile_grp.create_dataset("positions_s", data=session.positions)

                # Add metadata
                meta = f.create_group("metadata")
                meta.create_dataset("last_step", data=0, dtype="uint32")
                f["profile/history_fs"][0] = session.profile_fs[0]

        # Update data
        if step % session.monitoring_steps == 0 or step == session.frames:
            with File(self.monitoring_path, "r+") as f:
                step_idx = step + 1
                last_step = f["metadata/last_step"][()]
                last_step_idx = last_step + 1

                if step > last_step:
                    f["profile/history_fs"][last_step_idx:step_idx] = (
                        session.profile_fs[last_step_idx:step_idx]
                    )
                    f["profile/time_f"][last_step_idx:step_idx] = (
                        session.time_f[last_step_idx:step_idx]
                    )
                    f["metadata/last_step"][()] = step
