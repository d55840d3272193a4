"""Headless session running the engine for a fixed number of frames."""

import numpy as np

from ..data.diagnostics import validate_field
from ..functions.intensity import screen_positions


class Session:
    """Frame loop with recorded diagnostics."""

    def __init__(self, engine, run, output=None):
        """Initialize session with the engine and run options.

        Parameters
        ----------
        engine : object
            Initialized diffraction engine.
        run : object
            Contains the run options (frames, time step, snapshots).
        output : object, optional
            Contains the output manager methods.

        """
        self.engine = engine
        self.output = output
        self.frames = int(run.frames)
        self.time_step = float(run.time_step)
        self.snapshots = max(0, min(int(run.snapshots), self.frames))
        self.monitoring_steps = max(1, int(run.monitoring_steps))
        # Evenly spread, the last one always on the final frame
        self.snapshot_steps = (
            np.linspace(0, self.frames, self.snapshots + 1).round().astype(np.int64)
        )
        self.samples = engine.config.sampling.screen_samples

        # Initialize recording arrays
        self.init_recording_arrays()

    def init_recording_arrays(self):
        """Initialize arrays for recording."""
        shape_fyx = (self.snapshots + 1,) + self.engine.grid.shape
        shape_fs = (self.frames + 1, self.samples)

        self.field_snapshot_fyx = np.zeros(shape_fyx, dtype=np.float64)
        self.snapshot_time = np.zeros(self.snapshots + 1, dtype=np.float64)
        self.snapshot_frame = self.snapshot_steps.astype(np.uint32)
        self.profile_fs = np.zeros(shape_fs, dtype=np.float64)
        self.time_f = np.zeros(self.frames + 1, dtype=np.float64)
        self.steady_profile = np.zeros(self.samples, dtype=np.float64)
        self.positions = screen_positions(self.engine.geometry, self.samples)

    def set_initial_conditions(self, params=None):
        """Compute the frame at the current time and store it first."""
        self.engine.update(0.0, params)
        frame = self.engine.render()

        self.profile_fs[0] = frame.profile
        self.time_f[0] = frame.time
        self.field_snapshot_fyx[0] = frame.field
        self.snapshot_time[0] = frame.time

    def record_frame(self, step):
        """Store the profile of the frame just computed."""
        validate_field(self.engine.field)
        frame = self.engine.render()
        self.profile_fs[step] = frame.profile
        self.time_f[step] = frame.time

    def record_snapshot(self, snap_idx, step):
        self.field_snapshot_fyx[snap_idx] = self.engine.field
        self.snapshot_time[snap_idx] = self.engine.time
        self.snapshot_frame[snap_idx] = step

    def compute_steady_profile(self):
        """Time-independent intensity along the screen for the last state."""
        self.steady_profile[:] = self.engine.steady_profile()
        return self.steady_profile

    def run(self, params=None):
        """Run every frame and record the diagnostics."""
        self.set_initial_conditions(params)

        snap_idx = 0
        for step in range(1, self.frames + 1):
            self.engine.update(self.time_step)
            self.record_frame(step)
            if self.output is not None:
                self.output.monitoring_diagnostics(self, step)
            if snap_idx < self.snapshots and step == self.snapshot_steps[snap_idx + 1]:
                snap_idx += 1
                self.record_snapshot(snap_idx, step)

        self.compute_steady_profile()
        return self
