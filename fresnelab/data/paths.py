"""Output locations shared by the driver, the storage layer and the plotting tools."""

import os
from pathlib import Path

DEFAULT_BASE_DIR = Path("./results")
BASE_DIR_ENV = "FRESNELAB_BASE_DIR"

SNAPSHOTS_FILE = "fresnelab_snapshots.h5"
DIAGNOSTICS_FILE = "fresnelab_diagnostics.h5"
MONITORING_FILE = "fresnelab_monitoring.h5"
PROFILER_FILE = "fresnelab_log.txt"


def get_base_dir(base_path=None) -> Path:
    """Explicit directory, else `$FRESNELAB_BASE_DIR`, else ./results."""
    if base_path is not None:
        return Path(base_path)
    return Path(os.environ.get(BASE_DIR_ENV, str(DEFAULT_BASE_DIR)))


def get_fig_dir(base_path=None) -> Path:
    return get_base_dir(base_path) / "figures"


def get_result_files(base_path=None):
    """
    Paths of every file a session writes.

    Parameters
    ----------
    base_path : str or Path, optional
        Session directory. Resolved with `get_base_dir`.

    Returns
    -------
    files : dict
        Keys "snapshots", "diagnostics", "monitoring" and "profiler".

    """
    root = get_base_dir(base_path)
    return {
        "snapshots": root / SNAPSHOTS_FILE,
        "diagnostics": root / DIAGNOSTICS_FILE,
        "monitoring": root / MONITORING_FILE,
        "profiler": root / PROFILER_FILE,
    }
