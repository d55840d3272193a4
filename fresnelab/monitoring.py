"""
Python tool for monitoring the screen profile
saved while a session is still running and
did not finish.
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from h5py import File

from .data.paths import get_base_dir, get_fig_dir, get_result_files


def load_monitoring_data(file_path):
    """Load the profile rows written so far from HDF5 file."""
    data = {}

    with File(file_path, "r") as f:
        last_step = int(f["metadata/last_step"][()])
        data["last_step"] = last_step

        if "profile" in f:
            profile = f["profile"]
            data["history_fs"] = np.array(profile["history_fs"][: last_step + 1])
            data["time_f"] = np.array(profile["time_f"][: last_step + 1])
            data["positions_s"] = np.array(profile["positions_s"])

        return data


def plot_profile_history(data, save_dir):
    """Plot the monitored screen profile against time."""
    if "history_fs" not in data:
        print("No profile data available")
        return None

    fig, ax = plt.subplots()

    mesh = ax.pcolormesh(
        data["time_f"], data["positions_s"], data["history_fs"].T, shading="auto"
    )

    fig.colorbar(mesh, ax=ax, label="|displacement|")
    ax.set(xlabel="t [s]", ylabel="y [px]")
    ax.set_title(f"Screen profile up to frame {data['last_step']}")

    save_path = save_dir / "monitoring_profile.png"
    plt.savefig(save_path)
    plt.close(fig)

    return save_path


def plot_latest_profile(data, save_dir):
    """Plot the most recent monitored screen profile."""
    fig, ax = plt.subplots()

    ax.plot(data["positions_s"], data["history_fs"][-1])

    ax.set(xlabel="y [px]", ylabel="|displacement|")
    ax.set_title(f"Screen profile at t = {data['time_f'][-1]:.3f} s")

    save_path = save_dir / "monitoring_latest.png"
    plt.savefig(save_path)
    plt.close(fig)


def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(
        prog="fresnelab-monitor",
        description="Plot the monitoring file of a running session.",
    )
    parser.add_argument("--sim-path", default=None, help="Session data directory.")
    args = parser.parse_args(argv)

    sim_dir = Path(args.sim_path) if args.sim_path else get_base_dir()
    mon_file = get_result_files(sim_dir)["monitoring"]
    print(f"Loading data from file: {mon_file}")

    if not mon_file.exists():
        print(f"File not found: {mon_file}")
        return

    save_dir = get_fig_dir(sim_dir) / "fresnelab_monitoring"
    save_dir.mkdir(parents=True, exist_ok=True)
    print(f"Saving figures to file: {save_dir}")

    data = load_monitoring_data(mon_file)
    if not data or "history_fs" not in data:
        return

    plot_profile_history(data, save_dir)
    plot_latest_profile(data, save_dir)


if __name__ == "__main__":
    main()
