"""
Python tool for drawing frames and plotting the HDF5 results
saved after a session has finished execution.
"""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import numpy as np
from h5py import File
from matplotlib.patches import Circle, Rectangle
from scipy.ndimage import zoom

from .config import GeometryConfig
from .data.paths import get_base_dir, get_fig_dir, get_result_files
from .engine import Frame
from .functions.colormap import colorize, displacement_colormap
from .functions.spread import expected_minima
from .mesh.grid import Grid
from .physics.geometry import Geometry


@dataclass
class PlotConfiguration:
    """Plot style configuration."""

    colors: Dict[str, str] = field(
        default_factory=lambda: {
            "background": "#0a0a0f",
            "wall": "#374151",
            "slit": "#9ca3af",
            "indicator": "#fbbf24",
            "screen": "#1f2937",
            "profile": "#10b981",
            "source": "#60a5fa",
            "text": "#e2e8f0",
        }
    )
    wall_half_width: float = 10.0 # [px]
    profile_width: float = 50.0 # [px]
    dpi: int = 150

    def __post_init__(self):
        """Customize figure styling."""
        plt.style.use("default")

        plt.rcParams.update(
            {
                "figure.figsize": (10, 7.5),
                "axes.grid": False,
                "axes.linewidth": 0.8,
                "lines.linewidth": 1.5,
                "font.family": "monospace",
                "font.size": 10,
                "axes.labelsize": 11,
                "axes.titlesize": 12,
            }
        )


class FrameRenderer:
    """Draws engine frames on matplotlib axes."""

    def __init__(self, config=None):
        self.config = config or PlotConfiguration()

    def magnify(self, colors, grid):
        """Upscale a grid-resolution color buffer to canvas size."""
        factor = (grid.scale, grid.scale, 1)
        image = zoom(colors, factor, order=1, mode="nearest", grid_mode=True)
        return image[: grid.height, : grid.width]

    def draw_field(self, ax, colors, grid):
        ax.imshow(
            self.magnify(colors, grid),
            extent=(0, grid.width, grid.height, 0),
            interpolation="nearest",
        )

    def draw_wall_and_slit(self, ax, geometry):
        c = self.config.colors
        half = self.config.wall_half_width
        x_0 = geometry.wall_x - half

        ax.add_patch(Rectangle((x_0, 0), 2 * half, geometry.slit_top, color=c["wall"]))
        ax.add_patch(
            Rectangle(
                (x_0, geometry.slit_bottom),
                2 * half,
                geometry.canvas_height - geometry.slit_bottom,
                color=c["wall"],
            )
        )
        ax.add_patch(
            Rectangle(
                (x_0, geometry.slit_top),
                2 * half,
                geometry.slit_width,
                fill=False,
                edgecolor=c["slit"],
                linewidth=2,
            )
        )

        x_ind = geometry.wall_x + 25
        ax.plot(
            [x_ind, x_ind],
            [geometry.slit_top, geometry.slit_bottom],
            linestyle=(0, (3, 3)),
            linewidth=1,
            color=c["indicator"],
        )
        ax.text(
            x_ind + 15,
            geometry.slit_y,
            f"{geometry.slit_width:.0f}px",
            rotation=90,
            ha="center",
            va="center",
            color=c["indicator"],
        )

    def draw_screen(self, ax, geometry, profile, positions):
        c = self.config.colors
        ax.add_patch(
            Rectangle(
                (geometry.screen_x - 2, 0), 4, geometry.canvas_height, color=c["screen"]
            )
        )

        peak = np.max(profile) if np.max(profile) > 0 else 1.0
        x = geometry.screen_x + 5 + profile / peak * self.config.profile_width
        ax.plot(x, positions, color=c["profile"], linewidth=2)

        ax.text(geometry.screen_x, geometry.canvas_height - 20, "Screen",
                ha="center", color=c["slit"], fontsize=8)
        ax.text(geometry.screen_x + 30, geometry.canvas_height - 8, "Intensity",
                ha="center", color=c["slit"], fontsize=8)

    def draw_source(self, ax, geometry):
        c = self.config.colors
        ax.add_patch(Circle((geometry.source_x, geometry.source_y), 10, color=c["source"]))
        ax.text(geometry.source_x, geometry.source_y - 15, "Source",
                ha="center", va="bottom", color=c["text"], fontsize=8)

    def render(self, frame, ax=None, title=None):
        """
        Draw a complete frame.

        Parameters
        ----------
        frame : object
            Frame with colors, profile, positions, geometry and grid.
        ax : matplotlib Axes, optional
            Target axes. A new figure is created when not given.
        title : str, optional
            Axes title.

        Returns
        -------
        fig, ax : matplotlib Figure and Axes

        """
        if ax is None:
            fig, ax = plt.subplots()
        else:
            fig = ax.figure

        geometry = frame.geometry
        ax.set_facecolor(self.config.colors["background"])
        self.draw_field(ax, frame.colors, frame.grid)
        self.draw_wall_and_slit(ax, geometry)
        self.draw_screen(ax, geometry, frame.profile, frame.positions)
        self.draw_source(ax, geometry)

        ax.set_xlim(0, geometry.canvas_width)
        ax.set_ylim(geometry.canvas_height, 0)
        ax.set(xlabel="x [px]", ylabel="y [px]")
        if title:
            ax.set_title(title)

        return fig, ax

    def save_or_display(self, fig, filename, fig_path):
        """Save figure or display it."""
        fig.tight_layout()
        if fig_path:
            filepath = Path(fig_path) / filename
            fig.savefig(filepath, dpi=self.config.dpi)
            plt.close(fig)
        else:
            plt.show()


def parse_cli_options(argv=None):
    """Parse and validate CLI options."""
    parser = argparse.ArgumentParser(
        prog="fresnelab-plot",
        description="Plot session data from HDF5 files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--sim-path",
        default=None,
        help="Directory with the session data files (default: base directory).",
    )
    parser.add_argument(
        "--fig-path",
        default=None,
        help="Directory for figures (default: <base>/figures).",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display figures interactively instead of saving them.",
    )
    parser.add_argument(
        "--plots",
        default="snapshots,profile,history",
        help="Plots to generate: snapshots,profile,history (comma-separated).",
    )

    args = parser.parse_args(argv)

    args.sim_path = Path(args.sim_path) if args.sim_path else get_base_dir()
    if args.show:
        args.fig_path = None
    else:
        args.fig_path = Path(args.fig_path) if args.fig_path else get_fig_dir(args.sim_path)
    args.plots = {ptype: True for ptype in args.plots.split(",")}

    return args


def load_simulation_data(directory):
    """Load session data from HDF5 files."""
    files = get_result_files(directory)
    snapshots_path = files["snapshots"]
    diagnostics_path = files["diagnostics"]

    if not diagnostics_path.exists():
        raise FileNotFoundError(f"No diagnostics file was found in {directory}")

    data = {}
    print(f"Loading data from file: {diagnostics_path}")
    with File(diagnostics_path, "r") as f:
        profile = f["profile"]
        data["history_fs"] = np.array(profile["history_fs"])
        data["time_f"] = np.array(profile["time_f"])
        data["steady_s"] = np.array(profile["steady_s"])
        data["positions_s"] = np.array(profile["positions_s"])

        data["coordinates"] = {k: v[()] for k, v in f["coordinates"].items()}
        data["parameters"] = {k: v[()] for k, v in f["parameters"].items()}
        data["description"] = f["parameters"].attrs.get("description", "")

    if snapshots_path.exists():
        print(f"Loading data from file: {snapshots_path}")
        with File(snapshots_path, "r") as f:
            data["field_snapshot_fyx"] = np.array(f["field_snapshot_fyx"])
            data["snapshot_time"] = np.array(f["snapshot_time"])
            data["snapshot_frame"] = np.array(f["snapshot_frame"])

    return data


def rebuild_layout(data):
    """Grid and geometry of a saved session."""
    coor = data["coordinates"]
    width = int(coor["canvas_width"])
    height = int(coor["canvas_height"])
    grid = Grid(width, height, int(coor["scale"]))
    geometry_config = GeometryConfig(
        source_x=float(coor["source_x"]) / width,
        source_y=float(coor["source_y"]) / height,
        wall_x=float(coor["wall_x"]) / width,
        slit_y=float(coor["slit_y"]) / height,
        screen_x=float(coor["screen_x"]) / width,
        wall_thickness=float(coor["wall_thickness"]),
    )
    geometry = Geometry.from_canvas(
        width, height, float(coor["slit_width"]), geometry_config
    )
    return grid, geometry


def plot_snapshots(data, renderer, fig_path):
    """Draw every saved field snapshot as a full frame."""
    if "field_snapshot_fyx" not in data:
        print("No snapshot data available")
        return

    grid, geometry = rebuild_layout(data)
    frames = data["snapshot_frame"]
    for idx, field_yx in enumerate(data["field_snapshot_fyx"]):
        frame_idx = int(frames[idx])
        frame = Frame(
            colors=colorize(field_yx),
            field=field_yx,
            profile=data["history_fs"][frame_idx],
            positions=data["positions_s"],
            geometry=geometry,
            grid=grid,
            time=float(data["snapshot_time"][idx]),
        )
        fig, ax = renderer.render(frame, title=f"Wave field at t = {frame.time:.3f} s")
        mappable = plt.cm.ScalarMappable(cmap=displacement_colormap())
        mappable.set_clim(-2, 2)
        fig.colorbar(mappable, ax=ax, label="Displacement")
        renderer.save_or_display(fig, f"field_frame_{frame_idx:05d}.png", fig_path)


def plot_steady_profile(data, renderer, fig_path):
    """Plot the time-independent screen intensity with the expected minima."""
    _, geometry = rebuild_layout(data)
    params = data["parameters"]
    positions = data["positions_s"]
    steady = data["steady_s"]

    fig, ax = plt.subplots()
    ax.plot(positions, steady, color="tab:blue")
    for y_min in expected_minima(
        geometry, float(params["wavelength"]), float(params["slit_width"])
    ):
        ax.axvline(y_min, color="tab:gray", linestyle="--", linewidth=0.8)
    ax.set(xlabel="y [px]", ylabel="Intensity [a.u.]")
    ax.set_title(r"Screen intensity and $\sin\theta = n\lambda/a$ minima")
    renderer.save_or_display(fig, "steady_profile.png", fig_path)


def plot_profile_history(data, renderer, fig_path):
    """Plot the instantaneous screen profile against time."""
    history = data["history_fs"]
    time = data["time_f"]
    positions = data["positions_s"]

    fig, ax = plt.subplots()
    mesh = ax.pcolormesh(time, positions, history.T, shading="auto", cmap="inferno")
    fig.colorbar(mesh, ax=ax, label="|displacement|")
    ax.set(xlabel="t [s]", ylabel="y [px]")
    ax.set_title("Screen profile over time")
    renderer.save_or_display(fig, "profile_history.png", fig_path)


def main(argv=None):
    """Main execution function."""
    args = parse_cli_options(argv)
    data = load_simulation_data(args.sim_path)

    if args.fig_path:
        args.fig_path.mkdir(parents=True, exist_ok=True)
        print(f"Saving figures to file: {args.fig_path}")
    else:
        print("Displaying figures interactively.")

    renderer = FrameRenderer()

    if args.plots.get("snapshots", False):
        print("Generating frame plots ...")
        plot_snapshots(data, renderer, args.fig_path)
    if args.plots.get("profile", False):
        print("Generating screen intensity plot ...")
        plot_steady_profile(data, renderer, args.fig_path)
    if args.plots.get("history", False):
        print("Generating profile history plot ...")
        plot_profile_history(data, renderer, args.fig_path)

    print("Plotting complete!")


if __name__ == "__main__":
    main()
