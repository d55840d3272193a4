"""Entry point for running the package with 'python -m fresnelab'."""

import argparse
import cProfile

from ._version import __version__
from .config import ConfigOptions
from .data.diagnostics import profiler_log
from .data.store import OutputManager
from .engine import DiffractionSimulation
from .solvers.session import Session


def parse_cli_options(argv=None):
    """Parse session options."""
    parser = argparse.ArgumentParser(
        prog="fresnelab",
        description="Run a headless single-slit diffraction session.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--wavelength", type=float, default=30.0, help="Wavelength [px].")
    parser.add_argument("--amplitude", type=float, default=1.0, help="Source amplitude.")
    parser.add_argument("--frequency", type=float, default=2.0, help="Frequency [Hz].")
    parser.add_argument("--slit-width", type=float, default=40.0, help="Slit width [px].")
    parser.add_argument("--width", type=int, default=800, help="Canvas width [px].")
    parser.add_argument("--height", type=int, default=600, help="Canvas height [px].")
    parser.add_argument("--scale", type=int, default=3, help="Canvas pixels per grid cell.")
    parser.add_argument(
        "--secondary-sources",
        type=int,
        default=20,
        help="Number of secondary sources across the slit.",
    )
    parser.add_argument("--frames", type=int, default=120, help="Frames to compute.")
    parser.add_argument("--time-step", type=float, default=1 / 60, help="Frame time [s].")
    parser.add_argument("--snapshots", type=int, default=4, help="Field snapshots to save.")
    parser.add_argument(
        "--monitoring-steps",
        type=int,
        default=10,
        help="Frames between monitoring file updates.",
    )
    parser.add_argument("--output", default=None, help="Directory for result files.")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Write a cProfile report next to the results.",
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main function."""
    args = parse_cli_options(argv)

    print(f"Running fresnelab v{__version__} for Python")

    config = ConfigOptions.build(
        wave_parameters={
            "wavelength": args.wavelength,
            "amplitude": args.amplitude,
            "frequency": args.frequency,
            "slit_width": args.slit_width,
        },
        canvas_parameters={"width": args.width, "height": args.height},
        sampling_parameters={
            "scale": args.scale,
            "secondary_source_count": args.secondary_sources,
        },
        run_parameters={
            "frames": args.frames,
            "time_step": args.time_step,
            "snapshots": args.snapshots,
            "monitoring_steps": args.monitoring_steps,
        },
    )

    engine = DiffractionSimulation(config).init()
    output = OutputManager(args.output)
    session = Session(engine, config.run, output)

    print(f"Sampling {engine.grid!r}")

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()

    # Run session
    session.run()

    if profiler is not None:
        profiler.disable()
        profiler_log(profiler, output.profiler_path)

    # Save session results
    output.save_results(session)

    print(engine.get_state_description())
    print(f"Results saved to: {output.save_path}")


if __name__ == "__main__":
    main()
