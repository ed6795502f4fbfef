"""CLI main entry point."""

import argparse
import logging
import sys
from typing import List, Optional
import pyarrow as pa
from newtonian_bodies.io.parquet_recorder import ParquetRecorder
from newtonian_bodies.io.recorder import RecorderError
from newtonian_bodies.io.state_io import load_initial_conditions
from newtonian_bodies.physics.body import total_mass
from newtonian_bodies.physics.integrators.euler import EulerIntegrator
from newtonian_bodies.physics.simulator import Simulator
from newtonian_bodies.render.trajectory_plot import plot_trajectories
from newtonian_bodies.utils.config import Config, load_config, save_config, DEFAULT_OUTPUT
from newtonian_bodies.utils.expressions import evaluate_expression, ExpressionError
from newtonian_bodies.utils.progress import ProgressObserver

logger = logging.getLogger(__name__)


def expression(value: str) -> float:
    """argparse type for arithmetic-expression literals."""
    try:
        return evaluate_expression(value)
    except ExpressionError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newtonian-bodies",
        description="Newtonian N-body simulator - writes body positions to a Parquet file"
    )

    parser.add_argument('input', nargs='?', default=None,
                        help='JSON or YAML file with initial conditions')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help=f'File to store results of the simulation (default: {DEFAULT_OUTPUT})')
    parser.add_argument('-g', '--gravity', type=expression, default=None,
                        help='Gravitational constant (default: 6.67430e-11)')
    parser.add_argument('-t', '--total-time', type=expression, default=None,
                        help='Number of seconds to simulate, e.g. "60*60*24*365" (default)')
    parser.add_argument('-d', '--delta-t', type=expression, default=None,
                        help='Time step in seconds, e.g. "1.0/1000.0" (default: 0.001)')
    parser.add_argument('-r', '--record-interval', type=expression, default=None,
                        help='Record every N seconds, e.g. "60*10" (default: 1)')

    parser.add_argument('--config', type=str, default=None,
                        help='Load settings from a .json or .yaml file (command-line values win)')
    parser.add_argument('--save-config', type=str, default=None,
                        help='Write the effective settings to a .json or .yaml file')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a trajectory plot of the recorded output to this image file')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def resolve_config(args) -> Config:
    """Merge defaults, an optional config file and command-line values."""
    config = load_config(args.config) if args.config else Config()
    config = config.update({
        'input': args.input,
        'output': args.output,
        'gravitational_constant': args.gravity,
        'total_time': args.total_time,
        'dt': args.delta_t,
        'record_interval': args.record_interval,
        'plot': args.plot,
    })
    if args.no_progress:
        config = config.update({'progress': False})
    return config.validate()


def run_simulation(config: Config) -> int:
    """Run a simulation from a resolved config."""
    bodies = load_initial_conditions(config.input)
    initial_mass = total_mass(bodies)

    observers = [ProgressObserver()] if config.progress else []
    sim = Simulator(EulerIntegrator(), gravitational_constant=config.gravitational_constant, observers=observers)

    print(f"Running simulation: {len(bodies)} bodies from {config.input}")
    print(f"dt: {config.dt:g}s, total time: {config.total_time:g}s, "
          f"record interval: {config.record_interval:g}s, G: {config.gravitational_constant:g}")

    recorder = ParquetRecorder(config.output)
    try:
        summary = sim.run(bodies, config.total_time, config.dt, config.record_interval, recorder)
    except Exception:
        try:
            recorder.close()
        except (OSError, RecorderError, pa.ArrowException):
            logger.exception("Failed to close %s after an aborted run", config.output)
        raise
    recorder.close()

    logger.debug("Mass drift: %g", total_mass(bodies) - initial_mass)
    print(f"Steps: {summary.steps}, snapshots: {summary.snapshots} "
          f"({recorder.rows_written} rows) written to {config.output}")

    if config.plot:
        plot_trajectories(config.output, config.plot)
        print(f"Trajectory plot saved to {config.plot}")

    if not config.progress:
        print("Simulation complete!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if not config.input:
        parser.error("an input file is required (positional argument or 'input' in --config)")

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Configuration saved to {args.save_config}")

    try:
        return run_simulation(config)
    except (OSError, ValueError, RecorderError, pa.ArrowException) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
