"""Basic example: one year of the inner solar system, recorded daily."""

from pathlib import Path
from newtonian_bodies import Simulator, ParquetRecorder, GRAVITATIONAL_CONSTANT
from newtonian_bodies.io import load_initial_conditions, read_records
from newtonian_bodies.render import plot_trajectories
from newtonian_bodies.utils import ProgressObserver

HERE = Path(__file__).parent


def main():
    """Run the bundled solar-system initial conditions."""
    bodies = load_initial_conditions(HERE / "solar_system.json")

    sim = Simulator(gravitational_constant=GRAVITATIONAL_CONSTANT, observers=[ProgressObserver()])

    print(f"Running simulation with {len(bodies)} bodies...")
    with ParquetRecorder("solar_system.parquet") as recorder:
        summary = sim.run(
            bodies,
            total_time=60 * 60 * 24 * 365,
            dt=60 * 60,
            record_interval=60 * 60 * 24,
            recorder=recorder,
        )

    print(f"Steps: {summary.steps}, snapshots: {summary.snapshots}")
    print(f"Rows written: {read_records('solar_system.parquet').num_rows}")

    plot_trajectories("solar_system.parquet", "solar_system.png")
    print("Simulation complete!")


if __name__ == "__main__":
    main()
