"""Main simulation driver: step loop and recording cadence."""

import enum
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Optional
from newtonian_bodies.io.recorder import Recorder
from newtonian_bodies.physics.body import Body, validate_bodies
from newtonian_bodies.physics.force_calculator import GRAVITATIONAL_CONSTANT
from newtonian_bodies.physics.integrators.base import Integrator
from newtonian_bodies.physics.integrators.euler import EulerIntegrator

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Invalid run parameters, detected before any integration."""


class SimulationState(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class RunSummary:
    """Outcome of a completed run."""
    steps: int
    record_steps: int
    total_intervals: int
    snapshots: int
    state: SimulationState


class SimulationObserver:
    """Passive hooks called by the simulator; none of them can alter the run."""

    def on_start(self, steps: int, record_steps: int, total_intervals: int):
        pass

    def on_record(self, step: int, interval: int, total_intervals: int, bodies: List[Body]):
        pass

    def on_step(self, step: int):
        pass

    def close(self, state: SimulationState):
        pass


def validate_timing(dt: float, record_interval: float, gravitational_constant: float = GRAVITATIONAL_CONSTANT,
                    total_time: float = 0.0):
    """Reject parameters that would make step arithmetic undefined.

    Raises:
        ConfigurationError: on non-finite values, ``dt <= 0``,
            ``record_interval <= 0``, ``record_interval < dt`` or ``G <= 0``
    """
    for label, value in (("dt", dt), ("record_interval", record_interval),
                         ("gravitational_constant", gravitational_constant), ("total_time", total_time)):
        if not isinstance(value, numbers.Real) or not math.isfinite(value):
            raise ConfigurationError(f"{label} must be a finite number, got {value!r}")
    if dt <= 0:
        raise ConfigurationError(f"dt must be > 0, got {dt}")
    if record_interval <= 0:
        raise ConfigurationError(f"record_interval must be > 0, got {record_interval}")
    if record_interval < dt:
        raise ConfigurationError(f"record_interval ({record_interval}) must be >= dt ({dt})")
    if gravitational_constant <= 0:
        raise ConfigurationError(f"gravitational_constant must be > 0, got {gravitational_constant}")


def count_steps(total_time: float, dt: float) -> int:
    """Number of integration steps; zero for non-positive durations."""
    return max(0, math.ceil(total_time / dt))


def count_record_steps(record_interval: float, dt: float) -> int:
    """Number of integration steps per recording interval."""
    return math.ceil(record_interval / dt)


def count_intervals(steps: int, record_steps: int) -> int:
    """Number of snapshots a run of ``steps`` emits (boundaries 0, k, 2k, ... < steps)."""
    return math.ceil(steps / record_steps)


class Simulator:
    """Main simulation controller.

    Converts a duration, a step size and a recording cadence into a fixed
    step count, drives the integrator and hands snapshots to a recorder.
    """

    def __init__(
        self,
        integrator: Optional[Integrator] = None,
        gravitational_constant: float = GRAVITATIONAL_CONSTANT,
        observers: Optional[Iterable[SimulationObserver]] = None
    ):
        """Initialize simulator.

        Args:
            integrator: Integrator to use (default: Euler)
            gravitational_constant: G used for every force evaluation
            observers: Optional passive observers (progress display etc.)
        """
        self.integrator = integrator or EulerIntegrator()
        self.gravitational_constant = float(gravitational_constant)
        self.observers: List[SimulationObserver] = list(observers or [])
        self.state = SimulationState.NOT_STARTED
        self.step_count = 0
        self.snapshot_count = 0

    def add_observer(self, observer: SimulationObserver):
        self.observers.append(observer)

    def run(self, bodies: List[Body], total_time: float, dt: float, record_interval: float,
            recorder: Recorder) -> RunSummary:
        """Run the simulation, mutating ``bodies`` in place.

        A snapshot is taken before integrating every step whose index is a
        multiple of the recording interval in steps; its timestamp is that
        step index. The recorder is not closed here.

        Args:
            bodies: Ordered body collection
            total_time: Simulated duration in seconds (<= 0 runs nothing)
            dt: Time step in seconds
            record_interval: Seconds between snapshots, >= dt
            recorder: Snapshot sink

        Returns:
            RunSummary for the finished run

        Raises:
            ConfigurationError: before the run, on invalid timing
            Exception: whatever ``recorder.add`` raises, after which the
                simulator is in the FAILED state
        """
        self.state = SimulationState.NOT_STARTED
        validate_timing(dt, record_interval, self.gravitational_constant, total_time)
        validate_bodies(bodies)

        steps = count_steps(total_time, dt)
        record_steps = count_record_steps(record_interval, dt)
        total_intervals = count_intervals(steps, record_steps)
        logger.info(
            "Simulating %d bodies: %d steps of %gs, snapshot every %d steps (%d snapshots)",
            len(bodies), steps, dt, record_steps, total_intervals
        )

        self.state = SimulationState.RUNNING
        self.step_count = 0
        self.snapshot_count = 0
        G = self.gravitational_constant

        for observer in self.observers:
            observer.on_start(steps, record_steps, total_intervals)
        try:
            for step in range(steps):
                if step % record_steps == 0:
                    recorder.add(step, bodies)
                    self.snapshot_count += 1
                    for observer in self.observers:
                        observer.on_record(step, step // record_steps + 1, total_intervals, bodies)

                self.integrator.step(bodies, dt, G)
                self.step_count += 1

                for observer in self.observers:
                    observer.on_step(step)
        except Exception:
            self.state = SimulationState.FAILED
            logger.error("Simulation failed at step %d", self.step_count)
            raise
        else:
            self.state = SimulationState.COMPLETED
        finally:
            for observer in self.observers:
                observer.close(self.state)

        logger.debug("Simulation finished after %d steps", self.step_count)
        return RunSummary(
            steps=steps,
            record_steps=record_steps,
            total_intervals=total_intervals,
            snapshots=self.snapshot_count,
            state=self.state,
        )


def run(
    bodies: List[Body],
    gravitational_constant: float,
    total_time: float,
    dt: float,
    record_interval: float,
    recorder: Recorder,
    integrator: Optional[Integrator] = None,
    observers: Optional[Iterable[SimulationObserver]] = None
) -> RunSummary:
    """Functional form of ``Simulator.run``."""
    simulator = Simulator(integrator, gravitational_constant=gravitational_constant, observers=observers)
    return simulator.run(bodies, total_time, dt, record_interval, recorder)
