"""Tests for the simulation driver."""

import io
import numpy as np
import pytest
from newtonian_bodies.io.recorder import MemoryRecorder, Recorder
from newtonian_bodies.physics.body import Body, total_mass
from newtonian_bodies.physics.integrators.euler import EulerIntegrator
from newtonian_bodies.physics.simulator import (
    ConfigurationError,
    SimulationObserver,
    SimulationState,
    Simulator,
    count_intervals,
    count_record_steps,
    count_steps,
    run,
)
from newtonian_bodies.physics.vector import Vector3
from newtonian_bodies.utils.progress import ProgressObserver

G = 6.67430e-11


def _earth_moon():
    return [
        Body("Earth", 5.972e24, Vector3(0.0, 0.0, 0.0), Vector3(0.0, -12.6, 0.0)),
        Body("Moon", 7.348e22, Vector3(3.844e8, 0.0, 0.0), Vector3(0.0, 1022.0, 0.0)),
    ]


class CountingIntegrator(EulerIntegrator):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def step(self, bodies, dt, gravitational_constant):
        self.calls += 1
        super().step(bodies, dt, gravitational_constant)


class FailingRecorder(Recorder):
    """Accepts ``fail_after`` snapshots, then raises."""

    def __init__(self, fail_after: int):
        self.fail_after = fail_after
        self.calls = 0

    def add(self, time, bodies):
        self.calls += 1
        if self.calls > self.fail_after:
            raise OSError("disk full")


def test_step_arithmetic():
    """Test step count helpers."""
    assert count_steps(1.0, 0.1) == 10
    assert count_steps(1.05, 0.1) == 11
    assert count_steps(0.0, 0.1) == 0
    assert count_steps(-3.0, 0.1) == 0
    assert count_record_steps(1.0, 0.1) == 10
    assert count_record_steps(1.0, 0.001) == 1000
    assert count_record_steps(0.25, 0.1) == 3
    assert count_intervals(10, 10) == 1
    assert count_intervals(11, 10) == 2
    assert count_intervals(0, 10) == 0


def test_recording_cadence_single_interval():
    """dt=0.1, interval=1, total=1: ten steps, one snapshot at step 0."""
    recorder = MemoryRecorder()
    integrator = CountingIntegrator()

    summary = run(_earth_moon(), G, total_time=1.0, dt=0.1, record_interval=1.0,
                  recorder=recorder, integrator=integrator)

    assert summary.steps == 10
    assert summary.record_steps == 10
    assert recorder.times == [0]
    assert integrator.calls == 10
    assert summary.state == SimulationState.COMPLETED


def test_recording_cadence_fine_step():
    """dt=0.001, interval=1, total=1: a thousand steps, one snapshot."""
    recorder = MemoryRecorder()

    summary = run(_earth_moon(), G, total_time=1.0, dt=0.001, record_interval=1.0, recorder=recorder)

    assert summary.steps == 1000
    assert summary.record_steps == 1000
    assert recorder.times == [0]
    assert summary.snapshots == 1


def test_recording_boundaries_are_step_indices():
    """Snapshots land on multiples of record_steps and carry the step index."""
    recorder = MemoryRecorder()

    summary = run(_earth_moon(), G, total_time=10.0, dt=1.0, record_interval=3.0, recorder=recorder)

    assert summary.steps == 10
    assert recorder.times == [0, 3, 6, 9]
    assert summary.total_intervals == 4


def test_snapshot_is_taken_before_integrating():
    """The step-0 snapshot holds the initial conditions."""
    bodies = _earth_moon()
    initial = [body.copy() for body in bodies]
    recorder = MemoryRecorder()

    run(bodies, G, total_time=5.0, dt=1.0, record_interval=1.0, recorder=recorder)

    _, first = recorder.snapshots[0]
    assert first == initial
    # Later snapshots differ and are not aliases of the live bodies.
    _, last = recorder.snapshots[-1]
    assert last[1].position != initial[1].position
    assert last[1].position != bodies[1].position


@pytest.mark.parametrize("total_time", [0.0, -5.0, -1e-9])
def test_non_positive_duration_is_noop(total_time):
    """No snapshots, no integration, bodies untouched."""
    bodies = _earth_moon()
    before = [body.to_dict() for body in bodies]
    recorder = MemoryRecorder()
    integrator = CountingIntegrator()

    summary = run(bodies, G, total_time=total_time, dt=0.1, record_interval=1.0,
                  recorder=recorder, integrator=integrator)

    assert len(recorder) == 0
    assert integrator.calls == 0
    assert [body.to_dict() for body in bodies] == before
    assert summary.steps == 0
    assert summary.state == SimulationState.COMPLETED


def test_single_body_stability():
    """A lone body has zero acceleration and moves along its velocity."""
    bodies = [Body("Solo", 1.0e30, Vector3(0.0, 0.0, 0.0), Vector3(1.0, 2.0, 3.0))]
    recorder = MemoryRecorder()

    run(bodies, G, total_time=5.0, dt=0.5, record_interval=0.5, recorder=recorder)

    assert recorder.times == list(range(10))
    for time, snapshot in recorder.snapshots:
        body = snapshot[0]
        assert body.acceleration == Vector3.zero()
        assert np.allclose(body.position.to_array(), np.array([1.0, 2.0, 3.0]) * time * 0.5)


def test_stationary_single_body_stays_put():
    """Zero velocity, zero force: position is fixed."""
    bodies = [Body("Rock", 1.0, Vector3(7.0, 8.0, 9.0))]
    recorder = MemoryRecorder()

    run(bodies, G, total_time=3.0, dt=1.0, record_interval=1.0, recorder=recorder)

    for _, snapshot in recorder.snapshots:
        assert snapshot[0].position == Vector3(7.0, 8.0, 9.0)
    assert bodies[0].position == Vector3(7.0, 8.0, 9.0)


def test_mass_conservation():
    """Total mass is identical in every snapshot."""
    bodies = _earth_moon()
    initial_mass = total_mass(bodies)
    recorder = MemoryRecorder()

    run(bodies, G, total_time=3600.0, dt=60.0, record_interval=600.0, recorder=recorder)

    assert len(recorder) == 6
    for _, snapshot in recorder.snapshots:
        assert total_mass(snapshot) == initial_mass


def test_recorder_failure_aborts_run():
    """The first recorder error propagates and stops integration."""
    recorder = FailingRecorder(fail_after=1)
    integrator = CountingIntegrator()
    sim = Simulator(integrator, gravitational_constant=G)

    with pytest.raises(OSError, match="disk full"):
        sim.run(_earth_moon(), total_time=10.0, dt=1.0, record_interval=2.0, recorder=recorder)

    assert sim.state == SimulationState.FAILED
    # Snapshot at step 0 succeeded, steps 0-1 ran, snapshot at step 2 failed.
    assert recorder.calls == 2
    assert integrator.calls == 2


def test_recorder_failure_on_first_snapshot():
    """Failing immediately means no integration at all."""
    bodies = _earth_moon()
    before = [body.to_dict() for body in bodies]
    integrator = CountingIntegrator()

    with pytest.raises(OSError):
        run(bodies, G, 10.0, 1.0, 1.0, FailingRecorder(fail_after=0), integrator=integrator)

    assert integrator.calls == 0
    assert [body.to_dict() for body in bodies] == before


@pytest.mark.parametrize("dt, record_interval, gravitational_constant", [
    (0.0, 1.0, G),
    (-0.1, 1.0, G),
    (0.1, 0.0, G),
    (0.1, -1.0, G),
    (0.1, 0.05, G),
    (0.1, 1.0, 0.0),
    (float("nan"), 1.0, G),
    (0.1, float("inf"), G),
])
def test_invalid_configuration_is_rejected(dt, record_interval, gravitational_constant):
    """Bad timing fails fast, before touching the recorder."""
    recorder = MemoryRecorder()

    with pytest.raises(ConfigurationError):
        run(_earth_moon(), gravitational_constant, 1.0, dt, record_interval, recorder)

    assert len(recorder) == 0


def test_record_interval_equal_to_dt():
    """record_interval == dt records every step."""
    recorder = MemoryRecorder()
    run(_earth_moon(), G, total_time=4.0, dt=1.0, record_interval=1.0, recorder=recorder)
    assert recorder.times == [0, 1, 2, 3]


def test_configurable_gravitational_constant():
    """G is threaded through to the force calculation."""
    weak = _earth_moon()
    strong = _earth_moon()

    run(weak, G, 10.0, 1.0, 10.0, MemoryRecorder())
    run(strong, 10 * G, 10.0, 1.0, 10.0, MemoryRecorder())

    assert np.allclose(strong[0].acceleration.to_array(), 10 * weak[0].acceleration.to_array(), rtol=1e-6)


def test_non_finite_values_reach_recorder():
    """Coincident bodies poison later snapshots instead of being clamped."""
    bodies = [
        Body("A", 1.0e3, Vector3(1.0, 2.0, 3.0)),
        Body("B", 1.0e3, Vector3(1.0, 2.0, 3.0)),
    ]
    recorder = MemoryRecorder()

    run(bodies, G, total_time=3.0, dt=1.0, record_interval=1.0, recorder=recorder)

    _, first = recorder.snapshots[0]
    assert all(body.position.is_finite() for body in first)
    _, second = recorder.snapshots[1]
    assert not any(body.position.is_finite() for body in second)


class RecordingObserver(SimulationObserver):
    def __init__(self):
        self.started = None
        self.records = []
        self.steps = 0
        self.final_state = None

    def on_start(self, steps, record_steps, total_intervals):
        self.started = (steps, record_steps, total_intervals)

    def on_record(self, step, interval, total_intervals, bodies):
        self.records.append((step, interval, total_intervals))

    def on_step(self, step):
        self.steps += 1

    def close(self, state):
        self.final_state = state


def test_observers_do_not_change_results():
    """Observers see every boundary and leave numbers untouched."""
    observed = _earth_moon()
    plain = _earth_moon()
    observer = RecordingObserver()

    run(observed, G, 100.0, 1.0, 25.0, MemoryRecorder(), observers=[observer])
    run(plain, G, 100.0, 1.0, 25.0, MemoryRecorder())

    assert observer.started == (100, 25, 4)
    assert observer.records == [(0, 1, 4), (25, 2, 4), (50, 3, 4), (75, 4, 4)]
    assert observer.steps == 100
    assert observer.final_state == SimulationState.COMPLETED
    assert [body.to_dict() for body in observed] == [body.to_dict() for body in plain]


def test_progress_observer_output():
    """The progress bar reports intervals and finishes cleanly."""
    stream = io.StringIO()
    observer = ProgressObserver(file=stream)

    run(_earth_moon(), G, 20.0, 1.0, 10.0, MemoryRecorder(), observers=[observer])

    output = stream.getvalue()
    assert "Interval 1/2" in output
    assert "Simulation complete!" in output


def test_simulator_state_machine():
    """NOT_STARTED before running, COMPLETED after."""
    sim = Simulator(gravitational_constant=G)
    assert sim.state == SimulationState.NOT_STARTED

    summary = sim.run(_earth_moon(), 2.0, 1.0, 1.0, MemoryRecorder())

    assert sim.state == SimulationState.COMPLETED
    assert sim.step_count == 2
    assert summary.snapshots == 2


def test_rejected_configuration_resets_state():
    """A reused simulator does not report the previous run's state."""
    sim = Simulator(gravitational_constant=G)
    sim.run(_earth_moon(), 2.0, 1.0, 1.0, MemoryRecorder())
    assert sim.state == SimulationState.COMPLETED

    with pytest.raises(ConfigurationError):
        sim.run(_earth_moon(), 2.0, 0.0, 1.0, MemoryRecorder())

    assert sim.state == SimulationState.NOT_STARTED
