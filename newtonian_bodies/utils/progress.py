"""Terminal progress display for simulation runs."""

import sys
from typing import List, Optional
from tqdm import tqdm
from newtonian_bodies.physics.body import Body
from newtonian_bodies.physics.simulator import SimulationObserver, SimulationState


class ProgressObserver(SimulationObserver):
    """Progress bar that restarts at every recording interval.

    The bar length is one interval in steps; its description shows
    ``Interval i/N``.
    """

    def __init__(self, file=None, disable: bool = False):
        self.file = file if file is not None else sys.stderr
        self.disable = disable
        self._bar: Optional[tqdm] = None
        self._record_steps = 0

    def on_start(self, steps: int, record_steps: int, total_intervals: int):
        self._record_steps = min(record_steps, steps) if steps > 0 else 0
        self._bar = tqdm(
            total=self._record_steps,
            unit="step",
            file=self.file,
            disable=self.disable,
            dynamic_ncols=True,
            leave=True,
        )

    def on_record(self, step: int, interval: int, total_intervals: int, bodies: List[Body]):
        if self._bar is None:
            return
        self._bar.reset(total=self._record_steps)
        self._bar.set_description(f"Interval {interval}/{total_intervals}")

    def on_step(self, step: int):
        if self._bar is not None:
            self._bar.update(1)

    def close(self, state: SimulationState):
        if self._bar is None:
            return
        if state == SimulationState.COMPLETED:
            self._bar.set_description("Simulation complete!")
        self._bar.close()
        self._bar = None
