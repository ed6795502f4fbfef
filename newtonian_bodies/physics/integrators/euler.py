"""Semi-implicit Euler integrator (O(h) accuracy)."""

from typing import List, Optional
import numpy as np
from newtonian_bodies.physics.body import Body
from newtonian_bodies.physics.force_calculator import ForceCalculator, GRAVITATIONAL_CONSTANT
from newtonian_bodies.physics.integrators.base import Integrator
from newtonian_bodies.physics.vector import Vector3


class EulerIntegrator(Integrator):
    """Euler method: a from the pre-step state, then v += a*dt, then r += v*dt.

    Each pass runs over all bodies before the next one starts. Positions use
    the freshly updated velocities.
    """

    def __init__(self, force_calculator: Optional[ForceCalculator] = None):
        self.force_calculator = force_calculator or ForceCalculator()

    @property
    def name(self) -> str:
        return "euler"

    @property
    def order(self) -> int:
        return 1

    def step(self, bodies: List[Body], dt: float, gravitational_constant: float = GRAVITATIONAL_CONSTANT):
        """Euler step over the whole collection.

        Args:
            bodies: Ordered body collection (mutated in place)
            dt: Time step
            gravitational_constant: Gravitational constant G
        """
        self.update_accelerations(bodies, gravitational_constant)
        self.update_velocities(bodies, dt)
        self.update_positions(bodies, dt)

    def update_accelerations(self, bodies: List[Body], gravitational_constant: float):
        """Overwrite each body's acceleration from a snapshot of all positions."""
        positions = np.array([tuple(body.position) for body in bodies], dtype=np.float64).reshape(-1, 3)
        masses = np.array([body.mass for body in bodies], dtype=np.float64)
        accelerations = self.force_calculator.compute_accelerations(positions, masses, gravitational_constant)
        for body, acc in zip(bodies, accelerations):
            body.acceleration = Vector3.from_array(acc)

    @staticmethod
    def update_velocities(bodies: List[Body], dt: float):
        for body in bodies:
            body.velocity = body.velocity + body.acceleration * dt

    @staticmethod
    def update_positions(bodies: List[Body], dt: float):
        for body in bodies:
            body.position = body.position + body.velocity * dt
