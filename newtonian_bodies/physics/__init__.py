"""Physics engine for point-mass gravitation."""

from newtonian_bodies.physics.vector import Vector3
from newtonian_bodies.physics.body import Body
from newtonian_bodies.physics.force_calculator import ForceCalculator, GRAVITATIONAL_CONSTANT
from newtonian_bodies.physics.simulator import Simulator, SimulationState, ConfigurationError, run

__all__ = [
    "Vector3",
    "Body",
    "ForceCalculator",
    "GRAVITATIONAL_CONSTANT",
    "Simulator",
    "SimulationState",
    "ConfigurationError",
    "run",
]
