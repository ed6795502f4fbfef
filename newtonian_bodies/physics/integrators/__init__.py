"""Numerical integrators for N-body simulations."""

from newtonian_bodies.physics.integrators.base import Integrator
from newtonian_bodies.physics.integrators.euler import EulerIntegrator

__all__ = ["Integrator", "EulerIntegrator"]
