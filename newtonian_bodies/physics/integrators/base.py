"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import List
from newtonian_bodies.physics.body import Body


class Integrator(ABC):
    """Abstract interface for numerical integrators."""

    @abstractmethod
    def step(self, bodies: List[Body], dt: float, gravitational_constant: float):
        """Advance every body by one time step, in place.

        Args:
            bodies: Ordered body collection (mutated)
            dt: Time step in seconds
            gravitational_constant: Gravitational constant G
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler)."""
        pass
