"""Point-mass bodies and helpers for ordered body collections."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple
import numpy as np
from newtonian_bodies.physics.vector import Vector3


@dataclass
class Body:
    """Named point mass.

    ``acceleration`` is derived state: the integrator overwrites it on every
    step, and it defaults to zero when missing from initial conditions.
    """
    name: str
    mass: float
    position: Vector3 = field(default_factory=Vector3.zero)
    velocity: Vector3 = field(default_factory=Vector3.zero)
    acceleration: Vector3 = field(default_factory=Vector3.zero)

    def __post_init__(self):
        self.mass = float(self.mass)
        self.position = Vector3.coerce(self.position)
        self.velocity = Vector3.coerce(self.velocity)
        self.acceleration = Vector3.coerce(self.acceleration)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Body":
        """Build a body from an initial-conditions record.

        Args:
            data: Mapping with ``name``, ``mass``, ``position``, ``velocity``
                and an optional ``acceleration``

        Returns:
            Body instance
        """
        missing = [key for key in ("name", "mass", "position", "velocity") if key not in data]
        if missing:
            raise ValueError(f"Body record is missing field(s): {', '.join(missing)}")
        acceleration = data.get("acceleration")
        return cls(
            name=str(data["name"]),
            mass=data["mass"],
            position=Vector3.coerce(data["position"]),
            velocity=Vector3.coerce(data["velocity"]),
            acceleration=Vector3.coerce(acceleration) if acceleration is not None else Vector3.zero(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mass": self.mass,
            "position": self.position.to_dict(),
            "velocity": self.velocity.to_dict(),
            "acceleration": self.acceleration.to_dict(),
        }

    def copy(self) -> "Body":
        """Return an independent copy (vectors are not shared)."""
        return Body(
            name=self.name,
            mass=self.mass,
            position=Vector3(self.position.x, self.position.y, self.position.z),
            velocity=Vector3(self.velocity.x, self.velocity.y, self.velocity.z),
            acceleration=Vector3(self.acceleration.x, self.acceleration.y, self.acceleration.z),
        )


def validate_bodies(bodies: Sequence[Body]):
    """Check a body collection before a run.

    Raises:
        ValueError: if the collection is empty, a mass is not a positive
            finite number, or two bodies share a name
    """
    if len(bodies) == 0:
        raise ValueError("At least one body is required")
    seen = set()
    for body in bodies:
        if not (math.isfinite(body.mass) and body.mass > 0):
            raise ValueError(f"Body {body.name!r} must have a positive mass, got {body.mass}")
        if body.name in seen:
            raise ValueError(f"Duplicate body name: {body.name!r}")
        seen.add(body.name)


def snapshot_bodies(bodies: Sequence[Body]) -> List[Body]:
    """Point-in-time copy of a body collection, order preserved."""
    return [body.copy() for body in bodies]


def total_mass(bodies: Sequence[Body]) -> float:
    return float(sum(body.mass for body in bodies))


def bodies_to_arrays(bodies: Sequence[Body]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Pack body state into fresh arrays.

    Returns:
        Tuple of (positions (n, 3), velocities (n, 3), masses (n,))
    """
    n = len(bodies)
    positions = np.empty((n, 3), dtype=np.float64)
    velocities = np.empty((n, 3), dtype=np.float64)
    masses = np.empty(n, dtype=np.float64)
    for i, body in enumerate(bodies):
        positions[i] = (body.position.x, body.position.y, body.position.z)
        velocities[i] = (body.velocity.x, body.velocity.y, body.velocity.z)
        masses[i] = body.mass
    return positions, velocities, masses
