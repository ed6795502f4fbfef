"""Three-component vector used for body state."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Union
import numpy as np


@dataclass
class Vector3:
    """Cartesian 3-vector with componentwise arithmetic.

    Components are stored as Python floats (float64). Finiteness is not
    checked: infinities and NaNs flow through arithmetic unchanged.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        self.x = float(self.x)
        self.y = float(self.y)
        self.z = float(self.z)

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Vector3":
        """Build a vector from a length-3 array-like."""
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}")
        return cls(arr[0], arr[1], arr[2])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vector3":
        """Build a vector from an ``{x, y, z}`` mapping."""
        try:
            return cls(data["x"], data["y"], data["z"])
        except KeyError as exc:
            raise ValueError(f"Vector is missing component {exc.args[0]!r}") from exc

    @classmethod
    def coerce(cls, value: Union["Vector3", Dict[str, Any], Iterable[float]]) -> "Vector3":
        """Accept a Vector3, an ``{x, y, z}`` mapping or a 3-sequence."""
        if isinstance(value, Vector3):
            return cls(value.x, value.y, value.z)
        if isinstance(value, dict):
            return cls.from_dict(value)
        return cls.from_array(list(value))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def norm(self) -> float:
        """Euclidean magnitude."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z))

    def __add__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector3":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
