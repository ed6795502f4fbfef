"""Pairwise Newtonian acceleration for a body snapshot.

Both paths read only the arrays they are given, so callers pass a copy of the
pre-step state and write the result back afterwards. There is no softening:
coincident bodies produce inf/NaN accelerations, which are returned as-is.
"""

from typing import Literal
import numpy as np

GRAVITATIONAL_CONSTANT = 6.67430e-11  # m^3 kg^-1 s^-2


class ForceCalculator:
    """Computes gravitational accelerations on every body of a snapshot."""

    def __init__(self, method: Literal["vectorized", "direct"] = "vectorized"):
        if method not in ("vectorized", "direct"):
            raise ValueError(f"Unknown force method: {method}. Use 'vectorized' or 'direct'")
        self.method = method

    def compute_accelerations(
        self,
        positions: np.ndarray,
        masses: np.ndarray,
        G: float = GRAVITATIONAL_CONSTANT,
    ) -> np.ndarray:
        """Compute the acceleration of each body due to all others.

        Args:
            positions: (n, 3) positions, pre-step snapshot
            masses: (n,) masses
            G: Gravitational constant

        Returns:
            (n, 3) accelerations
        """
        positions = np.asarray(positions, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64).reshape(-1)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (n, 3), got {positions.shape}")
        if masses.shape[0] != positions.shape[0]:
            raise ValueError("positions and masses must describe the same number of bodies")
        if self.method == "direct":
            return _accelerations_direct(positions, masses, G)
        return _accelerations_vectorized(positions, masses, G)


def compute_accelerations(positions: np.ndarray, masses: np.ndarray, G: float = GRAVITATIONAL_CONSTANT) -> np.ndarray:
    """Vectorized acceleration pass (module-level shortcut)."""
    return ForceCalculator().compute_accelerations(positions, masses, G)


def _accelerations_vectorized(positions: np.ndarray, masses: np.ndarray, G: float) -> np.ndarray:
    n = positions.shape[0]
    # r_diff[i, j] = p_j - p_i
    r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
    r_sq = np.sum(r_diff * r_diff, axis=2)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        r_cubed = r_sq * np.sqrt(r_sq)
        # Self-pairs are excluded by index; inf makes their term exactly 0.
        r_cubed[np.arange(n), np.arange(n)] = np.inf
        weights = masses[np.newaxis, :] / r_cubed
        acc = np.sum(r_diff * weights[:, :, np.newaxis], axis=1)
    return G * acc


def _accelerations_direct(positions: np.ndarray, masses: np.ndarray, G: float) -> np.ndarray:
    """Explicit double loop: a_i += (G m_i m_j / r^2) * (d / r) / m_i."""
    n = positions.shape[0]
    acc = np.zeros((n, 3), dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for i in range(n):
            m_i = masses[i]
            for j in range(n):
                if i == j:
                    continue
                d = positions[j] - positions[i]
                r = np.sqrt(np.dot(d, d))
                f = G * m_i * masses[j] / (r * r)
                acc[i] += f * d / (r * m_i)
    return acc
