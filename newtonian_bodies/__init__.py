"""
Newtonian Bodies - point-mass gravitation with Parquet time-series output.

Features:
- Pairwise Newtonian gravity with a configurable gravitational constant
- Semi-implicit Euler time stepping
- Snapshot recording at a fixed cadence (Parquet or in-memory)
- Arithmetic-expression time literals ("60*60*24*365")
- CLI with JSON/YAML configuration and trajectory plots
"""

__version__ = "0.1.0"

from newtonian_bodies.physics.vector import Vector3
from newtonian_bodies.physics.body import Body
from newtonian_bodies.physics.force_calculator import GRAVITATIONAL_CONSTANT
from newtonian_bodies.physics.simulator import Simulator, SimulationState, ConfigurationError, run
from newtonian_bodies.io.recorder import Recorder, MemoryRecorder
from newtonian_bodies.io.parquet_recorder import ParquetRecorder

__all__ = [
    "Vector3",
    "Body",
    "GRAVITATIONAL_CONSTANT",
    "Simulator",
    "SimulationState",
    "ConfigurationError",
    "run",
    "Recorder",
    "MemoryRecorder",
    "ParquetRecorder",
]
