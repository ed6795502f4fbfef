"""I/O utilities for initial conditions and recorded output."""

from newtonian_bodies.io.recorder import Recorder, MemoryRecorder, RecorderError
from newtonian_bodies.io.parquet_recorder import ParquetRecorder, read_records, read_snapshots
from newtonian_bodies.io.state_io import load_initial_conditions, save_initial_conditions

__all__ = [
    "Recorder",
    "MemoryRecorder",
    "RecorderError",
    "ParquetRecorder",
    "read_records",
    "read_snapshots",
    "load_initial_conditions",
    "save_initial_conditions",
]
