"""Recorder interface for snapshot sinks."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple
from newtonian_bodies.physics.body import Body, snapshot_bodies


class RecorderError(RuntimeError):
    """Raised when a recorder is used outside its lifecycle."""


class Recorder(ABC):
    """Sink that receives one body snapshot per recording boundary.

    ``add`` must treat ``bodies`` as a point-in-time view: the simulator keeps
    mutating the same objects after the call returns, so anything retained has
    to be copied. Closing is the caller's job, not the simulator's.
    """

    closed: bool = False

    @abstractmethod
    def add(self, time: int, bodies: Sequence[Body]):
        """Record the state of ``bodies`` at step index ``time``.

        Args:
            time: Integer step index of the snapshot
            bodies: Ordered body collection (do not keep a reference)
        """
        pass

    def close(self):
        """Flush and release resources. Safe to call twice."""
        self.closed = True

    def _check_open(self):
        if self.closed:
            raise RecorderError(f"{type(self).__name__} is closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MemoryRecorder(Recorder):
    """Keeps copied snapshots in memory as ``(time, bodies)`` pairs."""

    def __init__(self):
        self.snapshots: List[Tuple[int, List[Body]]] = []

    def add(self, time: int, bodies: Sequence[Body]):
        self._check_open()
        self.snapshots.append((int(time), snapshot_bodies(bodies)))

    @property
    def times(self) -> List[int]:
        return [time for time, _ in self.snapshots]

    def __len__(self):
        return len(self.snapshots)
