"""Parquet recorder: one row per body per recorded step."""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Sequence, Union
import pyarrow as pa
import pyarrow.parquet as pq
from newtonian_bodies.io.recorder import Recorder
from newtonian_bodies.physics.body import Body

logger = logging.getLogger(__name__)

# Velocity and acceleration are not persisted.
SCHEMA = pa.schema([
    pa.field("time", pa.uint64(), nullable=False),
    pa.field("name", pa.string(), nullable=False),
    pa.field("mass", pa.float64(), nullable=False),
    pa.field("pos_x", pa.float64(), nullable=False),
    pa.field("pos_y", pa.float64(), nullable=False),
    pa.field("pos_z", pa.float64(), nullable=False),
])


# Matches the default row-group size of the Arrow Parquet writers.
DEFAULT_ROW_GROUP_SIZE = 1024 * 1024


class ParquetRecorder(Recorder):
    """Buffers snapshots and writes them to a Parquet file in large row groups.

    The file is created when the recorder is constructed and is only valid
    once ``close`` has flushed the buffer and written the footer.
    """

    def __init__(self, output_path: Union[str, Path], compression: str = "snappy",
                 row_group_size: int = DEFAULT_ROW_GROUP_SIZE):
        """Open the output file.

        Args:
            output_path: Destination ``.parquet`` file (overwritten)
            compression: Parquet codec passed to pyarrow
            row_group_size: Buffered rows that trigger a row-group write
        """
        if row_group_size < 1:
            raise ValueError(f"row_group_size must be positive, got {row_group_size}")
        self.output_path = Path(output_path)
        self.row_group_size = row_group_size
        self.rows_written = 0
        self.batches_written = 0
        self._buffer: List[pa.RecordBatch] = []
        self._buffered_rows = 0
        self._writer = pq.ParquetWriter(str(self.output_path), SCHEMA, compression=compression)
        logger.debug("Opened %s for writing", self.output_path)

    def add(self, time: int, bodies: Sequence[Body]):
        self._check_open()
        if time < 0:
            raise ValueError(f"Snapshot time must be a non-negative step index, got {time}")
        batch = snapshot_to_batch(time, bodies)
        self._buffer.append(batch)
        self._buffered_rows += batch.num_rows
        self.rows_written += batch.num_rows
        self.batches_written += 1
        if self._buffered_rows >= self.row_group_size:
            self.flush()

    def flush(self):
        """Write buffered snapshots out as row groups."""
        if not self._buffer:
            return
        table = pa.Table.from_batches(self._buffer, schema=SCHEMA)
        self._buffer = []
        self._buffered_rows = 0
        self._writer.write_table(table, row_group_size=self.row_group_size)

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self.flush()
        finally:
            self._writer.close()
        logger.info("Wrote %d rows (%d snapshots) to %s", self.rows_written, self.batches_written, self.output_path)


def snapshot_to_batch(time: int, bodies: Sequence[Body]) -> pa.RecordBatch:
    """Convert a body snapshot into a record batch with the recorder schema.

    Values are copied out of the bodies, so the batch is independent of later
    mutation.
    """
    n = len(bodies)
    arrays = [
        pa.array([int(time)] * n, type=pa.uint64()),
        pa.array([body.name for body in bodies], type=pa.string()),
        pa.array([body.mass for body in bodies], type=pa.float64()),
        pa.array([body.position.x for body in bodies], type=pa.float64()),
        pa.array([body.position.y for body in bodies], type=pa.float64()),
        pa.array([body.position.z for body in bodies], type=pa.float64()),
    ]
    return pa.RecordBatch.from_arrays(arrays, schema=SCHEMA)


def read_records(input_path: Union[str, Path]) -> pa.Table:
    """Read a recorded file back as a table (rows in file order)."""
    return pq.read_table(str(input_path))


def read_snapshots(input_path: Union[str, Path]) -> "OrderedDict[int, List[Dict]]":
    """Group recorded rows by ``time``.

    Returns:
        Ordered mapping of step index to the list of row dicts recorded at
        that step, in file order
    """
    grouped: "OrderedDict[int, List[Dict]]" = OrderedDict()
    for row in read_records(input_path).to_pylist():
        grouped.setdefault(row["time"], []).append(row)
    return grouped
