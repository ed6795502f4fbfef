"""Static trajectory plots of a recorded run using matplotlib."""

from pathlib import Path
from typing import Dict, Tuple, Union
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from newtonian_bodies.io.parquet_recorder import read_records

_PLANES = {
    "xy": ("pos_x", "pos_y"),
    "xz": ("pos_x", "pos_z"),
    "yz": ("pos_y", "pos_z"),
}


def load_tracks(records_path: Union[str, Path]) -> Dict[str, np.ndarray]:
    """Collect each body's recorded positions.

    Returns:
        Mapping of body name to an (n_snapshots, 3) array, in first-seen order
    """
    table = read_records(records_path)
    names = table.column("name").to_pylist()
    xyz = np.column_stack([
        table.column("pos_x").to_numpy(),
        table.column("pos_y").to_numpy(),
        table.column("pos_z").to_numpy(),
    ]) if table.num_rows else np.zeros((0, 3))

    tracks: Dict[str, list] = {}
    for name, row in zip(names, xyz):
        tracks.setdefault(name, []).append(row)
    return {name: np.asarray(rows) for name, rows in tracks.items()}


def plot_trajectories(
    records_path: Union[str, Path],
    output_path: Union[str, Path],
    plane: str = "xy",
    figsize: Tuple[int, int] = (8, 8),
    dpi: int = 100
) -> Figure:
    """Draw every body's track from a recorded file and save the image.

    Args:
        records_path: Parquet file written by ``ParquetRecorder``
        output_path: Image path; format inferred from the suffix
        plane: Projection plane, one of 'xy', 'xz', 'yz'
        figsize: Figure size (width, height)
        dpi: Dots per inch

    Returns:
        The matplotlib figure (already saved and closed)
    """
    if plane not in _PLANES:
        raise ValueError(f"Unknown plane: {plane}. Available: {list(_PLANES.keys())}")
    axis_index = {"pos_x": 0, "pos_y": 1, "pos_z": 2}
    col_a, col_b = (axis_index[c] for c in _PLANES[plane])

    tracks = load_tracks(records_path)

    fig, ax = plt.subplots(figsize=figsize, dpi=dpi)
    ax.set_aspect('equal')
    ax.set_xlabel(plane[0].upper() + ' (m)')
    ax.set_ylabel(plane[1].upper() + ' (m)')
    ax.set_title(f'Trajectories ({plane})')
    ax.grid(True, alpha=0.3)

    for name, positions in tracks.items():
        line, = ax.plot(positions[:, col_a], positions[:, col_b], linewidth=1.0, label=name)
        ax.scatter(positions[-1:, col_a], positions[-1:, col_b], s=20, color=line.get_color())

    if tracks:
        ax.legend(loc='best', fontsize='small')

    fig.savefig(str(output_path), bbox_inches='tight')
    plt.close(fig)
    return fig
