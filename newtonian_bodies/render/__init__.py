"""Plotting of recorded simulation output."""

from newtonian_bodies.render.trajectory_plot import plot_trajectories, load_tracks

__all__ = ["plot_trajectories", "load_tracks"]
