"""Utility functions for configuration and run presentation."""

from newtonian_bodies.utils.config import load_config, save_config, Config
from newtonian_bodies.utils.expressions import evaluate_expression, ExpressionError
from newtonian_bodies.utils.progress import ProgressObserver

__all__ = ["load_config", "save_config", "Config", "evaluate_expression", "ExpressionError", "ProgressObserver"]
