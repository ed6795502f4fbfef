"""Configuration management."""

import json
import yaml
from typing import Any, Dict, Optional, Union
from pathlib import Path
from dataclasses import dataclass, asdict, fields, replace
from newtonian_bodies.physics.force_calculator import GRAVITATIONAL_CONSTANT
from newtonian_bodies.physics.simulator import validate_timing
from newtonian_bodies.utils.expressions import evaluate_expression

Numeric = Union[float, str]

DEFAULT_OUTPUT = "newtonian.parquet"


@dataclass
class Config:
    """Run configuration.

    Numeric fields may hold arithmetic-expression strings such as
    ``"60*60*24*365"``; ``resolved()`` turns them into floats.
    """
    # Files
    input: Optional[str] = None
    output: str = DEFAULT_OUTPUT

    # Timing (seconds)
    total_time: Numeric = "60*60*24*365"
    dt: Numeric = 0.001
    record_interval: Numeric = 1.0

    # Physics
    gravitational_constant: Numeric = GRAVITATIONAL_CONSTANT

    # Presentation
    progress: bool = True
    plot: Optional[str] = None

    def resolved(self) -> "Config":
        """Return a copy with every numeric field evaluated to a float."""
        return replace(
            self,
            total_time=evaluate_expression(self.total_time),
            dt=evaluate_expression(self.dt),
            record_interval=evaluate_expression(self.record_interval),
            gravitational_constant=evaluate_expression(self.gravitational_constant),
        )

    def validate(self) -> "Config":
        """Resolve and check timing/physics values.

        Returns:
            The resolved config

        Raises:
            ConfigurationError: if the values cannot drive a run
        """
        config = self.resolved()
        validate_timing(config.dt, config.record_interval, config.gravitational_constant, config.total_time)
        return config

    def update(self, overrides: Dict[str, Any]) -> "Config":
        """Return a copy with non-None ``overrides`` applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_config(config_path: str) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping of configuration keys")
    return Config().update(data)


def save_config(config: Config, output_path: str):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
