"""Loading and saving initial conditions."""

import json
from pathlib import Path
from typing import List, Sequence, Union
import yaml
from newtonian_bodies.physics.body import Body


def load_initial_conditions(input_path: Union[str, Path]) -> List[Body]:
    """Load an ordered body list from file.

    Args:
        input_path: ``.json`` (default for unknown suffixes) or ``.yaml``/``.yml``

    Returns:
        Bodies in file order, acceleration defaulting to zero
    """
    input_path = Path(input_path)

    with open(input_path, 'r') as f:
        if input_path.suffix in ('.yaml', '.yml'):
            records = yaml.safe_load(f)
        else:
            records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"{input_path}: expected a list of body records, got {type(records).__name__}")

    bodies = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"{input_path}: record {index} is not an object")
        try:
            bodies.append(Body.from_dict(record))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{input_path}: invalid body record {index}: {exc}") from exc
    return bodies


def save_initial_conditions(bodies: Sequence[Body], output_path: Union[str, Path]):
    """Write bodies in the same record format ``load_initial_conditions`` reads.

    Args:
        bodies: Bodies to save
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    records = [body.to_dict() for body in bodies]

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(records, f, default_flow_style=False, sort_keys=False)
        elif output_path.suffix == '.json':
            json.dump(records, f, indent=2)
        else:
            raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .json or .yaml")
