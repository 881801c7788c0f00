# src/landersim/utils/io.py
import json
import pandas as pd
from pathlib import Path
from typing import List, Dict, Any

CONFIG_KEYS = {"scenario", "planet", "lander", "duration", "name", "output_dir"}


def save_simulation_history(history: List[Dict[str, Any]], filepath: str) -> Path:
    """
    Saves a list of state dictionaries to a CSV file.

    Vector entries (position, velocity, orientation) are expanded into
    ``<key>_x``, ``<key>_y``, ``<key>_z`` columns.

    Args:
        history: List of dicts as returned by Simulation.snapshot()
        filepath: Destination path (e.g., 'results/run1.csv')

    Returns:
        Path of the written file.
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    # Ensure the directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    rows = []
    for record in history:
        row: Dict[str, Any] = {}
        for key, val in record.items():
            if hasattr(val, "__len__") and not isinstance(val, str):
                for axis, component in zip("xyz", val):
                    row[f"{key}_{axis}"] = float(component)
            else:
                row[key] = val
        rows.append(row)

    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)
    print(f"Simulation results saved to {path.absolute()}")
    return path


def load_simulation_history(filepath: str) -> pd.DataFrame:
    """Load a history CSV written by save_simulation_history()."""
    return pd.read_csv(filepath)


def load_simulation_config(filepath: str) -> Dict[str, Any]:
    """
    Load simulation settings from a JSON file.

    Recognised keys: ``scenario`` (id or name), ``planet`` and ``lander``
    (keyword overrides for Planet / LanderConfig), ``duration`` [s],
    ``name`` and ``output_dir`` for logging.

    Raises:
        ValueError: if the file holds unknown keys or is not a JSON object.
    """
    path = Path(filepath)
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    unknown = set(config) - CONFIG_KEYS
    if unknown:
        raise ValueError(
            f"Unknown config keys: {sorted(unknown)}. Valid options: {sorted(CONFIG_KEYS)}"
        )
    return config
