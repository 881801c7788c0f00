"""Utility functions for landersim simulations."""

from .io import load_simulation_config, load_simulation_history, save_simulation_history
from .orientation import body_to_world, orientation_from_direction, rotation_from_euler
from .validation import (
    validate_positive,
    validate_timestep,
    validate_vector3,
)

__all__ = [
    "save_simulation_history",
    "load_simulation_history",
    "load_simulation_config",
    "body_to_world",
    "orientation_from_direction",
    "rotation_from_euler",
    "validate_positive",
    "validate_vector3",
    "validate_timestep",
]
