"""
Physical models for the lander simulation.

Available Models
----------------
Planet : Spherical body with gravity and exponential atmosphere
LanderConfig : Lander mass, aerodynamic and engine parameters
ScenarioParameters : Immutable initial-condition presets
"""

from .lander import DEFAULT_LANDER, LanderConfig
from .planet import GRAVITY, MARS, Planet
from .scenarios import (
    SCENARIOS,
    ScenarioId,
    ScenarioParameters,
    build_scenarios,
    resolve_scenario,
)

__all__ = [
    "GRAVITY",
    "Planet",
    "MARS",
    "LanderConfig",
    "DEFAULT_LANDER",
    "ScenarioId",
    "ScenarioParameters",
    "SCENARIOS",
    "build_scenarios",
    "resolve_scenario",
]
