"""
Preset initial conditions for the lander simulation.

Each preset fully specifies the initial kinematic state, the time step and
the control flags of one run. Presets are immutable; initialization copies
them into fresh simulation state.

Available Scenarios
-------------------
0 : circular orbit
1 : descent from 10km
2 : elliptical orbit, thrust changes orbital plane
3 : polar launch at escape velocity (but drag prevents escape)
4 : elliptical orbit that clips the atmosphere and decays
5 : descent from 200km (edge of the exosphere)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from .lander import DEFAULT_LANDER, LanderConfig
from .planet import MARS, Planet

Vector3 = tuple[float, float, float]


class ScenarioId(IntEnum):
    """Scenario selector."""

    CIRCULAR_ORBIT = 0
    DESCENT_10KM = 1
    ELLIPTICAL_POLAR_ORBIT = 2
    POLAR_ESCAPE_LAUNCH = 3
    CLIPPING_DECAY_ORBIT = 4
    DESCENT_EXOSPHERE = 5


@dataclass(frozen=True)
class ScenarioParameters:
    """
    Immutable scenario preset.

    Attributes
    ----------
    id : ScenarioId
        Selector value
    description : str
        Human-readable summary
    position : Vector3
        Initial position, planet-centred [m]
    velocity : Vector3
        Initial velocity [m/s]
    orientation : Vector3
        Initial xyz Euler angles [degrees]
    delta_t : float
        Integration time step [s]
    autopilot_enabled : bool
        Run the descent autopilot
    stabilized_attitude : bool
        Keep the lander base pointing at the planet
    """

    id: ScenarioId
    description: str
    position: Vector3
    velocity: Vector3
    orientation: Vector3
    delta_t: float = 0.1
    autopilot_enabled: bool = False
    stabilized_attitude: bool = False

    @property
    def name(self) -> str:
        return self.id.name.lower()

    def altitude(self, planet: Planet = MARS) -> float:
        """Initial altitude above the planet's reference sphere [m]."""
        return float(np.linalg.norm(self.position)) - planet.radius

    def vectors(self) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """Fresh (position, velocity, orientation) arrays."""
        return (
            np.array(self.position, dtype=np.float64),
            np.array(self.velocity, dtype=np.float64),
            np.array(self.orientation, dtype=np.float64),
        )


def build_scenarios(
    planet: Planet = MARS,
    lander: LanderConfig = DEFAULT_LANDER,
) -> dict[ScenarioId, ScenarioParameters]:
    """
    Build the preset table for a planet and lander.

    Returns
    -------
    dict[ScenarioId, ScenarioParameters]
        One preset per ScenarioId
    """
    R = planet.radius
    r_orbit = 1.2 * R

    presets = [
        ScenarioParameters(
            id=ScenarioId.CIRCULAR_ORBIT,
            description="circular orbit",
            position=(r_orbit, 0.0, 0.0),
            velocity=(0.0, -planet.circular_speed(r_orbit), 0.0),
            orientation=(0.0, 90.0, 0.0),
        ),
        ScenarioParameters(
            id=ScenarioId.DESCENT_10KM,
            description="descent from 10km",
            position=(0.0, -(R + 10000.0), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            autopilot_enabled=True,
            stabilized_attitude=True,
        ),
        ScenarioParameters(
            id=ScenarioId.ELLIPTICAL_POLAR_ORBIT,
            description="elliptical orbit, thrust changes orbital plane",
            position=(0.0, 0.0, r_orbit),
            velocity=(3500.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
        ),
        ScenarioParameters(
            id=ScenarioId.POLAR_ESCAPE_LAUNCH,
            description="polar launch at escape velocity (but drag prevents escape)",
            position=(0.0, 0.0, R + lander.size / 2.0),
            velocity=(0.0, 0.0, 5027.0),
            orientation=(0.0, 0.0, 0.0),
        ),
        ScenarioParameters(
            id=ScenarioId.CLIPPING_DECAY_ORBIT,
            description="elliptical orbit that clips the atmosphere and decays",
            position=(0.0, 0.0, R + 100000.0),
            velocity=(4000.0, 0.0, 0.0),
            orientation=(0.0, 90.0, 0.0),
        ),
        ScenarioParameters(
            id=ScenarioId.DESCENT_EXOSPHERE,
            description=f"descent from {planet.exosphere / 1000.0:.0f}km",
            position=(0.0, -(R + planet.exosphere), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            autopilot_enabled=True,
            stabilized_attitude=True,
        ),
    ]
    return {p.id: p for p in presets}


SCENARIOS = build_scenarios()


def resolve_scenario(
    scenario: ScenarioId | int | str,
    table: dict[ScenarioId, ScenarioParameters] | None = None,
) -> ScenarioParameters:
    """
    Look up a preset by id, integer or name.

    Names are case-insensitive ScenarioId member names, e.g. ``"descent_10km"``.

    Raises
    ------
    ValueError
        If the selector does not name a known scenario
    """
    table = SCENARIOS if table is None else table

    if isinstance(scenario, str):
        key = scenario.strip().upper()
        if key not in ScenarioId.__members__:
            valid = [s.name.lower() for s in ScenarioId]
            raise ValueError(f"Unknown scenario '{scenario}'. Valid options: {valid}")
        sid = ScenarioId[key]
    else:
        if isinstance(scenario, bool) or not isinstance(scenario, (int, np.integer)):
            raise ValueError(f"Scenario must be an int, ScenarioId or name, got {scenario!r}")
        try:
            sid = ScenarioId(int(scenario))
        except ValueError:
            raise ValueError(
                f"Unknown scenario id {scenario}. Valid range: 0..{len(ScenarioId) - 1}"
            ) from None

    if sid not in table:
        raise ValueError(f"Scenario {sid.name} is not defined in this table")
    return table[sid]
