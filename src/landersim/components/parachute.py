"""
Parachute deployment envelope.

Decides whether opening the canopy under the current flight conditions
would be safe. The autopilot consults this oracle before moving the
parachute from NOT_DEPLOYED to DEPLOYED.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from landersim.dynamics.forces import ParachuteDrag
from landersim.models.lander import DEFAULT_LANDER, LanderConfig

if TYPE_CHECKING:
    from landersim.core.simulation import Simulation


class ParachuteEnvelope:
    """
    Speed and load limits for parachute deployment.

    Deployment is unsafe when EITHER condition holds:
    - canopy drag at the current speed would exceed ``max_parachute_drag``
    - speed exceeds ``max_parachute_speed`` while inside the atmosphere

    Parameters
    ----------
    lander : LanderConfig
        Supplies canopy drag coefficient, area and limits

    Examples
    --------
    >>> envelope = ParachuteEnvelope()
    >>> envelope(sim)
    True
    """

    def __init__(self, lander: LanderConfig = DEFAULT_LANDER) -> None:
        self.lander = lander
        self.drag = ParachuteDrag(Cd=lander.drag_coef_chute, area=lander.chute_area)

    def __call__(self, sim: Simulation) -> bool:
        position = sim.state.position
        speed = float(np.linalg.norm(sim.state.velocity))
        rho = sim.density_model(position)
        altitude = sim.planet.altitude(position)

        if self.drag.magnitude(speed, rho) > self.lander.max_parachute_drag:
            return False
        if speed > self.lander.max_parachute_speed and altitude < sim.planet.exosphere:
            return False
        return True
