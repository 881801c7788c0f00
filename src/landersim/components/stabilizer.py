"""
Three-axis attitude stabilization.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from landersim.utils.orientation import orientation_from_direction

if TYPE_CHECKING:
    from landersim.core.simulation import Simulation


def attitude_stabilization(sim: Simulation) -> None:
    """
    Overwrite the lander orientation so its base points at the planet centre.

    The body +Z axis (engine thrust) is aligned with the outward radial
    direction, which puts the heat-shield base radially inward.
    """
    sim.state.orientation = orientation_from_direction(sim.state.position)
