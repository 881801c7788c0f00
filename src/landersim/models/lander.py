"""
Lander vehicle parameters.

Mass properties, aerodynamic reference values and engine limits for the
lander and its parachute.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .planet import MARS, Planet


@dataclass(frozen=True)
class LanderConfig:
    """
    Fixed lander parameters.

    Parameters
    ----------
    unloaded_mass : float
        Dry mass [kg]
    fuel_capacity : float
        Tank volume [l]
    fuel_density : float
        Propellant density [kg/l]
    fuel_rate_at_max_thrust : float
        Propellant consumption at full throttle [l/s]
    size : float
        Characteristic size [m]. Used as the body drag radius.
    drag_coef_lander : float
        Body drag coefficient [-]
    drag_coef_chute : float
        Parachute drag coefficient [-]
    max_parachute_drag : float
        Drag above which the parachute would tear [N]
    max_parachute_speed : float
        Speed above which deployment is unsafe inside the atmosphere [m/s]
    thrust_to_weight : float
        Full-thrust to full-mass surface weight ratio [-]

    Notes
    -----
    The parachute is five square panels of side ``2 * size``.
    """

    unloaded_mass: float = 100.0
    fuel_capacity: float = 100.0
    fuel_density: float = 1.0
    fuel_rate_at_max_thrust: float = 0.5
    size: float = 1.0
    drag_coef_lander: float = 1.0
    drag_coef_chute: float = 2.0
    max_parachute_drag: float = 20000.0
    max_parachute_speed: float = 500.0
    thrust_to_weight: float = 1.5

    @property
    def body_area(self) -> float:
        """Body drag reference area [m²]."""
        return math.pi * self.size * self.size

    @property
    def chute_area(self) -> float:
        """Parachute drag reference area [m²]."""
        return 5.0 * (2.0 * self.size) * (2.0 * self.size)

    @property
    def full_mass(self) -> float:
        """Mass with a full tank [kg]."""
        return self.unloaded_mass + self.fuel_density * self.fuel_capacity

    def mass(self, fuel: float) -> float:
        """Instantaneous mass for a remaining fuel fraction ``fuel`` [kg]."""
        return self.unloaded_mass + fuel * self.fuel_density * self.fuel_capacity

    def max_thrust(self, planet: Planet = MARS) -> float:
        """Maximum engine thrust [N]."""
        return self.thrust_to_weight * self.full_mass * planet.surface_gravity


DEFAULT_LANDER = LanderConfig()

__all__ = ["LanderConfig", "DEFAULT_LANDER"]
