"""
Planetary body model: gravity and atmosphere.

Physical units:
- Mass: kilograms [kg]
- Lengths and altitudes: meters [m]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Universal gravitational constant [m³/(kg·s²)]
GRAVITY = 6.673e-11


@dataclass(frozen=True)
class Planet:
    """
    Spherical planet with an exponential atmosphere.

    Parameters
    ----------
    name : str
        Body name
    mass : float
        Planet mass [kg]
    radius : float
        Mean radius [m]. Altitude is measured from this sphere.
    exosphere : float
        Altitude of the outer atmosphere boundary [m]. Density is zero above it.
    surface_density : float
        Atmospheric density at zero altitude [kg/m³]
    scale_height : float
        Exponential density scale height [m]

    Examples
    --------
    >>> MARS.altitude(np.array([0.0, 0.0, MARS.radius + 1000.0]))
    1000.0
    """

    name: str
    mass: float
    radius: float
    exosphere: float
    surface_density: float
    scale_height: float

    @property
    def mu(self) -> float:
        """Gravitational parameter G·M [m³/s²]."""
        return GRAVITY * self.mass

    @property
    def surface_gravity(self) -> float:
        """Gravitational acceleration at zero altitude [m/s²]."""
        return self.mu / (self.radius * self.radius)

    def altitude(self, position: NDArray[np.float64]) -> float:
        """Height above the reference sphere [m]."""
        return float(np.linalg.norm(position)) - self.radius

    def circular_speed(self, r: float) -> float:
        """Speed of a circular orbit of radius ``r`` [m/s]."""
        return math.sqrt(self.mu / r)

    def atmospheric_density(self, position: NDArray[np.float64]) -> float:
        """
        Atmospheric density at a planet-centred position.

        Returns zero below the surface and above the exosphere, otherwise
        ``surface_density * exp(-h / scale_height)``.
        """
        alt = self.altitude(position)
        if alt > self.exosphere or alt < 0.0:
            return 0.0
        return self.surface_density * math.exp(-alt / self.scale_height)


MARS = Planet(
    name="Mars",
    mass=6.42e23,
    radius=3386000.0,
    exosphere=200000.0,
    surface_density=0.017,
    scale_height=11000.0,
)

__all__ = ["GRAVITY", "Planet", "MARS"]
