"""
Force models acting on the lander.

Each force model is a callable object returning a force vector in the
planet-centred world frame. Forces act at the centre of mass.

Physical units:
- Forces: Newtons [N]
- Velocities: meters per second [m/s]
- Areas: square meters [m²]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations
import numpy as np
from numpy.typing import NDArray

from landersim.models.planet import Planet

# Minimum velocity magnitude for drag calculations
EPSILON_VELOCITY = 1e-12


class Gravity:
    """
    Inverse-square gravitational attraction toward the planet centre.

    Force: F = -(G·M·m / |r|²) · r̂

    Parameters
    ----------
    planet : Planet
        Attracting body

    Examples
    --------
    >>> gravity = Gravity(MARS)
    >>> f = gravity(position, mass=200.0)
    """
    def __init__(self, planet: Planet) -> None:
        self.planet = planet

    def __call__(self, position: NDArray[np.float64], mass: float) -> NDArray[np.float64]:
        r2 = float(np.dot(position, position))
        r_hat = position / np.sqrt(r2)
        return -(self.planet.mu * mass / r2) * r_hat


class Drag:
    """
    Quadratic aerodynamic drag opposing the velocity.

    F = -0.5 * ρ * Cd * A * |v|² * v̂

    Parameters
    ----------
    Cd : float
        Drag coefficient [-]
    area : float
        Reference area [m²]

    Notes
    -----
    At zero velocity the direction term is the zero vector, so the
    force is zero rather than undefined.
    """
    def __init__(self, Cd: float, area: float) -> None:
        if Cd < 0:
            raise ValueError(f"Drag coefficient must be non-negative, got {Cd}")
        if area < 0:
            raise ValueError(f"Reference area must be non-negative, got {area}")
        self.Cd = float(Cd)
        self.area = float(area)

    def __call__(self, velocity: NDArray[np.float64], rho: float) -> NDArray[np.float64]:
        speed = float(np.linalg.norm(velocity))
        if speed < EPSILON_VELOCITY:
            return np.zeros(3, dtype=np.float64)
        return -0.5 * rho * self.Cd * self.area * speed * speed * (velocity / speed)

    def magnitude(self, speed: float, rho: float) -> float:
        """Drag magnitude at a given speed [N]."""
        return 0.5 * rho * self.Cd * self.area * speed * speed


class ParachuteDrag(Drag):
    """
    Parachute drag, applied only while the canopy is deployed.

    Parameters
    ----------
    Cd : float
        Canopy drag coefficient [-]
    area : float
        Canopy reference area [m²]

    Examples
    --------
    >>> chute = ParachuteDrag(Cd=2.0, area=20.0)
    >>> f = chute(velocity, rho, deployed=True)
    """
    def __call__(
        self,
        velocity: NDArray[np.float64],
        rho: float,
        deployed: bool = True,
    ) -> NDArray[np.float64]:
        if not deployed:
            return np.zeros(3, dtype=np.float64)
        return super().__call__(velocity, rho)
