"""
Main engine: thrust direction and propellant consumption.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from landersim.models.lander import DEFAULT_LANDER, LanderConfig
from landersim.models.planet import MARS, Planet
from landersim.utils.orientation import body_to_world

# Engine fires along the body +Z axis
THRUST_AXIS_BODY = np.array([0.0, 0.0, 1.0])


class Engine:
    """
    Throttleable engine fixed to the lander body.

    Parameters
    ----------
    lander : LanderConfig
        Vehicle parameters (tank size, burn rate, thrust-to-weight)
    planet : Planet
        Body whose surface gravity sizes the maximum thrust

    Attributes
    ----------
    max_thrust : float
        Thrust at full throttle [N]

    Examples
    --------
    >>> engine = Engine()
    >>> f = engine.thrust_force_world(np.zeros(3), throttle=0.5)
    >>> fuel = engine.consume(1.0, throttle=0.5, dt=0.1)
    """

    def __init__(self, lander: LanderConfig = DEFAULT_LANDER, planet: Planet = MARS) -> None:
        self.lander = lander
        self.max_thrust = lander.max_thrust(planet)

    def thrust_force_world(
        self,
        orientation: NDArray[np.float64],
        throttle: float,
    ) -> NDArray[np.float64]:
        """
        Thrust vector in world coordinates [N].

        Parameters
        ----------
        orientation : NDArray[np.float64]
            xyz Euler angles of the lander [degrees] (3,)
        throttle : float
            Throttle command. Clipped to [0, 1].
        """
        throttle = min(max(float(throttle), 0.0), 1.0)
        return body_to_world(orientation, THRUST_AXIS_BODY * (self.max_thrust * throttle))

    def consume(self, fuel: float, throttle: float, dt: float) -> float:
        """
        Remaining fuel fraction after burning at ``throttle`` for ``dt``.

        Never returns a negative value.
        """
        throttle = min(max(float(throttle), 0.0), 1.0)
        used = dt * (self.lander.fuel_rate_at_max_thrust * throttle) / self.lander.fuel_capacity
        return max(fuel - used, 0.0)
