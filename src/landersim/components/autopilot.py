"""
Descent-rate autopilot with engagement latch and parachute logic.

Manages:
- Parachute deployment below an altitude derived from the starting altitude
- One-way engagement (DISENGAGED → ENGAGED) at half the starting altitude
- Proportional throttle law tracking a descent rate that shrinks with altitude
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from landersim.utils.validation import validate_positive

if TYPE_CHECKING:
    from landersim.core.simulation import Simulation

# Controller gain [-]
KP = 0.05
# Descent rate targeted at touchdown [m/s]
TOUCHDOWN_RATE = 0.5
# Offset of the altitude-rate gain [m/s per unit Kp⁻¹]
KH_OFFSET = 0.7
# Engagement altitude as a fraction of the starting altitude [-]
ENGAGE_FRACTION = 0.5
# Reference descent the deploy-altitude model was fitted to [m]
CHUTE_REFERENCE_ALTITUDE = 10000.0
# Slope of the linear deploy-altitude model [-]
CHUTE_ALTITUDE_SLOPE = 1.943


def engagement_altitude(initial_altitude: float) -> float:
    """Altitude below which the throttle law takes over [m]."""
    return initial_altitude * ENGAGE_FRACTION


def parachute_altitude(initial_altitude: float) -> float:
    """
    Altitude below which the parachute may be deployed [m].

    Notes
    -----
    For ``initial_altitude < 10000`` the result lies above the engagement
    altitude, so the parachute can open before the autopilot engages.
    """
    return (
        engagement_altitude(initial_altitude)
        - (initial_altitude - CHUTE_REFERENCE_ALTITUDE) / CHUTE_ALTITUDE_SLOPE
    )


def throttle_command(power: float, weight_ratio: float) -> float:
    """
    Map a weight-relative power demand onto a throttle setting in [0, 1].

    Parameters
    ----------
    power : float
        Controller output; 0 means "cancel weight exactly"
    weight_ratio : float
        Gravitational force over maximum thrust [-]

    Returns
    -------
    float
        0 when ``power <= -weight_ratio``, ``weight_ratio + power`` inside
        ``(-weight_ratio, 1 - weight_ratio)``, otherwise 1.
    """
    if power <= -weight_ratio:
        return 0.0
    if power < 1.0 - weight_ratio:
        return weight_ratio + power
    return 1.0


class DescentAutopilot:
    """
    Automatic descent-rate controller.

    Called by the integrator after each step when the autopilot is enabled.
    Reads the lander state and writes ``sim.throttle`` and the parachute
    status on ``sim.flags``.

    Parameters
    ----------
    Kp : float
        Proportional gain [-]. Default 0.05

    Notes
    -----
    **Throttle Law**

    With ``h`` the altitude and ``v_r`` the radial velocity::

        Kh = -(0.7 / Kp + 0.5 + vel_engaged) / alt_engage
        e  = -(0.5 + Kh * h + v_r)
        P  = Kp * e

    The target descent rate falls linearly from roughly the engagement speed
    at ``alt_engage`` to 0.5 m/s at the surface. ``P`` is mapped onto the
    throttle by throttle_command().

    The law is first applied on the call after engagement; the engagement
    call itself only latches ``vel_engaged``.
    """

    def __init__(self, Kp: float = KP) -> None:
        validate_positive(Kp, "Kp")
        self.Kp = float(Kp)

    def update(self, sim: Simulation, g_force: float, mass: float) -> None:
        """
        Run one autopilot cycle.

        Parameters
        ----------
        sim : Simulation
            Simulation context (state, flags, memory, throttle)
        g_force : float
            Magnitude of the gravitational force this tick [N]
        mass : float
            Lander mass this tick [kg]

        Raises
        ------
        ValueError
            If the recorded initial altitude is missing or not positive
        """
        memory = sim.autopilot_memory
        flags = sim.flags
        initial_altitude = memory.initial_altitude
        if initial_altitude is None:
            raise ValueError("Autopilot requires an initial altitude; initialize a scenario first")
        validate_positive(initial_altitude, "initial_altitude")

        state = sim.state
        h = float(np.linalg.norm(state.position)) - sim.planet.radius
        alt_engage = engagement_altitude(initial_altitude)
        chute_engage = parachute_altitude(initial_altitude)
        weight_ratio = g_force / sim.engine.max_thrust
        vel_radial = state.radial_velocity
        # Runs inside the tick, before the clock advances
        t_tick = sim.t + sim.delta_t

        if h < chute_engage and not flags.parachute_deployed:
            if sim.parachute_oracle(sim):
                flags.deploy_parachute()
                print(
                    f"[Autopilot] Parachute deployed at t={t_tick:.1f}s, "
                    f"alt={h:.1f}m, vel={vel_radial:.1f}m/s"
                )

        if not flags.system_engaged:
            if h < alt_engage:
                flags.engage()
                memory.vel_engaged = vel_radial
                print(
                    f"[Autopilot] Engaged at t={t_tick:.1f}s, "
                    f"alt={h:.1f}m, vel={vel_radial:.1f}m/s"
                )
        else:
            Kh = -(KH_OFFSET / self.Kp + TOUCHDOWN_RATE + memory.vel_engaged) / alt_engage
            e = -(TOUCHDOWN_RATE + Kh * h + vel_radial)
            power = self.Kp * e
            sim.throttle = throttle_command(power, weight_ratio)
