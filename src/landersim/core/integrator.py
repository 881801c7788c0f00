from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING

from landersim.dynamics.state import ForceBreakdown
from landersim.utils.validation import validate_positive

if TYPE_CHECKING:
    from landersim.core.simulation import Simulation

Array = np.ndarray


def verlet_bootstrap(
    position: Array, velocity: Array, a: Array, dt: float
) -> tuple[Array, Array, Array]:
    """
    First step after (re)initialization, when no earlier sample exists.

    Returns (previous_position, position, velocity):
      x1 = x0 + v0 dt + ½ a dt²
      v1 = (2 x1 - x0 + a dt² - x0) / (2 dt)
    """
    previous = position.copy()
    new_position = previous + velocity * dt + 0.5 * dt * dt * a
    new_velocity = (2 * new_position - previous + a * dt * dt - previous) * 0.5 * 1 / dt
    return previous, new_position, new_velocity


def verlet_step(
    position: Array, previous: Array, a: Array, dt: float
) -> tuple[Array, Array, Array]:
    """
    Position Verlet recurrence with a central velocity estimate.

    Returns (previous_position, position, velocity):
      x_{n+1} = 2 x_n - x_{n-1} + a dt²
      v_{n+1} = (2 x_{n+1} - x_n + a dt² - x_n) / (2 dt)
    """
    current = position.copy()
    new_position = 2 * current - previous + a * dt * dt
    new_velocity = (2 * new_position - current + a * dt * dt - current) * 0.5 * 1 / dt
    return current, new_position, new_velocity


class VerletIntegrator:
    """
    Fixed-step velocity-Verlet integrator for the lander point mass.

    Each call to step() advances the simulation by exactly one ``sim.delta_t``:

    1. density, mass, gravity, body drag, parachute drag, thrust
    2. acceleration = ΣF / m
    3. Verlet update (bootstrap on the first tick after initialization)
    4. autopilot hook, then attitude stabilization hook
    """

    def forces(self, sim: Simulation) -> ForceBreakdown:
        """Evaluate all forces at the current state. Burns no fuel."""
        state = sim.state
        lander = sim.lander

        density = sim.density_model(state.position)
        mass = lander.mass(sim.fuel)
        validate_positive(mass, "Lander mass")

        g_force = sim.gravity(state.position, mass)
        d_force = sim.body_drag(state.velocity, density)
        c_force = sim.chute_drag(state.velocity, density, deployed=sim.flags.parachute_deployed)
        throttle = sim.throttle if sim.fuel > 0.0 else 0.0
        t_force = np.asarray(
            sim.engine.thrust_force_world(state.orientation, throttle), dtype=np.float64
        )

        a = (g_force + d_force + c_force + t_force) / mass
        return ForceBreakdown(
            gravity=g_force,
            drag=d_force,
            parachute=c_force,
            thrust=t_force,
            acceleration=a,
            mass=mass,
            density=density,
        )

    def step(self, sim: Simulation) -> Simulation:
        dt = sim.delta_t
        state = sim.state
        history = sim.history

        fb = self.forces(sim)
        sim.force_breakdown = fb
        if sim.fuel > 0.0:
            sim.fuel = sim.engine.consume(sim.fuel, sim.throttle, dt)

        a = fb.acceleration
        if not history.valid:
            previous, state.position, state.velocity = verlet_bootstrap(
                state.position, state.velocity, a, dt
            )
        else:
            previous, state.position, state.velocity = verlet_step(
                state.position, history.previous_position, a, dt
            )
        history.seed(previous)

        if sim.flags.autopilot_enabled:
            sim.autopilot.update(sim, float(np.linalg.norm(fb.gravity)), fb.mass)

        if sim.flags.stabilized_attitude:
            sim.stabilizer(sim)

        return sim
