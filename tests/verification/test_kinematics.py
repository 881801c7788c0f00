"""
Kinematic Verification Tests.

Tests the Verlet update against analytical solutions:
- Constant acceleration (exact for position Verlet)
- Constant velocity (force-free)
- First tick from rest under gravity only
"""

import numpy as np
import pytest

from landersim.core.integrator import verlet_bootstrap, verlet_step
from landersim.core.simulation import Simulation
from landersim.models.scenarios import ScenarioId

# Tolerances for analytical comparisons
POSITION_TOLERANCE = 1e-6  # meters
VELOCITY_TOLERANCE = 1e-6  # m/s


def integrate_constant(x0, v0, a, dt, n_steps):
    """Apply the bootstrap then the recurrence ``n_steps - 1`` times."""
    prev, x, v = verlet_bootstrap(x0, v0, a, dt)
    for _ in range(n_steps - 1):
        prev, x, v = verlet_step(x, prev, a, dt)
    return x, v


class TestConstantAcceleration:
    """
    Verify motion under a constant acceleration.

    Analytical solution:
        x(t) = x₀ + v₀t + ½at²
        v(t) = v₀ + at
    """

    @pytest.mark.parametrize("dt", [0.01, 0.1, 0.5])
    def test_position(self, dt):
        """Position matches analytical solution for any step size."""
        x0 = np.array([10.0, -5.0, 100.0])
        v0 = np.array([1.0, 2.0, 0.0])
        a = np.array([0.0, 0.5, -3.71])
        n_steps = 40
        t_end = n_steps * dt

        x, _ = integrate_constant(x0, v0, a, dt, n_steps)

        x_analytical = x0 + v0 * t_end + 0.5 * a * t_end**2
        np.testing.assert_allclose(x, x_analytical, atol=POSITION_TOLERANCE)

    @pytest.mark.parametrize("dt", [0.01, 0.1, 0.5])
    def test_velocity(self, dt):
        """Velocity estimate matches analytical solution."""
        x0 = np.array([10.0, -5.0, 100.0])
        v0 = np.array([1.0, 2.0, 0.0])
        a = np.array([0.0, 0.5, -3.71])
        n_steps = 40
        t_end = n_steps * dt

        _, v = integrate_constant(x0, v0, a, dt, n_steps)

        np.testing.assert_allclose(v, v0 + a * t_end, atol=VELOCITY_TOLERANCE)


class TestConstantVelocity:
    """
    Force-free motion.

    Analytical solution:
        x(t) = x₀ + v₀t
    """

    def test_straight_line(self):
        x0 = np.zeros(3)
        v0 = np.array([3.0, -4.0, 12.0])
        x, v = integrate_constant(x0, v0, np.zeros(3), 0.1, 100)
        np.testing.assert_allclose(x, v0 * 10.0, atol=POSITION_TOLERANCE)
        np.testing.assert_allclose(v, v0, atol=VELOCITY_TOLERANCE)


class TestFirstTick:
    """
    One tick from rest with only gravity acting.

    Analytical solution:
        Δx = ½ g dt²,  v = g dt
    """

    def test_displacement_from_rest(self):
        sim = Simulation(density_model=lambda position: 0.0)
        sim.initialize(ScenarioId.DESCENT_10KM)
        x0 = sim.state.position.copy()
        dt = sim.delta_t
        g = sim.planet.mu / np.dot(x0, x0)

        sim.step()

        displacement = sim.state.position - x0
        # The preset sits on the -y axis, so down is +y
        np.testing.assert_allclose(displacement, [0.0, 0.5 * g * dt**2, 0.0], atol=1e-8)
        np.testing.assert_allclose(sim.state.velocity, [0.0, g * dt, 0.0], atol=1e-6)
        assert sim.state.radial_velocity == pytest.approx(-g * dt, rel=1e-6)
