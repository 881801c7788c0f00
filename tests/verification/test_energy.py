"""
Energy Conservation Verification Tests.

Orbits above the atmosphere are conservative:
- Circular orbit keeps a constant radius and speed
- Elliptical orbit keeps a constant specific orbital energy
"""

import numpy as np
import pytest

from landersim.core.simulation import Simulation
from landersim.models.scenarios import ScenarioId

ENERGY_TOLERANCE = 1e-4  # relative error
RADIUS_TOLERANCE = 1e-4  # relative error


def relative_error(computed: float, analytical: float) -> float:
    """Compute relative error, handling zero case."""
    if abs(analytical) < 1e-12:
        return abs(computed - analytical)
    return abs(computed - analytical) / abs(analytical)


class TestCircularOrbit:
    """
    Circular orbit at 1.2 planet radii.

    Analytical solution:
        |r(t)| = r₀,  |v(t)| = sqrt(GM / r₀)
        E = -GMm / (2 r₀)
    """

    def test_radius_constant(self, orbit_sim):
        r0 = np.linalg.norm(orbit_sim.state.position)
        max_error = 0.0
        for _ in range(20000):
            orbit_sim.step()
            r = np.linalg.norm(orbit_sim.state.position)
            max_error = max(max_error, relative_error(r, r0))
        assert max_error < RADIUS_TOLERANCE, f"Radius drift {max_error:.2e}"

    def test_energy_constant(self, orbit_sim):
        E0 = orbit_sim.get_energy()["total"]
        m = orbit_sim.mass
        r0 = np.linalg.norm(orbit_sim.state.position)
        assert E0 == pytest.approx(-orbit_sim.planet.mu * m / (2 * r0), rel=1e-12)

        for _ in range(20000):
            orbit_sim.step()
        E = orbit_sim.get_energy()["total"]
        assert relative_error(E, E0) < ENERGY_TOLERANCE

    def test_no_fuel_used(self, orbit_sim):
        for _ in range(100):
            orbit_sim.step()
        assert orbit_sim.fuel == 1.0
        assert orbit_sim.throttle == 0.0

    def test_stays_in_orbital_plane(self, orbit_sim):
        for _ in range(5000):
            orbit_sim.step()
        # Starts in the XY plane with XY velocity
        assert orbit_sim.state.position[2] == 0.0


class TestEllipticalOrbit:
    """
    Polar elliptical orbit (periapsis at 1.2 planet radii, outside the atmosphere).

    Analytical solution:
        ε = v²/2 - GM/r = constant
    """

    def test_specific_energy_constant(self):
        sim = Simulation()
        sim.initialize(ScenarioId.ELLIPTICAL_POLAR_ORBIT)
        sim.set_termination_callback(lambda s: False)
        E0 = sim.get_energy()["total"]
        assert E0 < 0.0  # bound

        for _ in range(20000):
            sim.step()
            assert sim.altitude > sim.planet.exosphere
        E = sim.get_energy()["total"]
        assert relative_error(E, E0) < ENERGY_TOLERANCE
