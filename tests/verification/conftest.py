"""
Verification Test Suite for landersim.

These tests compare simulation results against analytical solutions
and closed-loop expectations to validate the dynamics and control.

Test Categories:
- Kinematic: Constant acceleration, bootstrap from rest
- Energy: Orbital energy and radius conservation in vacuum
- Descent: Autopilot and parachute behaviour on the 10 km preset
"""

import pytest

from landersim.core.simulation import Simulation
from landersim.models.scenarios import ScenarioId


@pytest.fixture
def orbit_sim():
    """Circular orbit, no atmosphere, no control, no early stop."""
    sim = Simulation(density_model=lambda position: 0.0)
    sim.initialize(ScenarioId.CIRCULAR_ORBIT)
    sim.set_termination_callback(lambda s: False)
    return sim


@pytest.fixture(scope="module")
def landed_descent():
    """10 km descent run to touchdown, with the per-tick history."""
    sim = Simulation()
    sim.initialize(ScenarioId.DESCENT_10KM)
    history = sim.run(duration=1000.0, log_interval=0)
    return sim, history
