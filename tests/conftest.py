import os
import sys

import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from landersim.core.simulation import Simulation  # noqa: E402
from landersim.models.scenarios import ScenarioId  # noqa: E402


@pytest.fixture
def vacuum_sim():
    """Circular-orbit preset with the atmosphere switched off."""
    sim = Simulation(density_model=lambda position: 0.0)
    sim.initialize(ScenarioId.CIRCULAR_ORBIT)
    return sim


@pytest.fixture
def descent_sim():
    """Descent from 10 km with the default collaborators."""
    sim = Simulation()
    sim.initialize(ScenarioId.DESCENT_10KM)
    return sim
