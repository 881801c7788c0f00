"""
landersim - Planetary lander descent simulator.

Core Components
---------------
Simulation : Simulation context and tick loop
VerletIntegrator : Fixed-step velocity-Verlet integrator
DescentAutopilot : Descent-rate controller with parachute logic
ScenarioId : Preset selector (circular orbit, descents, launches, ...)

Models
------
Planet / MARS : Gravity and exponential atmosphere
LanderConfig : Vehicle mass, drag and engine parameters

Examples
--------
>>> from landersim import Simulation
>>> sim = Simulation().initialize("descent_10km")
>>> history = sim.run(duration=600.0)
"""

__version__ = "0.1.0"

# Core simulation classes
from landersim.core.simulation import Simulation, initialize_simulation, numerical_dynamics
from landersim.core.integrator import VerletIntegrator

# Subsystems
from landersim.components import (
    DescentAutopilot,
    Engine,
    ParachuteEnvelope,
    attitude_stabilization,
    throttle_command,
)

# State
from landersim.dynamics.state import (
    AutopilotMemory,
    ControlFlags,
    IntegratorHistory,
    KinematicState,
    ParachuteStatus,
)

# Forces
from landersim.dynamics.forces import Drag, Gravity, ParachuteDrag

# Models
from landersim.models import (
    DEFAULT_LANDER,
    MARS,
    SCENARIOS,
    LanderConfig,
    Planet,
    ScenarioId,
    ScenarioParameters,
)

# Logging
from landersim.logger import CSVLogger
from landersim.api.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Core
    "Simulation",
    "VerletIntegrator",
    "initialize_simulation",
    "numerical_dynamics",
    # Subsystems
    "DescentAutopilot",
    "Engine",
    "ParachuteEnvelope",
    "attitude_stabilization",
    "throttle_command",
    # State
    "KinematicState",
    "ControlFlags",
    "IntegratorHistory",
    "AutopilotMemory",
    "ParachuteStatus",
    # Forces
    "Gravity",
    "Drag",
    "ParachuteDrag",
    # Models
    "Planet",
    "MARS",
    "LanderConfig",
    "DEFAULT_LANDER",
    "ScenarioId",
    "ScenarioParameters",
    "SCENARIOS",
    # Logging
    "CSVLogger",
    # API
    "Scenario",
]
