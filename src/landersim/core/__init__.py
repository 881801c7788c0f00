from .integrator import VerletIntegrator, verlet_bootstrap, verlet_step
from .simulation import Simulation, initialize_simulation, numerical_dynamics

__all__ = [
    "Simulation",
    "VerletIntegrator",
    "verlet_bootstrap",
    "verlet_step",
    "initialize_simulation",
    "numerical_dynamics",
]
