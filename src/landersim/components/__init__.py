"""
Lander subsystems.

Each subsystem is a small object or function the integrator consults once
per tick.

Example
-------
>>> from landersim.components import DescentAutopilot, Engine, ParachuteEnvelope
>>> sim = Simulation(autopilot=DescentAutopilot(Kp=0.05), engine=Engine())
"""

from .autopilot import (
    DescentAutopilot,
    engagement_altitude,
    parachute_altitude,
    throttle_command,
)
from .engine import Engine
from .parachute import ParachuteEnvelope
from .stabilizer import attitude_stabilization

__all__ = [
    "DescentAutopilot",
    "engagement_altitude",
    "parachute_altitude",
    "throttle_command",
    "Engine",
    "ParachuteEnvelope",
    "attitude_stabilization",
]
