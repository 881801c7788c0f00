from .forces import Drag, Gravity, ParachuteDrag
from .state import (
    AutopilotMemory,
    ControlFlags,
    ForceBreakdown,
    IntegratorHistory,
    KinematicState,
    ParachuteStatus,
)

__all__ = [
    "Gravity",
    "Drag",
    "ParachuteDrag",
    "KinematicState",
    "ControlFlags",
    "IntegratorHistory",
    "AutopilotMemory",
    "ForceBreakdown",
    "ParachuteStatus",
]
