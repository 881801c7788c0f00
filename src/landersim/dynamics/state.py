"""
Mutable simulation state records.

All vectors are float64 arrays in the planet-centred Cartesian frame:
- Position: meters [m]
- Velocity: meters per second [m/s]
- Orientation: xyz Euler angles [degrees], lander body frame
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray

from landersim.utils.validation import validate_vector3


class ParachuteStatus(Enum):
    """
    Parachute deployment states.

    State Machine:
        NOT_DEPLOYED → DEPLOYED
    """

    NOT_DEPLOYED = auto()  # Packed, no drag
    DEPLOYED = auto()  # Open for the rest of the run


class KinematicState:
    """
    Translational state and attitude of the lander.

    Parameters
    ----------
    position : array-like
        Position in planet-centred frame [m] (3,)
    velocity : array-like
        Velocity [m/s] (3,)
    orientation : array-like
        xyz Euler angles [degrees] (3,)

    Raises
    ------
    ValueError
        If any vector is not a finite (3,) array
    """
    __slots__ = ("position", "velocity", "orientation")

    def __init__(
        self,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
        orientation: NDArray[np.float64],
    ) -> None:
        self.position = validate_vector3(position, "position")
        self.velocity = validate_vector3(velocity, "velocity")
        self.orientation = validate_vector3(orientation, "orientation")

    @property
    def radial_unit(self) -> NDArray[np.float64]:
        """Outward unit vector from the planet centre."""
        return self.position / np.linalg.norm(self.position)

    @property
    def radial_velocity(self) -> float:
        """Velocity component along the outward radial direction [m/s]."""
        return float(np.dot(self.velocity, self.radial_unit))

    @property
    def ground_speed(self) -> float:
        """Magnitude of the tangential velocity component [m/s]."""
        tangential = self.velocity - self.radial_velocity * self.radial_unit
        return float(np.linalg.norm(tangential))

    def copy(self) -> KinematicState:
        return KinematicState(self.position, self.velocity, self.orientation)

    def __repr__(self) -> str:
        return (
            f"KinematicState(position={self.position.tolist()}, "
            f"velocity={self.velocity.tolist()}, "
            f"orientation={self.orientation.tolist()})"
        )


@dataclass
class ControlFlags:
    """
    Control-mode flags for one scenario run.

    Attributes
    ----------
    parachute_status : ParachuteStatus
        Deployment state. Never reverts once DEPLOYED.
    autopilot_enabled : bool
        Run the descent autopilot after each integration step
    stabilized_attitude : bool
        Run attitude stabilization after each integration step
    system_engaged : bool
        Autopilot latch. False until the engagement altitude is crossed.
    """

    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    autopilot_enabled: bool = False
    stabilized_attitude: bool = False
    system_engaged: bool = False

    @property
    def parachute_deployed(self) -> bool:
        return self.parachute_status is ParachuteStatus.DEPLOYED

    def deploy_parachute(self) -> None:
        self.parachute_status = ParachuteStatus.DEPLOYED

    def engage(self) -> None:
        self.system_engaged = True


@dataclass
class IntegratorHistory:
    """
    Verlet recurrence memory.

    Attributes
    ----------
    previous_position : NDArray | None
        Position one tick ago [m]. Meaningful only when ``valid``.
    valid : bool
        False until the bootstrap tick has seeded ``previous_position``.
    """

    previous_position: NDArray[np.float64] | None = None
    valid: bool = False

    def seed(self, position: NDArray[np.float64]) -> None:
        self.previous_position = np.array(position, dtype=np.float64)
        self.valid = True

    def invalidate(self) -> None:
        self.previous_position = None
        self.valid = False


@dataclass
class AutopilotMemory:
    """
    Autopilot values persisted across ticks.

    Attributes
    ----------
    vel_engaged : float
        Radial velocity latched when the autopilot engaged [m/s]
    initial_altitude : float | None
        Altitude at scenario start [m]. Sets the engagement and
        parachute-deployment thresholds.
    """

    vel_engaged: float = 0.0
    initial_altitude: float | None = None


@dataclass
class ForceBreakdown:
    """Forces [N] and derived quantities of the most recent tick."""

    gravity: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    drag: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    parachute: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    thrust: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    acceleration: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    mass: float = 0.0
    density: float = 0.0
