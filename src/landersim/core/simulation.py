"""
Simulation context and tick loop for the lander.

Owns the kinematic state, control flags, integrator history and autopilot
memory, and advances them one fixed time step at a time with optional
telemetry logging and automatic output organization.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from landersim.components.autopilot import DescentAutopilot
from landersim.components.engine import Engine
from landersim.components.parachute import ParachuteEnvelope
from landersim.components.stabilizer import attitude_stabilization
from landersim.dynamics.forces import Drag, Gravity, ParachuteDrag
from landersim.dynamics.state import (
    AutopilotMemory,
    ControlFlags,
    ForceBreakdown,
    IntegratorHistory,
    KinematicState,
)
from landersim.logger import CSVLogger
from landersim.models.lander import DEFAULT_LANDER, LanderConfig
from landersim.models.planet import MARS, Planet
from landersim.models.scenarios import ScenarioId, build_scenarios, resolve_scenario
from landersim.utils.validation import validate_positive, validate_timestep, validate_vector3

from .integrator import VerletIntegrator

# Default output directory
DEFAULT_OUTPUT_DIR = Path("output")
# Touchdown limits for a safe landing [m/s]
MAX_IMPACT_DESCENT_RATE = 1.0
MAX_IMPACT_GROUND_SPEED = 1.0


class Simulation:
    """
    Simulation context for one lander run.

    All mutable state lives on this object and is passed to (and returned
    from) the integrator each tick. Collaborators are plain attributes so
    they can be replaced.

    Parameters
    ----------
    planet : Planet
        Central body (gravity, atmosphere). Default MARS.
    lander : LanderConfig
        Vehicle parameters. Default DEFAULT_LANDER.
    integrator : VerletIntegrator | None
        Tick integrator. Default VerletIntegrator().
    autopilot : DescentAutopilot | None
        Post-step controller. Default DescentAutopilot().
    engine : Engine | None
        Thrust model providing ``thrust_force_world(orientation, throttle)``
        and ``max_thrust``. Default Engine(lander, planet).
    density_model : Callable[[NDArray], float] | None
        Atmospheric density at a position. Default planet.atmospheric_density.
    parachute_oracle : Callable[[Simulation], bool] | None
        Deployment safety check. Default ParachuteEnvelope(lander).
    stabilizer : Callable[[Simulation], None] | None
        Attitude mutator. Default attitude_stabilization.
    simulation_name : str | None
        Name for this run. Enables CSV logging when given.
    output_dir : Path | str | None
        Base directory for outputs. Defaults to "./output".
    auto_timestamp : bool
        Append a timestamp to the output folder name.

    Attributes
    ----------
    state : KinematicState | None
        Position, velocity and orientation. None until initialize().
    flags : ControlFlags
        Parachute status, autopilot/stabilization switches, engagement latch
    history : IntegratorHistory
        Previous position for the Verlet recurrence
    autopilot_memory : AutopilotMemory
        Engagement velocity and initial altitude
    delta_t : float
        Time step [s]
    t : float
        Simulation time [s]
    fuel : float
        Remaining fuel fraction [-]
    throttle : float
        Current throttle command [-]
    landed, crashed : bool
        Touchdown outcome
    force_breakdown : ForceBreakdown
        Forces of the most recent tick

    Examples
    --------
    >>> sim = Simulation()
    >>> sim.initialize("descent_10km")
    >>> history = sim.run(duration=600.0)
    >>> sim.landed, sim.crashed
    (True, False)
    """

    def __init__(
        self,
        planet: Planet = MARS,
        lander: LanderConfig = DEFAULT_LANDER,
        integrator: VerletIntegrator | None = None,
        autopilot: DescentAutopilot | None = None,
        engine: Engine | None = None,
        density_model: Callable[[NDArray[np.float64]], float] | None = None,
        parachute_oracle: Callable[[Simulation], bool] | None = None,
        stabilizer: Callable[[Simulation], None] | None = None,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
    ) -> None:
        self.planet = planet
        self.lander = lander
        self.scenarios = build_scenarios(planet, lander)

        # Collaborators
        self.integrator = integrator if integrator is not None else VerletIntegrator()
        self.autopilot = autopilot if autopilot is not None else DescentAutopilot()
        self.engine = engine if engine is not None else Engine(lander, planet)
        self.density_model = (density_model if density_model is not None
                              else planet.atmospheric_density)
        self.parachute_oracle = (parachute_oracle if parachute_oracle is not None
                                 else ParachuteEnvelope(lander))
        self.stabilizer = stabilizer if stabilizer is not None else attitude_stabilization

        # Force models
        self.gravity = Gravity(planet)
        self.body_drag = Drag(lander.drag_coef_lander, lander.body_area)
        self.chute_drag = ParachuteDrag(lander.drag_coef_chute, lander.chute_area)

        # Run state (populated by initialize)
        self.scenario: ScenarioId | None = None
        self.state: KinematicState | None = None
        self.flags = ControlFlags()
        self.history = IntegratorHistory()
        self.autopilot_memory = AutopilotMemory()
        self.delta_t = 0.1
        self.t = 0.0
        self.fuel = 1.0
        self.throttle = 0.0
        self.landed = False
        self.crashed = False
        self.t_touchdown: float | None = None
        self.force_breakdown = ForceBreakdown()
        self.termination_callback: Callable[[Simulation], bool] | None = None

        # Output configuration
        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self.output_path: Path | None = None
        self.logger: CSVLogger | None = None

        if simulation_name is not None:
            self.enable_logging(simulation_name)

    @classmethod
    def with_logging(
        cls,
        name: str,
        output_dir: Path | str | None = None,
        **kwargs: Any,
    ) -> Simulation:
        """
        Convenience factory to create a Simulation with logging pre-enabled.

        Examples
        --------
        >>> sim = Simulation.with_logging("descent_test_01")
        """
        return cls(simulation_name=name, output_dir=output_dir, auto_timestamp=True, **kwargs)

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Enable telemetry logging with automatic output organization.

        Creates ``output_dir/<name>_<timestamp>/logs/telemetry.csv``.

        Raises
        ------
        ValueError
            If no simulation name available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Simulation name required for logging. "
                "Either pass name to __init__ or to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name
        logs_dir = self.output_path / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)

        self.logger = CSVLogger(logs_dir / "telemetry.csv")
        print(f"[Simulation] Logging enabled: {self.output_path}")
        return self.output_path

    def disable_logging(self) -> None:
        """Disable logging and close any open log files."""
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            print("[Simulation] Logging disabled")

    def set_termination_callback(self, fn: Callable[[Simulation], bool]) -> None:
        """
        Replace touchdown detection with a custom stop condition.

        Examples
        --------
        >>> sim.set_termination_callback(lambda s: s.altitude < 1000.0)
        """
        self.termination_callback = fn

    # --- Initialization ---

    def initialize(self, scenario: ScenarioId | int | str) -> Simulation:
        """
        Load a scenario preset into fresh state.

        Replaces state, flags, integrator history, autopilot memory, fuel,
        throttle and time together. Validation happens before anything is
        replaced, so a rejected scenario leaves the previous state intact.

        Raises
        ------
        ValueError
            Unknown scenario, non-positive time step, or an autopilot
            scenario starting at non-positive altitude
        """
        params = resolve_scenario(scenario, self.scenarios)
        validate_timestep(params.delta_t)
        initial_altitude = params.altitude(self.planet)
        if params.autopilot_enabled:
            validate_positive(initial_altitude, f"Initial altitude of scenario '{params.name}'")

        position, velocity, orientation = params.vectors()
        self.delta_t = params.delta_t
        self.scenario = params.id
        self._reset_run(
            KinematicState(position, velocity, orientation),
            ControlFlags(
                autopilot_enabled=params.autopilot_enabled,
                stabilized_attitude=params.stabilized_attitude,
            ),
            initial_altitude,
        )
        return self

    def restart_from(
        self,
        position: NDArray[np.float64] | None = None,
        velocity: NDArray[np.float64] | None = None,
    ) -> Simulation:
        """
        Restart the loaded scenario from a new position and/or velocity.

        Orientation, time step and the autopilot/stabilization switches are
        kept. Everything else is reset as in initialize(): integrator
        history, engagement latch, parachute status, autopilot memory,
        fuel, throttle and time. Inputs are validated before anything is
        replaced.

        Raises
        ------
        RuntimeError
            If no scenario has been initialized
        ValueError
            Malformed vectors, or a non-positive altitude with the
            autopilot enabled
        """
        if self.state is None:
            raise RuntimeError("No scenario loaded. Call initialize() first.")

        new_position = (self.state.position if position is None
                        else validate_vector3(position, "position"))
        new_velocity = (self.state.velocity if velocity is None
                        else validate_vector3(velocity, "velocity"))
        initial_altitude = self.planet.altitude(new_position)
        if self.flags.autopilot_enabled:
            validate_positive(initial_altitude, "Initial altitude")

        self._reset_run(
            KinematicState(new_position, new_velocity, self.state.orientation),
            ControlFlags(
                autopilot_enabled=self.flags.autopilot_enabled,
                stabilized_attitude=self.flags.stabilized_attitude,
            ),
            initial_altitude,
        )
        return self

    def _reset_run(
        self,
        state: KinematicState,
        flags: ControlFlags,
        initial_altitude: float,
    ) -> None:
        self.state = state
        self.flags = flags
        self.history = IntegratorHistory()
        self.autopilot_memory = AutopilotMemory(initial_altitude=initial_altitude)
        self.t = 0.0
        self.fuel = 1.0
        self.throttle = 0.0
        self.landed = False
        self.crashed = False
        self.t_touchdown = None
        self.force_breakdown = ForceBreakdown()

    # --- Derived quantities ---

    @property
    def altitude(self) -> float:
        """Height above the planet's reference sphere [m]."""
        return self.planet.altitude(self.state.position)

    @property
    def mass(self) -> float:
        """Current lander mass [kg]."""
        return self.lander.mass(self.fuel)

    def get_energy(self) -> dict[str, float]:
        """
        Orbital energy of the lander (diagnostic).

        Returns
        -------
        dict[str, float]
            'kinetic', 'potential' (-G·M·m/r) and 'total' [J]
        """
        m = self.mass
        KE = 0.5 * m * float(np.dot(self.state.velocity, self.state.velocity))
        PE = -self.planet.mu * m / float(np.linalg.norm(self.state.position))
        return {
            'kinetic': KE,
            'potential': PE,
            'total': KE + PE,
        }

    def snapshot(self) -> dict[str, Any]:
        """Current state as a flat dict (copies of arrays)."""
        return {
            "t": self.t,
            "altitude": self.altitude,
            "position": self.state.position.copy(),
            "velocity": self.state.velocity.copy(),
            "orientation": self.state.orientation.copy(),
            "radial_velocity": self.state.radial_velocity,
            "ground_speed": self.state.ground_speed,
            "throttle": self.throttle,
            "fuel": self.fuel,
            "mass": self.mass,
            "parachute_status": self.flags.parachute_status.name,
            "system_engaged": self.flags.system_engaged,
        }

    # --- Fixed-Step Integration ---

    def step(self) -> bool:
        """
        Advance simulation by one time step.

        Returns
        -------
        bool
            True if a stop condition was met (touchdown or custom callback)

        Raises
        ------
        RuntimeError
            If no scenario has been initialized
        """
        if self.state is None:
            raise RuntimeError("No scenario loaded. Call initialize() first.")
        if self.landed:
            return True

        self.integrator.step(self)
        self.t += self.delta_t

        if self.logger is not None:
            self.logger.log(self)

        if self.termination_callback:
            return bool(self.termination_callback(self))

        if self.altitude < self.lander.size / 2.0:
            self.landed = True
            self.t_touchdown = self.t
            self.crashed = (
                self.state.radial_velocity < -MAX_IMPACT_DESCENT_RATE
                or self.state.ground_speed > MAX_IMPACT_GROUND_SPEED
            )
            return True
        return False

    def run(self, duration: float, log_interval: float = 10.0) -> list[dict[str, Any]]:
        """
        Run the simulation for ``duration`` seconds or until it stops.

        Parameters
        ----------
        duration : float
            Simulation duration [s]
        log_interval : float
            Interval [s] for printing progress to terminal. Set to <= 0 to disable.

        Returns
        -------
        list[dict]
            Snapshot of the initial state followed by one per tick
        """
        if self.state is None:
            raise RuntimeError("No scenario loaded. Call initialize() first.")

        t_end = self.t + float(duration)
        last_log_time = self.t
        history = [self.snapshot()]

        if self.logger is not None:
            self.logger.log(self)

        print(f"[Simulation] Starting run: {duration}s duration, dt={self.delta_t}s")

        try:
            # Half-step tolerance keeps float drift from adding a tick
            while self.t < t_end - 0.5 * self.delta_t:
                stop = self.step()
                history.append(self.snapshot())
                if stop:
                    print(f"[Simulation] Run terminated at t={self.t:.2f}s")
                    if self.landed:
                        outcome = "CRASHED" if self.crashed else "landed safely"
                        print(
                            f"        Touchdown {outcome}: "
                            f"descent rate={-self.state.radial_velocity:.2f}m/s, "
                            f"ground speed={self.state.ground_speed:.2f}m/s"
                        )
                    break

                if log_interval > 0 and (self.t - last_log_time) >= log_interval:
                    print(
                        f"[Simulation] t={self.t:8.1f}s | alt={self.altitude:10.1f}m, "
                        f"v_r={self.state.radial_velocity:8.2f}m/s, "
                        f"throttle={self.throttle:.2f}, fuel={self.fuel:.3f}"
                    )
                    last_log_time = self.t
        finally:
            if self.logger:
                self.logger.flush()

        return history


def initialize_simulation(sim: Simulation, scenario: ScenarioId | int | str) -> Simulation:
    """Load ``scenario`` into ``sim``. See Simulation.initialize()."""
    return sim.initialize(scenario)


def numerical_dynamics(sim: Simulation) -> Simulation:
    """Advance ``sim`` by one integrator step (no time bookkeeping or touchdown check)."""
    return sim.integrator.step(sim)
