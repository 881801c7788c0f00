"""
Scenario API: Fluent interface for configuring and running lander simulations.
"""
from __future__ import annotations

import numpy as np
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

from landersim.components.autopilot import DescentAutopilot
from landersim.core.simulation import Simulation
from landersim.models.lander import LanderConfig
from landersim.models.planet import MARS, Planet
from landersim.models.scenarios import ScenarioId
from landersim.utils.io import load_simulation_config, save_simulation_history
from landersim.utils.validation import validate_positive

DEFAULT_DURATION = 1000.0  # [s]


class Scenario:
    """
    Fluent wrapper around Simulation for one preset.

    Examples
    --------
    >>> result = Scenario("descent_10km").run(duration=600.0)
    >>> result.sim.landed
    True

    >>> # Same vehicle, lower start
    >>> Scenario(1).set_initial_state(altitude=3000.0).run()
    """

    def __init__(
        self,
        scenario: ScenarioId | int | str = ScenarioId.DESCENT_10KM,
        name: str | None = None,
        output_dir: str | Path | None = None,
        planet: Planet = MARS,
        lander: LanderConfig | None = None,
    ):
        kwargs: dict[str, Any] = {"planet": planet, "output_dir": output_dir}
        if lander is not None:
            kwargs["lander"] = lander
        self.sim = Simulation(**kwargs)
        self.sim.initialize(scenario)
        self.name = name if name is not None else self.sim.scenario.name.lower()
        self.history: list[dict[str, Any]] = []
        self._duration = DEFAULT_DURATION

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Scenario:
        """
        Build a scenario from a config dict (see load_simulation_config).

        ``planet`` and ``lander`` entries are keyword overrides applied on top
        of MARS and the default lander.

        Raises
        ------
        ValueError
            If an override is not a mapping or names an unknown field
        """
        planet = replace(MARS, **_overrides(config, "planet", Planet))
        lander = LanderConfig(**_overrides(config, "lander", LanderConfig))
        scenario = cls(
            config.get("scenario", ScenarioId.DESCENT_10KM),
            name=config.get("name"),
            output_dir=config.get("output_dir"),
            planet=planet,
            lander=lander,
        )
        if config.get("name") is not None:
            scenario.enable_logging()
        scenario._duration = float(config.get("duration", DEFAULT_DURATION))
        return scenario

    @classmethod
    def from_file(cls, filepath: str | Path) -> Scenario:
        """Build a scenario from a JSON config file."""
        return cls.from_config(load_simulation_config(str(filepath)))

    def set_initial_state(
        self,
        altitude: float | None = None,
        velocity: list[float] | None = None,
    ) -> Scenario:
        """
        Restart the preset from a different altitude and/or velocity.

        The lander is moved radially to ``altitude`` keeping its direction
        from the planet centre. Run state is reset as on initialization and
        the autopilot thresholds are derived from the new altitude.
        """
        sim = self.sim
        position = None
        if altitude is not None:
            position = (sim.planet.radius + float(altitude)) * sim.state.radial_unit
        sim.restart_from(position=position, velocity=velocity)
        return self

    def configure_autopilot(self, enabled: bool = True, Kp: float | None = None) -> Scenario:
        """
        Switch the autopilot on/off and optionally change its gain.

        Raises
        ------
        ValueError
            If enabling while the recorded initial altitude is not positive
        """
        autopilot = DescentAutopilot(Kp=Kp) if Kp is not None else self.sim.autopilot
        if enabled:
            initial_altitude = self.sim.autopilot_memory.initial_altitude
            if initial_altitude is None:
                raise ValueError("Autopilot requires an initial altitude; initialize a scenario first")
            validate_positive(initial_altitude, "Initial altitude")
        self.sim.autopilot = autopilot
        self.sim.flags.autopilot_enabled = bool(enabled)
        return self

    def enable_logging(self) -> Scenario:
        """Write CSV telemetry under ``output_dir/<name>_<timestamp>/logs``."""
        self.sim.enable_logging(self.name)
        return self

    def run(self, duration: float | None = None, log_interval: float = 10.0) -> Scenario:
        if duration is None:
            duration = self._duration
        print(f"Running Scenario: {self.name} ({self.sim.scenarios[self.sim.scenario].description})")
        self.history = self.sim.run(duration=duration, log_interval=log_interval)
        return self

    def save_history(self, filepath: str | Path | None = None) -> Path:
        """Save the last run's history as CSV (default: output folder or ./<name>_history.csv)."""
        if filepath is None:
            base = self.sim.output_path if self.sim.output_path is not None else Path(".")
            filepath = base / f"{self.name}_history.csv"
        return save_simulation_history(self.history, str(filepath))

    @property
    def radial_velocities(self) -> np.ndarray:
        """Radial velocity of each recorded tick [m/s]."""
        return np.array([h["radial_velocity"] for h in self.history])


def _overrides(config: dict[str, Any], key: str, model: type) -> dict[str, Any]:
    """Keyword overrides for ``model`` from ``config[key]``, checked against its fields."""
    values = config.get(key, {})
    if not isinstance(values, dict):
        raise ValueError(f"'{key}' overrides must be a mapping, got {type(values).__name__}")
    valid = {f.name for f in fields(model)}
    unknown = set(values) - valid
    if unknown:
        raise ValueError(
            f"Unknown {key} parameters: {sorted(unknown)}. Valid options: {sorted(valid)}"
        )
    return values
