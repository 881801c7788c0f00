"""
Tests for the Simulation tick loop, touchdown detection and diagnostics.
"""
import dataclasses

import numpy as np
import pytest

from landersim import MARS, ScenarioId, Simulation, initialize_simulation, numerical_dynamics


def _near_ground(descent_rate, ground_speed=0.0, altitude=0.45):
    """Passive lander just below touchdown height on the -y axis."""
    sim = Simulation().initialize(ScenarioId.DESCENT_10KM)
    sim.flags.autopilot_enabled = False
    sim.state.position = np.array([0.0, -(MARS.radius + altitude), 0.0])
    sim.state.velocity = np.array([ground_speed, descent_rate, 0.0])
    return sim


class TestTouchdown:
    def test_soft_landing(self):
        sim = _near_ground(descent_rate=0.5)
        assert sim.step() is True
        assert sim.landed
        assert not sim.crashed
        assert sim.t_touchdown == pytest.approx(sim.delta_t)

    def test_fast_descent_crashes(self):
        sim = _near_ground(descent_rate=5.0)
        assert sim.step()
        assert sim.landed
        assert sim.crashed

    def test_ground_speed_crashes(self):
        sim = _near_ground(descent_rate=0.5, ground_speed=3.0)
        assert sim.step()
        assert sim.crashed

    def test_above_touchdown_height_keeps_flying(self):
        sim = _near_ground(descent_rate=0.5, altitude=50.0)
        assert sim.step() is False
        assert not sim.landed

    def test_no_steps_after_landing(self):
        sim = _near_ground(descent_rate=0.5)
        sim.step()
        t = sim.t
        position = sim.state.position.copy()
        assert sim.step() is True
        assert sim.t == t
        np.testing.assert_array_equal(sim.state.position, position)


class TestStep:
    def test_step_requires_initialize(self):
        with pytest.raises(RuntimeError, match="initialize"):
            Simulation().step()

    def test_run_requires_initialize(self):
        with pytest.raises(RuntimeError, match="initialize"):
            Simulation().run(duration=1.0)

    def test_restart_requires_initialize(self):
        with pytest.raises(RuntimeError, match="initialize"):
            Simulation().restart_from(velocity=[0.0, 0.0, 0.0])

    def test_restart_keeps_orientation_and_switches(self, descent_sim):
        for _ in range(10):
            descent_sim.step()
        orientation = descent_sim.state.orientation.copy()
        descent_sim.restart_from(velocity=[0.0, 5.0, 0.0])
        np.testing.assert_array_equal(descent_sim.state.orientation, orientation)
        assert descent_sim.flags.autopilot_enabled
        assert descent_sim.scenario is ScenarioId.DESCENT_10KM
        assert descent_sim.t == 0.0
        assert not descent_sim.history.valid

    def test_time_advances(self, descent_sim):
        for _ in range(5):
            descent_sim.step()
        assert descent_sim.t == pytest.approx(5 * descent_sim.delta_t)

    def test_termination_callback_replaces_touchdown(self):
        sim = _near_ground(descent_rate=0.5)
        sim.set_termination_callback(lambda s: False)
        assert sim.step() is False
        assert not sim.landed

    def test_termination_callback_stops_run(self, descent_sim):
        descent_sim.set_termination_callback(lambda s: s.altitude < 9990.0)
        history = descent_sim.run(duration=600.0, log_interval=0)
        assert descent_sim.altitude < 9990.0
        assert len(history) == round(descent_sim.t / descent_sim.delta_t) + 1
        assert descent_sim.t < 600.0

    def test_run_length(self, vacuum_sim):
        history = vacuum_sim.run(duration=1.0, log_interval=0)
        # initial snapshot + 10 ticks
        assert len(history) == 11
        assert history[0]["t"] == 0.0
        assert history[-1]["t"] == pytest.approx(1.0)

    def test_module_functions(self):
        sim = Simulation()
        assert initialize_simulation(sim, "circular_orbit") is sim
        position = sim.state.position.copy()
        assert numerical_dynamics(sim) is sim
        assert sim.t == 0.0
        assert not np.array_equal(sim.state.position, position)

    def test_large_timestep_warns(self):
        sim = Simulation()
        preset = dataclasses.replace(sim.scenarios[ScenarioId.CIRCULAR_ORBIT], delta_t=2.0)
        sim.scenarios = {**sim.scenarios, ScenarioId.CIRCULAR_ORBIT: preset}
        with pytest.warns(RuntimeWarning, match="Large timestep"):
            sim.initialize(ScenarioId.CIRCULAR_ORBIT)
        assert sim.delta_t == 2.0

    def test_non_positive_timestep_rejected(self):
        sim = Simulation()
        preset = dataclasses.replace(sim.scenarios[ScenarioId.CIRCULAR_ORBIT], delta_t=0.0)
        sim.scenarios = {**sim.scenarios, ScenarioId.CIRCULAR_ORBIT: preset}
        with pytest.raises(ValueError, match="Timestep"):
            sim.initialize(ScenarioId.CIRCULAR_ORBIT)
        assert sim.state is None


class TestDiagnostics:
    def test_energy_components(self, vacuum_sim):
        energy = vacuum_sim.get_energy()
        assert energy["kinetic"] > 0.0
        assert energy["potential"] < 0.0
        assert energy["total"] == pytest.approx(energy["kinetic"] + energy["potential"])
        # Circular orbit: E = -KE
        assert energy["total"] == pytest.approx(-energy["kinetic"], rel=1e-12)

    def test_snapshot_contents(self, descent_sim):
        snap = descent_sim.snapshot()
        assert snap["altitude"] == pytest.approx(10000.0)
        assert snap["parachute_status"] == "NOT_DEPLOYED"
        assert snap["system_engaged"] is False
        assert snap["mass"] == pytest.approx(200.0)
        assert snap["fuel"] == 1.0

    def test_snapshot_copies_arrays(self, descent_sim):
        snap = descent_sim.snapshot()
        snap["position"][0] = 123.0
        assert descent_sim.state.position[0] == 0.0

    def test_mass_tracks_fuel(self, descent_sim):
        descent_sim.fuel = 0.25
        assert descent_sim.mass == pytest.approx(125.0)

    def test_state_repr(self, descent_sim):
        assert "KinematicState(position=" in repr(descent_sim.state)

    def test_state_rejects_non_finite(self):
        from landersim import KinematicState
        with pytest.raises(ValueError, match="finite"):
            KinematicState([np.nan, 0.0, 0.0], np.zeros(3), np.zeros(3))
        with pytest.raises(ValueError, match="shape"):
            KinematicState([1.0, 0.0], np.zeros(3), np.zeros(3))
