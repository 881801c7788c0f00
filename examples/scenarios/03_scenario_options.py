"""
Example 03: Scenario Options
Demonstrates overriding a preset's start conditions and autopilot gain,
and loading a scenario from a JSON config file.
"""
import json
import sys
import tempfile
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from landersim import Scenario


def run_demo():
    print("\n--- Low start: parachute opens before the autopilot engages ---")
    scenario = (
        Scenario("descent_10km", name="03_low_start")
        # Start at 3 km, descending at 40 m/s
        .set_initial_state(altitude=3000.0, velocity=[0.0, 40.0, 0.0])
        # Stiffer controller
        .configure_autopilot(Kp=0.08)
    )
    scenario.run(duration=600.0, log_interval=20.0)

    print("\n--- Heavier vehicle, from a config file ---")
    config = {
        "scenario": "descent_10km",
        "lander": {"unloaded_mass": 120.0},
        "duration": 600.0,
    }
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "heavy.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        heavy = Scenario.from_file(path).run(log_interval=50.0)

    for label, s in (("low start", scenario), ("heavy", heavy)):
        sim = s.sim
        print(f"{label:>10}: landed={sim.landed}, crashed={sim.crashed}, fuel={sim.fuel:.2f}")


if __name__ == "__main__":
    run_demo()
