"""
Example 02: Powered Descent from 10 km.

The lander free-falls until half its starting altitude, opens the
parachute and hands over to the descent-rate autopilot, which brakes
to about 0.5 m/s at touchdown.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from landersim.api.scenario import Scenario


def run_example():
    scenario = Scenario("descent_10km", name="02_descent_10km") \
        .enable_logging() \
        .run(duration=1000.0, log_interval=20.0)

    sim = scenario.sim
    if sim.landed:
        status = "CRASHED" if sim.crashed else "landed safely"
        print(f"\nTouchdown at t={sim.t_touchdown:.1f}s: {status}")
    print(f"Fuel remaining: {100 * sim.fuel:.1f}%")
    print(f"Telemetry: {sim.output_path}")


if __name__ == "__main__":
    run_example()
