"""
Example 01: Circular Orbit using the Scenario API.

The lander coasts on a circular orbit at 1.2 Mars radii, well above the
exosphere. With no drag and no thrust the orbital radius and energy should
stay constant.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

import numpy as np

from landersim.api.scenario import Scenario


def run_example():
    # 1. Load the preset and run roughly a quarter orbit
    scenario = Scenario("circular_orbit", name="01_circular_orbit") \
        .enable_logging() \
        .run(duration=2000.0, log_interval=250.0)

    # 2. Check the orbit
    radii = np.array([np.linalg.norm(h["position"]) for h in scenario.history])
    drift = (radii.max() - radii.min()) / radii[0]
    print(f"Relative radius drift: {drift:.2e}")
    print(f"Orbital energy: {scenario.sim.get_energy()['total']:.6e} J")

    path = scenario.save_history()
    print(f"Simulation complete. Results saved to {path}")


if __name__ == "__main__":
    run_example()
