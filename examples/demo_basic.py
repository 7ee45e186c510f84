#!/usr/bin/env python3
"""
Basic Playground Demo

Demonstrates:
- Batch evaluation of one model
- Comparing duplicated models with different gains
- CSV trace logging of controller updates
- Plotting a frame
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from pid_playground.core.pid_controller import PIDController
from pid_playground.core.pid_params import PIDGains
from pid_playground.simulation.environment import Environment
from pid_playground.simulation.registry import ModelRegistry
from pid_playground.simulation.driver import SimulationDriver
from pid_playground.analyzer.plots import PlaygroundPlotter


def main():
    print("=" * 60)
    print("Basic Playground Demo")
    print("=" * 60)

    env = Environment(damping=0.5, applied_force=0.0, timestep=0.016, setpoint=100.0)
    print(f"\n{env}")

    registry = ModelRegistry(env)
    baseline = registry.add("P only", gains=PIDGains(kp=2.0))

    # Same tuning plus derivative action to calm the overshoot
    damped = registry.duplicate(baseline)
    registry.rename(damped, "PD")
    registry.set_gains(damped, kd=1.5)

    driver = SimulationDriver(registry)
    result = driver.tick()
    print(f"Recomputed models: {result.recomputed}")

    for model in registry:
        values = registry.history(model.identity).values()
        overshoot = max(0.0, float(np.max(values)) - env.setpoint)
        print(f"  {model.name:<8} {model.gains}  final={values[-1]:.2f}  overshoot={overshoot:.2f}")

    # Trace a single controller to CSV
    output_dir = Path("output")
    with PIDController(PIDGains(kp=2.0), csv_path=str(output_dir / "controller_trace.csv")) as pid:
        for measurement in np.linspace(0.0, 100.0, 50):
            pid.update(env.setpoint, float(measurement), env.timestep)
    print(f"\nController trace written to {output_dir / 'controller_trace.csv'}")

    plotter = PlaygroundPlotter()
    plotter.draw(driver.plot_frame())
    plotter.figure.savefig(output_dir / "basic_demo.png", dpi=100)
    print(f"Plot saved to {output_dir / 'basic_demo.png'}")

    PlaygroundPlotter.show()


if __name__ == "__main__":
    main()
