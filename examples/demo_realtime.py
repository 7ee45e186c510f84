#!/usr/bin/env python3
"""
Real-time Playground Demo

Three models are pre-computed while paused, then the driver switches to
real-time mode and the animation scrolls a 20 s window.
"""

import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_playground.core.pid_params import PIDGains
from pid_playground.simulation.registry import ModelRegistry
from pid_playground.simulation.driver import SimulationDriver, DriverConfig
from pid_playground.simulation.animated import AnimatedPlayground


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    registry = ModelRegistry()
    registry.add("Sluggish", gains=PIDGains(kp=0.5, kd=0.5))
    registry.add("Aggressive", gains=PIDGains(kp=5.0, ki=0.01))
    registry.add("Balanced", gains=PIDGains(kp=2.0, ki=0.001, kd=1.2), max_accel=20.0)

    driver = SimulationDriver(registry, DriverConfig(horizon=20.0))
    driver.tick()

    # A push from the side shows how each loop rejects a disturbance
    registry.update_environment(applied_force=-3.0)
    driver.set_running(True)

    AnimatedPlayground(driver, interval_ms=16).run()


if __name__ == "__main__":
    main()
