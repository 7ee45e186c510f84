"""Plant models for simulation."""

from pid_playground.plants.base_plant import BasePlant
from pid_playground.plants.damped_mass import DampedMassPlant

__all__ = [
    "BasePlant",
    "DampedMassPlant",
]
