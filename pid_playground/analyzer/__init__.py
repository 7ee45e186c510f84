"""Visualization of simulation output."""

from pid_playground.analyzer.plots import PlaygroundPlotter

__all__ = [
    "PlaygroundPlotter",
]
