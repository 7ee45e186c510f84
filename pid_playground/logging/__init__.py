"""Trace logging components for simulation data."""

from pid_playground.logging.csv_logger import CSVLogger

__all__ = [
    "CSVLogger",
]
