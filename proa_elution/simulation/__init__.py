"""Simulation pipeline and runner."""

from .runner import (
    run_simulation,
    SimulationJob,
    SimulationRunner,
    SimulationRunResult,
    ValidationResult,
    validate_and_report,
)

__all__ = [
    'run_simulation',
    'SimulationJob',
    'SimulationRunner',
    'SimulationRunResult',
    'ValidationResult',
    'validate_and_report',
]
