"""
Simulation Module

This module provides the per-day pipeline that combines solar position,
panel geometry, thermal/power modeling and energy integration, and the
scenario report built on top of it.
"""

from .day_simulation import (
    IncidenceSample,
    DaySimulationResult,
    DaySimulator,
    REPORT_FIELDS,
    simulate_day,
    clear_caches,
)
from .report import SimulationReport, build_metadata, run_scenario

__all__ = [
    "IncidenceSample",
    "DaySimulationResult",
    "DaySimulator",
    "REPORT_FIELDS",
    "simulate_day",
    "clear_caches",
    "SimulationReport",
    "build_metadata",
    "run_scenario",
]
