"""
Solar Geometry Module

This module provides tools for computing the sun's declination, sunrise
hour angle and daily trajectory for a date and latitude.
"""

from .solar_position import (
    GeoDate,
    TrajectoryPoint,
    SolarTrajectory,
    SolarPositionCalculator,
    compute_trajectory,
    PREVIEW_SAMPLE_COUNT,
    SIMULATION_SAMPLE_COUNT,
)
from .angles import zenith_angle, altitude_from_zenith

__all__ = [
    "GeoDate",
    "TrajectoryPoint",
    "SolarTrajectory",
    "SolarPositionCalculator",
    "compute_trajectory",
    "PREVIEW_SAMPLE_COUNT",
    "SIMULATION_SAMPLE_COUNT",
    "zenith_angle",
    "altitude_from_zenith",
]
