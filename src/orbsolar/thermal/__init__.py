"""
Thermal Power Module

This module provides tools for estimating incident radiation, panel
operating temperature and temperature-derated power output.
"""

from .thermal_power import ThermalConstants, ThermalPowerSample, ThermalPowerModel

__all__ = ["ThermalConstants", "ThermalPowerSample", "ThermalPowerModel"]
