"""
Energy Integration Module

This module provides tools for integrating daily power samples into
energy, peak power and generation hours.
"""

from .energy_integrator import IntegrationMethod, EnergySummary, EnergyIntegrator

__all__ = ["IntegrationMethod", "EnergySummary", "EnergyIntegrator"]
