"""
Configuration Module

This module provides scenario configuration management and the report data
formats shared by exporters and the API.
"""

from .scenario_config import (
    ScenarioConfig,
    SimulationConfig,
    SiteConfig,
    PanelConfig,
    ThermalConfig,
    FinancialConfig,
)
from .data_formats import DataFormats, DataFormatType, ReportMetadata, TrajectoryRowFormat

__all__ = [
    "ScenarioConfig",
    "SimulationConfig",
    "SiteConfig",
    "PanelConfig",
    "ThermalConfig",
    "FinancialConfig",
    "DataFormats",
    "DataFormatType",
    "ReportMetadata",
    "TrajectoryRowFormat",
]
