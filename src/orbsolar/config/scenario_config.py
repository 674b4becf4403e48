"""
Scenario Configuration Module

This module handles scenario configuration, validation, and management for
solar panel yield analysis. It provides structured configuration schemas,
JSON/YAML loading, and templates for representative sites and dates.

References:
- Pydantic configuration management
- JSON Schema validation standards
- Duffie & Beckman, Solar Engineering of Thermal Processes (panel orientation conventions)
"""

import datetime
import json
import yaml
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..energy.energy_integrator import IntegrationMethod
from ..financial.financial_projector import FinancialParameters
from ..panel.panel_geometry import AzimuthConvention, PanelOrientation
from ..solar.solar_position import PREVIEW_SAMPLE_COUNT, SIMULATION_SAMPLE_COUNT, SolarPositionCalculator
from ..thermal.thermal_power import ThermalConstants


class SiteConfig(BaseModel):
    """Observer location and calendar day"""
    model_config = ConfigDict(extra="forbid")

    location_name: str = Field("Unnamed site", description="Human readable location label")
    latitude_deg: float = Field(..., ge=-90, le=90, description="Geographic latitude (degrees)")
    longitude_deg: Optional[float] = Field(None, ge=-180, le=180,
                                           description="Geographic longitude, reporting only (degrees)")
    date: datetime.date = Field(..., description="Calendar date of the simulated day")


class PanelConfig(BaseModel):
    """Panel orientation"""
    model_config = ConfigDict(extra="forbid")

    inclination_deg: float = Field(30.0, ge=0, le=90, description="Tilt from horizontal (degrees)")
    azimuth_deg: float = Field(180.0, description="Direction the panel faces (degrees)")
    azimuth_convention: AzimuthConvention = Field(
        AzimuthConvention.NORTH_CLOCKWISE,
        description="Reference frame of azimuth_deg"
    )

    @model_validator(mode="after")
    def validate_azimuth_range(self):
        """Accept the range each convention naturally uses"""
        if self.azimuth_convention == AzimuthConvention.SOUTH_CLOCKWISE:
            if not -180 <= self.azimuth_deg <= 180:
                raise ValueError("South-referenced azimuth must be within [-180, 180]")
        elif not 0 <= self.azimuth_deg <= 360:
            raise ValueError("North-referenced azimuth must be within [0, 360]")
        return self

    def to_orientation(self) -> PanelOrientation:
        """Panel orientation in the canonical north-clockwise frame"""
        return PanelOrientation.from_convention(
            self.inclination_deg, self.azimuth_deg, self.azimuth_convention
        )


class ThermalConfig(BaseModel):
    """Ambient conditions and panel ratings"""
    model_config = ConfigDict(extra="forbid")

    ambient_temp_c: float = Field(25.0, ge=-60, le=60, description="Ambient temperature (°C)")
    peak_panel_power_w: float = Field(300.0, gt=0, description="Rated power at STC (W)")
    temp_derate_coefficient: float = Field(0.004, ge=0, lt=1,
                                           description="Power loss per °C above 25 °C")
    transmissivity_absorptivity: float = Field(0.9, gt=0, le=1, description="τα product")
    loss_coefficient: float = Field(30.0, gt=0, description="Overall heat loss U_L (W/m²·K)")
    wind_coefficient: Optional[float] = Field(
        None, ge=0, description="Direct k in Tt = Ta + k·I (°C per W/m²); overrides τα/U_L"
    )

    def to_constants(self) -> ThermalConstants:
        return ThermalConstants(
            ambient_temp_c=self.ambient_temp_c,
            peak_panel_power_w=self.peak_panel_power_w,
            temp_derate_coefficient=self.temp_derate_coefficient,
            transmissivity_absorptivity=self.transmissivity_absorptivity,
            loss_coefficient=self.loss_coefficient,
            wind_coefficient=self.wind_coefficient
        )


class FinancialConfig(BaseModel):
    """Tariff, system cost and output degradation"""
    model_config = ConfigDict(extra="forbid")

    tariff_per_kwh: float = Field(0.15, ge=0, description="Electricity price ($/kWh)")
    system_cost: float = Field(500.0, ge=0, description="Installed system cost ($)")
    degradation_rate: Optional[float] = Field(
        None, ge=0, lt=1,
        description="Yearly output loss fraction; defaults to the thermal derate coefficient"
    )
    projection_years: int = Field(20, ge=1, le=50, description="Projection horizon (years)")

    def to_parameters(self, thermal: Optional[ThermalConfig] = None) -> FinancialParameters:
        """
        Build projector parameters

        Args:
            thermal: Thermal configuration supplying the default degradation rate
        """
        rate = self.degradation_rate
        if rate is None:
            rate = thermal.temp_derate_coefficient if thermal is not None else 0.0
        return FinancialParameters(
            tariff_per_kwh=self.tariff_per_kwh,
            system_cost=self.system_cost,
            degradation_rate=rate,
            projection_years=self.projection_years
        )


class SimulationConfig(BaseModel):
    """Simulation configuration"""
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "scenario_name": "Mexico_City_Summer",
                "description": "Summer solstice in Mexico City, south-facing panel",
                "site": {
                    "location_name": "Mexico City",
                    "latitude_deg": 19.43,
                    "longitude_deg": -99.13,
                    "date": "2025-06-21"
                },
                "panel": {"inclination_deg": 20, "azimuth_deg": 180},
                "financial": {"tariff_per_kwh": 0.15, "system_cost": 500}
            }
        }
    )

    scenario_name: str = Field(..., description="Scenario name")
    description: Optional[str] = Field(None, description="Scenario description")
    site: SiteConfig
    panel: PanelConfig = Field(default_factory=PanelConfig)
    thermal: ThermalConfig = Field(default_factory=ThermalConfig)
    financial: FinancialConfig = Field(default_factory=FinancialConfig)
    sample_count: int = Field(SIMULATION_SAMPLE_COUNT, ge=1, le=10000,
                              description="Trajectory points across the day")
    integration_method: IntegrationMethod = Field(IntegrationMethod.RECTANGLE,
                                                  description="Energy quadrature rule")
    version: str = Field("1.0", description="Configuration version")

    @field_validator("scenario_name")
    @classmethod
    def validate_scenario_name(cls, v):
        if not v.strip():
            raise ValueError("Scenario name must not be empty")
        return v

    def financial_parameters(self) -> FinancialParameters:
        return self.financial.to_parameters(self.thermal)


class ScenarioConfig:
    """
    Scenario configuration management system.

    Features:
    - JSON/YAML configuration loading and validation
    - Pre-defined site and date templates
    - Template overrides with deep dictionary merge
    - Configuration schema export and summaries
    """

    def __init__(self):
        """Initialize scenario configuration manager"""
        self.config: Optional[SimulationConfig] = None
        self.templates = self._load_default_templates()

    def load_config(self, filepath: str) -> SimulationConfig:
        """
        Load configuration from file

        Args:
            filepath: Path to a .json, .yaml or .yml file

        Returns:
            Validated simulation configuration
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        try:
            with open(path, 'r') as f:
                if path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)

            self.config = SimulationConfig(**data)
            return self.config

        except Exception as e:
            raise ValueError(f"Error loading configuration: {e}")

    def save_config(self, config: SimulationConfig, filepath: str, format: str = "json"):
        """
        Save configuration to file

        Args:
            config: Configuration to save
            filepath: Output file path
            format: Output format ("json" or "yaml")
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = config.model_dump(mode="json")

        try:
            with open(path, 'w') as f:
                if format.lower() in ['yaml', 'yml']:
                    yaml.safe_dump(data, f, default_flow_style=False, indent=2, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)

        except Exception as e:
            raise ValueError(f"Error saving configuration: {e}")

    def create_from_template(self, template_name: str, **kwargs) -> SimulationConfig:
        """
        Create configuration from predefined template

        Args:
            template_name: Name of template
            **kwargs: Parameters to override, nested dictionaries merge

        Returns:
            Configured simulation scenario
        """
        if template_name not in self.templates:
            raise ValueError(f"Template not found: {template_name}")

        template_data = deepcopy(self.templates[template_name])
        self._deep_update(template_data, kwargs)

        return SimulationConfig(**template_data)

    def validate_config(self, config_data: Dict) -> SimulationConfig:
        """Validate a configuration dictionary"""
        return SimulationConfig(**config_data)

    def get_config_schema(self) -> Dict:
        """
        Get configuration schema

        Returns:
            JSON schema for configuration
        """
        return SimulationConfig.model_json_schema()

    def list_templates(self) -> List[str]:
        return list(self.templates.keys())

    def _load_default_templates(self) -> Dict[str, Dict]:
        """Load default site templates"""
        return {
            "Equator_Equinox": {
                "scenario_name": "Equator_Equinox",
                "description": "Equinox on the equator, horizontal panel",
                "site": {
                    "location_name": "Quito",
                    "latitude_deg": 0.0,
                    "longitude_deg": -78.47,
                    "date": "2025-03-21"
                },
                "panel": {
                    "inclination_deg": 0.0,
                    "azimuth_deg": 180.0
                },
                "financial": {
                    "tariff_per_kwh": 0.15,
                    "system_cost": 500.0
                }
            },

            "Mexico_City_Summer": {
                "scenario_name": "Mexico_City_Summer",
                "description": "Summer solstice in Mexico City, south-facing panel",
                "site": {
                    "location_name": "Mexico City",
                    "latitude_deg": 19.43,
                    "longitude_deg": -99.13,
                    "date": "2025-06-21"
                },
                "panel": {
                    "inclination_deg": 20.0,
                    "azimuth_deg": 180.0
                },
                "financial": {
                    "tariff_per_kwh": 0.15,
                    "system_cost": 500.0
                }
            },

            "Madrid_Winter": {
                "scenario_name": "Madrid_Winter",
                "description": "Winter solstice in Madrid, steep south-facing panel",
                "site": {
                    "location_name": "Madrid",
                    "latitude_deg": 40.42,
                    "longitude_deg": -3.70,
                    "date": "2025-12-21"
                },
                "panel": {
                    "inclination_deg": 60.0,
                    "azimuth_deg": 0.0,
                    "azimuth_convention": "south_clockwise"
                },
                "thermal": {
                    "ambient_temp_c": 8.0
                },
                "financial": {
                    "tariff_per_kwh": 0.22,
                    "system_cost": 650.0
                }
            },

            "Polar_Night": {
                "scenario_name": "Polar_Night",
                "description": "Winter solstice at 80° N, the sun never rises",
                "site": {
                    "location_name": "Svalbard",
                    "latitude_deg": 80.0,
                    "longitude_deg": 15.0,
                    "date": "2025-12-21"
                },
                "panel": {
                    "inclination_deg": 45.0,
                    "azimuth_deg": 180.0
                }
            }
        }

    def _deep_update(self, base_dict: Dict, update_dict: Dict):
        """Deep update dictionary"""
        for key, value in update_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._deep_update(base_dict[key], value)
            else:
                base_dict[key] = value

    def generate_config_summary(self, config: SimulationConfig) -> Dict[str, Any]:
        """
        Generate configuration summary

        Args:
            config: Simulation configuration

        Returns:
            Configuration summary dictionary
        """
        orientation = config.panel.to_orientation()
        return {
            'scenario_name': config.scenario_name,
            'description': config.description,
            'site': {
                'location_name': config.site.location_name,
                'latitude_deg': config.site.latitude_deg,
                'longitude_deg': config.site.longitude_deg,
                'date': config.site.date.isoformat()
            },
            'panel': {
                'inclination_deg': orientation.inclination_deg,
                'azimuth_deg': orientation.azimuth_deg,
                'input_azimuth_deg': config.panel.azimuth_deg,
                'azimuth_convention': config.panel.azimuth_convention.value
            },
            'thermal': {
                'ambient_temp_c': config.thermal.ambient_temp_c,
                'peak_panel_power_w': config.thermal.peak_panel_power_w,
                'thermal_coefficient': config.thermal.to_constants().thermal_coefficient
            },
            'financial': {
                'tariff_per_kwh': config.financial.tariff_per_kwh,
                'system_cost': config.financial.system_cost,
                'degradation_rate': config.financial_parameters().degradation_rate,
                'projection_years': config.financial.projection_years
            },
            'simulation_settings': {
                'sample_count': config.sample_count,
                'integration_method': config.integration_method.value
            }
        }

    def compare_configs(self, config1: SimulationConfig, config2: SimulationConfig) -> Dict:
        """
        Compare two configurations field by field

        Returns:
            Mapping of dotted field path to both values, for differing fields only
        """
        first = _flatten(config1.model_dump(mode="json"))
        second = _flatten(config2.model_dump(mode="json"))

        differences = {}
        for key in sorted(set(first) | set(second)):
            if first.get(key) != second.get(key):
                differences[key] = {'config1': first.get(key), 'config2': second.get(key)}
        return differences

    def validate_site_feasibility(self, config: SimulationConfig) -> Dict[str, Any]:
        """
        Check a scenario for conditions that make its output meaningless

        Args:
            config: Simulation configuration

        Returns:
            Feasibility analysis and recommendations
        """
        issues = []
        warnings = []
        recommendations = []

        latitude = config.site.latitude_deg
        day = SolarPositionCalculator.day_of_year(config.site.date)
        declination = SolarPositionCalculator.declination(day)
        if SolarPositionCalculator.sunrise_hour_angle(declination, latitude) is None:
            warnings.append("The sun does not rise or set on this date; no yield will be produced")
            recommendations.append("Pick a date outside polar day or night for this latitude")

        # Equator-facing panels collect the most; canonical 180° is south
        orientation = config.panel.to_orientation()
        facing_equator = 180.0 if latitude >= 0 else 0.0
        offset = abs((orientation.azimuth_deg - facing_equator + 180.0) % 360.0 - 180.0)
        if orientation.inclination_deg > 0 and offset > 90:
            warnings.append("Panel faces away from the equator")
            recommendations.append(f"Consider a panel azimuth near {facing_equator:g}° (north-clockwise)")

        if config.sample_count == 1:
            issues.append("A single trajectory point has no time step; daily energy is always 0")
        elif config.sample_count < PREVIEW_SAMPLE_COUNT:
            warnings.append(f"Only {config.sample_count} trajectory points; energy integration is coarse")
            recommendations.append(f"Use at least {PREVIEW_SAMPLE_COUNT} points")

        if config.financial.tariff_per_kwh == 0:
            warnings.append("Zero tariff; the investment is never recovered")

        return {
            "feasible": len(issues) == 0,
            "issues": issues,
            "warnings": warnings,
            "recommendations": recommendations
        }


def _flatten(data: Dict, prefix: str = "") -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, path))
        else:
            flat[path] = value
    return flat
