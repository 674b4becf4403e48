"""
Data Formats Module

This module defines the report data formats shared by the exporters and the
HTTP API: per-point trajectory rows, the report header metadata, the daily
energy summary and the yearly cash-flow table. It provides column schemas,
units and pydantic validation for each record type.

References:
- JSON Schema specifications
- CSV format standards (RFC 4180)
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class DataFormatType(str, Enum):
    """Supported export formats"""
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"
    PDF = "pdf"


@dataclass
class DataSchema:
    """Data schema definition"""
    name: str
    fields: Dict[str, type]
    required_fields: List[str]
    description: str
    units: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


class TrajectoryRowFormat(BaseModel):
    """One sampled point of the simulated day"""
    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=1, description="1-based point number")
    solar_time: str = Field(..., pattern=r"^\d{2}:\d{2}$", description="Apparent solar time HH:MM")
    hour_angle_deg: float = Field(..., ge=-180, le=180, description="Hour angle (degrees)")
    altitude_deg: float = Field(..., ge=-90, le=90, description="Sun altitude β (degrees)")
    azimuth_deg: float = Field(..., ge=0, lt=360, description="Sun azimuth γ, North clockwise (degrees)")
    wall_solar_azimuth_deg: float = Field(..., gt=-180, le=180, description="Wall-solar azimuth ψ (degrees)")
    incidence_angle_deg: float = Field(..., ge=0, le=180, description="Angle of incidence θ (degrees)")
    efficiency_pct: float = Field(..., ge=0, le=100, description="Geometric efficiency η (%)")
    incident_radiation_wm2: float = Field(..., ge=0, description="Incident radiation I (W/m²)")
    panel_temp_c: float = Field(..., description="Panel temperature Tt (°C)")
    power_output_w: float = Field(..., ge=0, description="Power output Pt (W)")


class ReportMetadata(BaseModel):
    """Report header describing the simulated site, day and panel"""
    location_label: str = Field(..., description="Location name")
    date: str = Field(..., description="ISO date of the simulated day")
    latitude_deg: float = Field(..., ge=-90, le=90)
    longitude_deg: Optional[float] = Field(None, ge=-180, le=180)
    panel_inclination_deg: float = Field(..., ge=0, le=90)
    panel_azimuth_deg: float = Field(..., description="North-referenced clockwise (degrees)")
    sample_count: int = Field(..., ge=1)


class EnergySummaryFormat(BaseModel):
    """Daily energy summary"""
    total_kwh: float = Field(..., ge=0, description="Daily energy (kWh)")
    peak_w: float = Field(..., ge=0, description="Peak power (W)")
    active_hours: float = Field(..., ge=0, le=24, description="Hours with positive power")


class FinancialYearFormat(BaseModel):
    """One year of the cash-flow projection"""
    year: int = Field(..., ge=1)
    annual_savings: float = Field(..., ge=0, description="Savings during the year ($)")
    accumulated_cash_flow: float = Field(..., description="Cash position at year end ($)")


class DataFormats:
    """
    Report data format definitions and utilities.

    Features:
    - Column schemas with units and display headers
    - Record validation with pydantic
    - DataFrame conversion for tabular export
    - Per-column statistics
    """

    def __init__(self):
        """Initialize data format definitions"""
        self.schemas = self._define_schemas()
        self.validators = self._setup_validators()

    def _define_schemas(self) -> Dict[str, DataSchema]:
        """Define report schemas"""
        return {
            "trajectory": DataSchema(
                name="trajectory_rows",
                fields={
                    "index": int,
                    "solar_time": str,
                    "hour_angle_deg": float,
                    "altitude_deg": float,
                    "azimuth_deg": float,
                    "wall_solar_azimuth_deg": float,
                    "incidence_angle_deg": float,
                    "efficiency_pct": float,
                    "incident_radiation_wm2": float,
                    "panel_temp_c": float,
                    "power_output_w": float
                },
                required_fields=["index", "solar_time", "altitude_deg", "azimuth_deg"],
                description="Per-point sun position and panel response",
                units={
                    "angle": "deg",
                    "efficiency": "%",
                    "radiation": "W/m²",
                    "temperature": "°C",
                    "power": "W"
                },
                headers={
                    "index": "Point",
                    "solar_time": "Solar time",
                    "hour_angle_deg": "Hour angle (°)",
                    "altitude_deg": "Altitude β (°)",
                    "azimuth_deg": "Azimuth γ (°)",
                    "wall_solar_azimuth_deg": "Wall-solar azimuth ψ (°)",
                    "incidence_angle_deg": "Incidence θ (°)",
                    "efficiency_pct": "Efficiency η (%)",
                    "incident_radiation_wm2": "Radiation I (W/m²)",
                    "panel_temp_c": "Panel temp Tt (°C)",
                    "power_output_w": "Power Pt (W)"
                }
            ),
            "energy": DataSchema(
                name="energy_summary",
                fields={
                    "total_kwh": float,
                    "peak_w": float,
                    "active_hours": float
                },
                required_fields=["total_kwh", "peak_w", "active_hours"],
                description="Daily energy summary",
                units={"energy": "kWh", "power": "W", "time": "h"},
                headers={
                    "total_kwh": "Total energy (kWh)",
                    "peak_w": "Peak power (W)",
                    "active_hours": "Generation hours (h)"
                }
            ),
            "financial": DataSchema(
                name="financial_projection",
                fields={
                    "year": int,
                    "annual_savings": float,
                    "accumulated_cash_flow": float
                },
                required_fields=["year", "annual_savings", "accumulated_cash_flow"],
                description="Yearly savings and accumulated cash flow",
                units={"money": "$"},
                headers={
                    "year": "Year",
                    "annual_savings": "Annual savings ($)",
                    "accumulated_cash_flow": "Accumulated cash flow ($)"
                }
            )
        }

    def _setup_validators(self) -> Dict[str, type]:
        """Setup data validators"""
        return {
            "trajectory": TrajectoryRowFormat,
            "energy": EnergySummaryFormat,
            "financial": FinancialYearFormat
        }

    def validate_data(self, data_type: str, data: Union[Dict, List]) -> bool:
        """
        Validate data against schema

        Args:
            data_type: Type of data to validate
            data: Data to validate (dict or list of dicts)

        Returns:
            True if valid
        """
        if data_type not in self.validators:
            raise ValueError(f"Unknown data type: {data_type}")

        validator = self.validators[data_type]

        try:
            if isinstance(data, list):
                for item in data:
                    validator(**item)
            else:
                validator(**data)
            return True
        except ValidationError as e:
            logger.warning(f"Validation error for {data_type}: {e}")
            return False

    def convert_to_dataframe(self, data_type: str, data: List[Dict],
                             use_headers: bool = False) -> pd.DataFrame:
        """
        Convert validated data to pandas DataFrame

        Args:
            data_type: Type of data
            data: List of data dictionaries
            use_headers: Rename columns to their display headers

        Returns:
            Pandas DataFrame with columns in schema order
        """
        if data_type not in self.schemas:
            raise ValueError(f"Unknown data type: {data_type}")

        columns = list(self.schemas[data_type].fields.keys())
        if not data:
            df = pd.DataFrame(columns=columns)
        else:
            if not self.validate_data(data_type, data):
                raise ValueError(f"Invalid {data_type} data")
            df = pd.DataFrame(data, columns=columns)

        if use_headers:
            df = df.rename(columns=self.schemas[data_type].headers)
        return df

    def import_from_format(self, data_type: str, filepath: str,
                           format: str = "csv") -> List[Dict]:
        """
        Import rows previously written in a tabular format

        Args:
            data_type: Type of data expected
            filepath: Input file path
            format: "csv", "excel" or "json"

        Returns:
            List of validated data dictionaries
        """
        fmt = format.lower()
        if fmt == "csv":
            df = pd.read_csv(filepath, dtype={"solar_time": str})
        elif fmt == "excel":
            df = pd.read_excel(filepath, dtype={"solar_time": str})
        elif fmt == "json":
            with open(filepath, 'r') as f:
                data = json.load(f)
            if not self.validate_data(data_type, data):
                raise ValueError(f"Imported data failed validation for {data_type}")
            return data
        else:
            raise ValueError(f"Unsupported import format: {format}")

        data = df.to_dict('records')
        if not self.validate_data(data_type, data):
            raise ValueError(f"Imported data failed validation for {data_type}")
        return data

    def get_schema_info(self, data_type: str) -> Dict:
        """
        Get schema information for data type

        Args:
            data_type: Type of data

        Returns:
            Schema information dictionary
        """
        if data_type not in self.schemas:
            raise ValueError(f"Unknown data type: {data_type}")

        schema = self.schemas[data_type]

        return {
            "name": schema.name,
            "description": schema.description,
            "fields": list(schema.fields.keys()),
            "field_types": {k: v.__name__ for k, v in schema.fields.items()},
            "required_fields": schema.required_fields,
            "units": schema.units,
            "headers": schema.headers
        }

    def get_data_statistics(self, data_type: str, data: List[Dict]) -> Dict[str, Any]:
        """
        Calculate statistics for numeric columns

        Args:
            data_type: Type of data
            data: Data to analyze

        Returns:
            Statistics dictionary
        """
        if not data:
            return {}

        df = self.convert_to_dataframe(data_type, data)
        numeric_columns = df.select_dtypes(include=[np.number]).columns

        stats = {
            "total_records": len(data),
            "field_statistics": {}
        }

        for col in numeric_columns:
            stats["field_statistics"][col] = {
                "mean": float(df[col].mean()),
                "min": float(df[col].min()),
                "max": float(df[col].max()),
                "count": int(df[col].count())
            }

        return stats
