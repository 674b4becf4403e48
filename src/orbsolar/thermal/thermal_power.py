"""
Thermal Power Module

This module estimates the radiation reaching a panel, its operating
temperature and the resulting derated electrical output. The radiation
and thermal formulas are simplified empirical approximations intended for
interactive comparison of panel orientations, not a radiative transfer
model.

Model:
- Extraterrestrial irradiance from the day of year (Earth orbit eccentricity)
- Beam attenuation through an empirical air-mass transmittance
- Cosine projection onto the panel plane
- Linear steady-state panel temperature above ambient
- Linear temperature derating of peak power, scaled by irradiance

References:
- "Solar Engineering of Thermal Processes" - Duffie & Beckman
- Kasten & Young (1989), revised optical air mass tables
- Meinel & Meinel (1976), "Applied Solar Energy"
"""

from dataclasses import dataclass
from typing import Optional

from ..solar.angles import cos_deg, sin_deg


@dataclass(frozen=True)
class ThermalConstants:
    """Ambient conditions and panel ratings used by the thermal/power model"""
    ambient_temp_c: float = 25.0               # Ta (°C)
    peak_panel_power_w: float = 300.0          # Pp at STC (W)
    temp_derate_coefficient: float = 0.004     # δ_temp (1/°C)
    transmissivity_absorptivity: float = 0.9   # τα (-)
    loss_coefficient: float = 30.0             # U_L (W/m²·K)
    wind_coefficient: Optional[float] = None   # k (°C per W/m²), None derives τα/U_L

    @property
    def thermal_coefficient(self) -> float:
        """Effective k in Tt = Ta + k·I"""
        if self.wind_coefficient is not None:
            return self.wind_coefficient
        return self.transmissivity_absorptivity / self.loss_coefficient


@dataclass(frozen=True)
class ThermalPowerSample:
    """Radiation, temperature and power at one trajectory point"""
    incident_radiation_wm2: float  # I (W/m²)
    panel_temp_c: float            # Tt (°C)
    power_output_w: float          # Pt (W)


class ThermalPowerModel:
    """
    Simplified radiation, thermal and power model for a flat panel.

    Features:
    - Day-of-year extraterrestrial irradiance
    - Air-mass beam attenuation
    - Linear operating temperature model
    - Temperature-derated, irradiance-proportional power
    """

    # Physical constants
    SOLAR_CONSTANT = 1367           # W/m² at 1 AU
    ECCENTRICITY_AMPLITUDE = 0.033  # ±3.3% yearly variation
    DAYS_PER_YEAR = 365

    # Standard test conditions
    STC_IRRADIANCE = 1000           # W/m²
    STC_TEMPERATURE_C = 25.0        # °C

    # Empirical beam transmittance I = I0 · 0.7^(AM^0.678)
    ATMOSPHERIC_TRANSMITTANCE = 0.7
    AIR_MASS_EXPONENT = 0.678

    HORIZON_TOLERANCE = 1e-9        # altitudes at or below this count as set

    def __init__(self, constants: Optional[ThermalConstants] = None):
        """
        Initialize thermal power model

        Args:
            constants: Ambient conditions and panel ratings
        """
        self.constants = constants if constants is not None else ThermalConstants()

    @classmethod
    def extraterrestrial_irradiance(cls, day_of_year: int) -> float:
        """
        Irradiance above the atmosphere for a given day

        I0 = 1367 · (1 + 0.033·cos(360°·n/365))

        Returns:
            Irradiance in W/m²
        """
        return cls.SOLAR_CONSTANT * (
            1.0 + cls.ECCENTRICITY_AMPLITUDE * cos_deg(360.0 * day_of_year / cls.DAYS_PER_YEAR)
        )

    @classmethod
    def air_mass(cls, altitude_deg: float) -> Optional[float]:
        """
        Relative optical air mass (Kasten-Young)

        Returns:
            Air mass, or None when the sun is at or below the horizon
        """
        if altitude_deg <= cls.HORIZON_TOLERANCE:
            return None
        return 1.0 / (sin_deg(altitude_deg) + 0.50572 * (altitude_deg + 6.07995) ** -1.6364)

    def incident_radiation(self, day_of_year: int, incidence_angle_deg: float,
                           altitude_deg: float) -> float:
        """
        Beam radiation reaching the panel plane

        Decreases monotonically as the incidence angle grows past 0 and as
        the sun sinks toward the horizon.

        Args:
            day_of_year: Day number n
            incidence_angle_deg: Angle of incidence θ
            altitude_deg: Solar altitude β

        Returns:
            Incident radiation in W/m², 0 with the sun down or behind the panel
        """
        am = self.air_mass(altitude_deg)
        if am is None or incidence_angle_deg >= 90.0:
            return 0.0

        beam_normal = (self.extraterrestrial_irradiance(day_of_year) *
                       self.ATMOSPHERIC_TRANSMITTANCE ** (am ** self.AIR_MASS_EXPONENT))
        return beam_normal * max(0.0, cos_deg(incidence_angle_deg))

    def panel_temperature(self, incident_radiation_wm2: float) -> float:
        """
        Operating temperature Tt = Ta + k·I

        Returns:
            Panel temperature in °C
        """
        return self.constants.ambient_temp_c + self.constants.thermal_coefficient * incident_radiation_wm2

    def power_output(self, panel_temp_c: float, incident_radiation_wm2: float) -> float:
        """
        Derated electrical output

        Pt = Pp · (1 - δ_temp · max(0, Tt - 25)) · I / 1000, clamped at 0

        Returns:
            Power in W
        """
        derate = 1.0 - self.constants.temp_derate_coefficient * max(0.0, panel_temp_c - self.STC_TEMPERATURE_C)
        power = self.constants.peak_panel_power_w * derate * incident_radiation_wm2 / self.STC_IRRADIANCE
        return max(0.0, power)

    def evaluate(self, day_of_year: int, incidence_angle_deg: float,
                 altitude_deg: float) -> ThermalPowerSample:
        """
        Radiation, temperature and power for one sun position

        Returns:
            ThermalPowerSample
        """
        radiation = self.incident_radiation(day_of_year, incidence_angle_deg, altitude_deg)
        temperature = self.panel_temperature(radiation)
        power = self.power_output(temperature, radiation)

        return ThermalPowerSample(
            incident_radiation_wm2=radiation,
            panel_temp_c=temperature,
            power_output_w=power
        )
