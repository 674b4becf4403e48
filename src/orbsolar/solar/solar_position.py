"""
Solar Position Module

This module reconstructs the apparent path of the sun across a single day
for a given date and latitude. It computes the day of year, solar
declination, sunrise hour angle and a sampled trajectory of
(hour angle, altitude, azimuth) points evenly spaced between sunrise and
sunset.

Azimuths are North-referenced and clockwise positive
(0° = North, 90° = East, 180° = South, 270° = West).

When the sun does not rise or set on the requested day (polar day or
polar night) the calculator returns None instead of a trajectory. This is
not an error; every downstream stage accepts None and produces no output.

References:
- "Solar Engineering of Thermal Processes" - Duffie & Beckman
- Cooper (1969) declination approximation
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Optional, Tuple, Union

import numpy as np

from .angles import acos_deg, asin_deg, cos_deg, sin_deg, tan_deg


PREVIEW_SAMPLE_COUNT = 32
SIMULATION_SAMPLE_COUNT = 100


@dataclass(frozen=True)
class GeoDate:
    """Calendar date and observer latitude for one computation"""
    date: date
    latitude_deg: float  # Positive North, [-90, 90]


@dataclass(frozen=True)
class TrajectoryPoint:
    """Sun position at one sampled hour angle"""
    index: int                  # 1-based sample number
    solar_time_label: str       # "HH:MM" apparent solar time
    hour_angle_deg: float       # h, negative before solar noon
    altitude_deg: float         # β, above the horizon
    azimuth_deg: float          # γ, North-referenced clockwise


@dataclass(frozen=True)
class SolarTrajectory:
    """Sampled path of the sun from sunrise to sunset"""
    geo_date: GeoDate
    day_of_year: int
    declination_deg: float
    sunrise_hour_angle_magnitude_deg: float   # hs > 0; the day runs from -hs to +hs
    hour_angle_step_deg: float
    points: Tuple[TrajectoryPoint, ...]

    @property
    def sample_count(self) -> int:
        return len(self.points)

    @property
    def sunrise_hour_angle_deg(self) -> float:
        """Signed hour angle of the first point, -hs"""
        return -self.sunrise_hour_angle_magnitude_deg

    @property
    def sunset_hour_angle_deg(self) -> float:
        return self.sunrise_hour_angle_magnitude_deg

    @property
    def sunrise_label(self) -> str:
        return SolarPositionCalculator.format_solar_time(self.sunrise_hour_angle_deg)

    @property
    def sunset_label(self) -> str:
        return SolarPositionCalculator.format_solar_time(self.sunset_hour_angle_deg)

    @property
    def day_length_hours(self) -> float:
        return SolarPositionCalculator.day_length_hours(self.sunrise_hour_angle_magnitude_deg)

    @property
    def peak_altitude_deg(self) -> float:
        """Solar noon altitude, whether or not h = 0 was sampled"""
        return SolarPositionCalculator.altitude(0.0, self.declination_deg, self.geo_date.latitude_deg)

    @property
    def peak_sampled_altitude_deg(self) -> float:
        return max(point.altitude_deg for point in self.points)


class SolarPositionCalculator:
    """
    Solar position calculator for a fixed observer latitude.

    Features:
    - Day of year and declination
    - Sunrise/sunset hour angle with polar day/night detection
    - Altitude and azimuth for any hour angle
    - Evenly sampled daily trajectory
    """

    # Declination model constants
    MAX_DECLINATION = 23.45          # degrees, axial tilt
    DEGREES_PER_DAY = 0.985647       # 360 / 365.25
    SUMMER_SOLSTICE_DAY = 173

    EARTH_ROTATION_RATE = 15.0       # degrees of hour angle per hour
    ZENITH_TOLERANCE = 1e-9          # cos(β) below this is treated as 0

    @staticmethod
    def day_of_year(day: Union[date, datetime]) -> int:
        """
        Day number counted from January 1st (inclusive)

        Args:
            day: Calendar date

        Returns:
            Day of year in 1..366
        """
        return day.timetuple().tm_yday

    @classmethod
    def declination(cls, day_of_year: int) -> float:
        """
        Solar declination δ(n) = 23.45° · cos(0.985647° · (n - 173))

        Args:
            day_of_year: Day number n

        Returns:
            Declination in degrees
        """
        return cls.MAX_DECLINATION * cos_deg(
            cls.DEGREES_PER_DAY * (day_of_year - cls.SUMMER_SOLSTICE_DAY)
        )

    @staticmethod
    def sunrise_hour_angle(declination_deg: float, latitude_deg: float) -> Optional[float]:
        """
        Sunrise hour angle from cos(hs) = -tan(δ)·tan(lat)

        Args:
            declination_deg: Solar declination δ
            latitude_deg: Observer latitude

        Returns:
            Magnitude hs > 0 of the sunrise hour angle in degrees (sunrise
            itself is at -hs), or None when the sun does not cross the
            horizon that day
        """
        cos_hs = -tan_deg(declination_deg) * tan_deg(latitude_deg)
        if cos_hs < -1.0 or cos_hs > 1.0:
            return None
        return acos_deg(cos_hs)

    @classmethod
    def day_length_hours(cls, sunrise_hour_angle_deg: float) -> float:
        """Hours between sunrise and sunset"""
        return 2.0 * abs(sunrise_hour_angle_deg) / cls.EARTH_ROTATION_RATE

    @classmethod
    def format_solar_time(cls, hour_angle_deg: float) -> str:
        """
        Convert an hour angle into apparent solar clock time

        12:00 corresponds to h = 0 and each 15° is one hour. The result is
        truncated to whole minutes.

        Args:
            hour_angle_deg: Hour angle h in degrees

        Returns:
            Time label "HH:MM"
        """
        hours = 12.0 + hour_angle_deg / cls.EARTH_ROTATION_RATE
        total_minutes = int(math.floor(hours * 60.0 + 1e-9)) % (24 * 60)
        hh, mm = divmod(total_minutes, 60)
        return f"{hh:02d}:{mm:02d}"

    @staticmethod
    def altitude(hour_angle_deg: float, declination_deg: float, latitude_deg: float) -> float:
        """
        Solar altitude β for a given hour angle

        sin(β) = cos(δ)cos(lat)cos(h) + sin(δ)sin(lat)

        Returns:
            Altitude in degrees, [-90, 90]
        """
        sin_beta = (cos_deg(declination_deg) * cos_deg(latitude_deg) * cos_deg(hour_angle_deg) +
                    sin_deg(declination_deg) * sin_deg(latitude_deg))
        return asin_deg(sin_beta)

    @classmethod
    def azimuth(cls, hour_angle_deg: float, altitude_deg: float,
                declination_deg: float, latitude_deg: float) -> float:
        """
        Solar azimuth γ for a given hour angle and altitude

        cos(γ) = (sin(δ)cos(lat) - cos(δ)sin(lat)cos(h)) / cos(β)

        The raw angle lies in [0, 180] (eastern half). Afternoon positions
        (h > 0) are mirrored to 360 - γ so azimuth keeps increasing through
        the day. With the sun at the zenith or nadir the direction is taken
        from the sign of (δ - lat) or of h respectively.

        Returns:
            Azimuth in degrees, North-referenced clockwise, [0, 360)
        """
        cos_beta = cos_deg(altitude_deg)

        if abs(cos_beta) < cls.ZENITH_TOLERANCE:
            if altitude_deg > 0:
                return 0.0 if declination_deg > latitude_deg else 180.0
            return 90.0 if hour_angle_deg < 0 else 270.0

        cos_gamma = (sin_deg(declination_deg) * cos_deg(latitude_deg) -
                     cos_deg(declination_deg) * sin_deg(latitude_deg) * cos_deg(hour_angle_deg)) / cos_beta
        gamma = acos_deg(cos_gamma)

        if hour_angle_deg > 0:
            gamma = 360.0 - gamma
        return gamma % 360.0

    def __init__(self, latitude_deg: float):
        """
        Initialize solar position calculator

        Args:
            latitude_deg: Observer latitude in degrees, positive North
        """
        self.latitude = latitude_deg

    def position(self, hour_angle_deg: float, declination_deg: float) -> Tuple[float, float]:
        """
        Altitude and azimuth of the sun at one hour angle

        Returns:
            Tuple of (altitude_deg, azimuth_deg)
        """
        beta = self.altitude(hour_angle_deg, declination_deg, self.latitude)
        gamma = self.azimuth(hour_angle_deg, beta, declination_deg, self.latitude)
        return beta, gamma

    def noon_altitude(self, declination_deg: float) -> float:
        """Altitude at solar noon (h = 0)"""
        return self.altitude(0.0, declination_deg, self.latitude)

    def trajectory(self, day: date, sample_count: int = SIMULATION_SAMPLE_COUNT) -> Optional[SolarTrajectory]:
        """
        Sample the sun's path from sunrise to sunset

        Hour angles are stepped linearly from -hs to +hs in
        sample_count - 1 equal increments.

        Args:
            day: Calendar date
            sample_count: Number of trajectory points (N >= 1)

        Returns:
            SolarTrajectory, or None for a polar day or night
        """
        n = self.day_of_year(day)
        delta = self.declination(n)
        hs = self.sunrise_hour_angle(delta, self.latitude)

        if hs is None:
            return None

        hour_angles = np.linspace(-hs, hs, sample_count)
        step = (2.0 * hs / (sample_count - 1)) if sample_count > 1 else 0.0

        points = []
        for i, h in enumerate(hour_angles, start=1):
            h = float(h)
            beta, gamma = self.position(h, delta)
            points.append(TrajectoryPoint(
                index=i,
                solar_time_label=self.format_solar_time(h),
                hour_angle_deg=h,
                altitude_deg=beta,
                azimuth_deg=gamma
            ))

        return SolarTrajectory(
            geo_date=GeoDate(date=day, latitude_deg=self.latitude),
            day_of_year=n,
            declination_deg=delta,
            sunrise_hour_angle_magnitude_deg=hs,
            hour_angle_step_deg=step,
            points=tuple(points)
        )


@lru_cache(maxsize=128)
def compute_trajectory(day: date, latitude_deg: float,
                       sample_count: int = SIMULATION_SAMPLE_COUNT) -> Optional[SolarTrajectory]:
    """
    Cached trajectory keyed by (date, latitude, sample_count)

    Returns:
        SolarTrajectory, or None for a polar day or night
    """
    return SolarPositionCalculator(latitude_deg).trajectory(day, sample_count)
