"""
Financial Projector Module

This module turns the daily energy yield of a panel into a multi-year
cash-flow projection: yearly savings with compounded output
degradation, accumulated cash flow starting from the negative system cost,
and the payback year.

The daily energy is assumed representative of every day of the year. The
projection is a simple savings estimate, not a discounted cash-flow model.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class FinancialParameters:
    """Tariff, cost and degradation inputs for a projection"""
    tariff_per_kwh: float           # Electricity price ($/kWh)
    system_cost: float              # Up-front installed cost ($)
    degradation_rate: float = 0.0   # Yearly output loss fraction
    projection_years: int = 20
    days_per_year: int = 365
    days_per_month: int = 30


@dataclass(frozen=True)
class FinancialYear:
    """Savings and cash position for one projection year"""
    year: int                       # 1-based
    annual_savings: float           # Savings during this year ($)
    accumulated_cash_flow: float    # Cash position at year end ($)


@dataclass(frozen=True)
class FinancialProjection:
    """Complete multi-year projection"""
    years: Tuple[FinancialYear, ...]
    payback_year: Optional[int]             # First year with positive cash position
    payback_years: Optional[float]          # Interpolated break-even time (years)
    simple_payback_years: Optional[float]   # system_cost / first-year savings
    daily_savings: float
    monthly_savings: float
    annual_savings: float                   # First-year savings
    total_savings: float

    @property
    def final_cash_flow(self) -> float:
        return self.years[-1].accumulated_cash_flow if self.years else 0.0


class FinancialProjector:
    """
    Multi-year savings and payback projection.

    Features:
    - Yearly savings with compounded output degradation
    - Accumulated cash flow from the initial investment
    - Payback year and interpolated break-even time
    - Daily/monthly/annual savings summary
    """

    def __init__(self, parameters: FinancialParameters):
        """
        Initialize financial projector

        Args:
            parameters: Tariff, cost and degradation inputs
        """
        self.parameters = parameters

    def degradation_factor(self, year: int) -> float:
        """Output factor (1 - rate)^(year - 1) for a 1-based year"""
        return (1.0 - self.parameters.degradation_rate) ** (year - 1)

    def cash_flow(self, daily_energy_kwh: float) -> Tuple[FinancialYear, ...]:
        """
        Yearly savings and accumulated cash flow

        Args:
            daily_energy_kwh: Representative daily energy yield (kWh)

        Returns:
            One FinancialYear per projection year
        """
        p = self.parameters
        base_savings = daily_energy_kwh * p.tariff_per_kwh * p.days_per_year
        accumulated = -p.system_cost

        years = []
        for year in range(1, p.projection_years + 1):
            savings = base_savings * self.degradation_factor(year)
            accumulated += savings
            years.append(FinancialYear(
                year=year,
                annual_savings=savings,
                accumulated_cash_flow=accumulated
            ))
        return tuple(years)

    @staticmethod
    def payback_year(years: Tuple[FinancialYear, ...]) -> Optional[int]:
        """
        First year whose accumulated flow turns positive

        Returns:
            Year number, or None if the investment is not recovered
        """
        for entry in years:
            previous = entry.accumulated_cash_flow - entry.annual_savings
            if entry.accumulated_cash_flow > 0 and previous <= 0:
                return entry.year
        return None

    @staticmethod
    def interpolated_payback(years: Tuple[FinancialYear, ...],
                             payback_year: Optional[int]) -> Optional[float]:
        """Break-even time assuming savings accrue evenly inside the payback year"""
        if payback_year is None:
            return None
        entry = years[payback_year - 1]
        previous = entry.accumulated_cash_flow - entry.annual_savings
        return (payback_year - 1) + (-previous / entry.annual_savings)

    def project(self, daily_energy_kwh: Optional[float]) -> Optional[FinancialProjection]:
        """
        Full projection from a daily energy yield

        Args:
            daily_energy_kwh: Daily energy (kWh), or None when no trajectory
                exists for the day

        Returns:
            FinancialProjection, or None with no energy data
        """
        if daily_energy_kwh is None:
            return None

        p = self.parameters
        years = self.cash_flow(daily_energy_kwh)
        payback = self.payback_year(years)

        daily_savings = daily_energy_kwh * p.tariff_per_kwh
        annual_savings = years[0].annual_savings if years else 0.0
        simple_payback = p.system_cost / annual_savings if annual_savings > 0 else None

        return FinancialProjection(
            years=years,
            payback_year=payback,
            payback_years=self.interpolated_payback(years, payback),
            simple_payback_years=simple_payback,
            daily_savings=daily_savings,
            monthly_savings=daily_savings * p.days_per_month,
            annual_savings=annual_savings,
            total_savings=sum(entry.annual_savings for entry in years)
        )
