"""
Financial Projection Module

This module provides tools for projecting yearly savings, accumulated cash
flow and payback time from a daily energy yield.
"""

from .financial_projector import (
    FinancialParameters,
    FinancialYear,
    FinancialProjection,
    FinancialProjector,
)

__all__ = ["FinancialParameters", "FinancialYear", "FinancialProjection", "FinancialProjector"]
