"""
Visualization Module

This module provides tabular export, PDF reports and interactive plots for
simulated solar days.
"""

from .data_export import DataExporter, ReportGenerator
from .pdf_reports import PDFReportGenerator
from .interactive_plots import InteractivePlots

__all__ = ["DataExporter", "ReportGenerator", "PDFReportGenerator", "InteractivePlots"]
