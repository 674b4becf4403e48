"""
Data Export
===========

Handles export of simulated days in tabular formats.

Every export carries the same information: a header block describing the
site, date and panel, one row per trajectory point, the daily energy
summary and the yearly cash-flow table. A day without sunrise or sunset
is exported as a header with no data rather than partial rows.

Classes:
    DataExporter: CSV, JSON and Excel export
    ReportGenerator: Multi-format report package
"""

import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..config.data_formats import DataFormats, DataFormatType
from ..simulation.report import SimulationReport

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No solar trajectory: the sun does not rise or set on this date"


class DataExporter:
    """Main data export class"""

    FLOAT_FORMAT = "%.2f"
    CSV_ENCODING = "utf-8-sig"  # with BOM

    def __init__(self, export_dir: str = "exports"):
        """
        Initialize data exporter

        Args:
            export_dir: Directory receiving exported files
        """
        self.export_dir = Path(export_dir)
        self.export_dir.mkdir(parents=True, exist_ok=True)
        self.formats = DataFormats()

    def _resolve_path(self, report: SimulationReport, filename: Optional[str],
                      extension: str) -> Path:
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"solar_trajectory_{report.scenario_name}_{timestamp}.{extension}"
        path = Path(filename)
        if not path.is_absolute() and path.parent == Path("."):
            path = self.export_dir / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def metadata_frame(self, report: SimulationReport) -> pd.DataFrame:
        """Header block as a two-column Field/Value table"""
        meta = report.metadata
        entries = [
            ("Scenario", report.scenario_name),
            ("Location", meta.location_label),
            ("Date", meta.date),
            ("Latitude (°)", f"{meta.latitude_deg:.6f}"),
            ("Longitude (°)", f"{meta.longitude_deg:.6f}" if meta.longitude_deg is not None else ""),
            ("Panel inclination (°)", f"{meta.panel_inclination_deg:g}"),
            ("Panel azimuth (°, 0=N 180=S)", f"{meta.panel_azimuth_deg:g}"),
            ("Total points", str(len(report.rows()))),
        ]
        return pd.DataFrame(entries, columns=["Field", "Value"])

    def rows_frame(self, report: SimulationReport, use_headers: bool = True) -> pd.DataFrame:
        return self.formats.convert_to_dataframe("trajectory", report.rows(), use_headers=use_headers)

    def energy_frame(self, report: SimulationReport, use_headers: bool = True) -> pd.DataFrame:
        energy = report.energy_dict()
        return self.formats.convert_to_dataframe(
            "energy", [energy] if energy is not None else [], use_headers=use_headers
        )

    def financial_frame(self, report: SimulationReport, use_headers: bool = True) -> pd.DataFrame:
        return self.formats.convert_to_dataframe(
            "financial", report.financial_rows(), use_headers=use_headers
        )

    def generate_csv(self, report: SimulationReport) -> str:
        """
        Build the CSV document for a report

        Args:
            report: Simulation report

        Returns:
            CSV text: header block, point table, energy and cash-flow tables
        """
        buffer = io.StringIO()
        buffer.write("Solar Trajectory Export\n")
        self.metadata_frame(report).to_csv(buffer, index=False, header=False)
        buffer.write("\n")

        if not report.has_data:
            buffer.write(f"{NO_DATA_MESSAGE}\n")
            return buffer.getvalue()

        self.rows_frame(report).to_csv(buffer, index=False, float_format=self.FLOAT_FORMAT)
        buffer.write("\nDaily energy\n")
        self.energy_frame(report).to_csv(buffer, index=False, float_format=self.FLOAT_FORMAT)
        buffer.write("\nFinancial projection\n")
        self.financial_frame(report).to_csv(buffer, index=False, float_format=self.FLOAT_FORMAT)
        return buffer.getvalue()

    def export_csv(self, report: SimulationReport, filename: str = None) -> str:
        """
        Export a report to CSV format

        Args:
            report: Simulation report
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        filepath = self._resolve_path(report, filename, "csv")
        with open(filepath, 'w', encoding=self.CSV_ENCODING, newline='') as f:
            f.write(self.generate_csv(report))

        logger.info(f"CSV exported to {filepath}")
        return str(filepath)

    def export_json(self, report: SimulationReport, filename: str = None) -> str:
        """
        Export a report to JSON format

        Args:
            report: Simulation report
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        filepath = self._resolve_path(report, filename, "json")

        export_data = {
            'export_info': {
                'export_timestamp': datetime.now().isoformat(),
                'data_format_version': '1.0'
            },
            **report.to_dict()
        }
        if not report.has_data:
            export_data['message'] = NO_DATA_MESSAGE

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

        logger.info(f"JSON exported to {filepath}")
        return str(filepath)

    def export_excel(self, report: SimulationReport, filename: str = None) -> str:
        """
        Export a report to Excel format with multiple sheets

        Args:
            report: Simulation report
            filename: Optional custom filename

        Returns:
            Path to exported file
        """
        filepath = self._resolve_path(report, filename, "xlsx")

        with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
            self.metadata_frame(report).to_excel(writer, sheet_name='Project', index=False)

            if report.has_data:
                self.rows_frame(report).to_excel(writer, sheet_name='Trajectory', index=False)
                self.energy_frame(report).to_excel(writer, sheet_name='Energy', index=False)
                self.financial_frame(report).to_excel(writer, sheet_name='Financial', index=False)

                summary = report.financial_summary()
                summary_df = pd.DataFrame(list(summary.items()), columns=['Metric', 'Value'])
                summary_df.to_excel(writer, sheet_name='Summary', index=False)
            else:
                pd.DataFrame({'Message': [NO_DATA_MESSAGE]}).to_excel(
                    writer, sheet_name='Trajectory', index=False
                )

        logger.info(f"Excel exported to {filepath}")
        return str(filepath)


class ReportGenerator:
    """Automated multi-format report generation"""

    SUPPORTED_FORMATS = tuple(fmt.value for fmt in DataFormatType)

    def __init__(self, output_dir: str = "reports"):
        """Initialize report generator"""
        self.output_dir = Path(output_dir)
        self.exporter = DataExporter(str(self.output_dir))

    def generate_report_package(self, report: SimulationReport,
                                formats: List[str] = None) -> Dict[str, str]:
        """
        Generate a report package

        Args:
            report: Simulation report
            formats: Subset of SUPPORTED_FORMATS, all when omitted

        Returns:
            Dictionary with absolute paths to generated files
        """
        formats = list(formats or self.SUPPORTED_FORMATS)
        unknown = [fmt for fmt in formats if fmt not in self.SUPPORTED_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported export format(s): {', '.join(unknown)}")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_dir = self.output_dir / f"report_{report.scenario_name}_{timestamp}"
        report_dir.mkdir(parents=True, exist_ok=True)

        generated_files = {}
        if DataFormatType.CSV.value in formats:
            generated_files['csv'] = self.exporter.export_csv(report, str(report_dir / "data.csv"))
        if DataFormatType.JSON.value in formats:
            generated_files['json'] = self.exporter.export_json(report, str(report_dir / "data.json"))
        if DataFormatType.EXCEL.value in formats:
            generated_files['excel'] = self.exporter.export_excel(report, str(report_dir / "data.xlsx"))
        if DataFormatType.PDF.value in formats:
            from .pdf_reports import PDFReportGenerator
            generated_files['pdf'] = PDFReportGenerator(str(report_dir)).generate_report(
                report, str(report_dir / "report.pdf")
            )

        summary_file = report_dir / "summary.txt"
        self._generate_text_summary(report, summary_file)
        generated_files['summary'] = str(summary_file)

        return {key: str(Path(value).absolute()) for key, value in generated_files.items()}

    def _generate_text_summary(self, report: SimulationReport, filepath: Path):
        """Generate text summary report"""
        meta = report.metadata
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write("SOLAR PANEL DAILY YIELD REPORT\n")
            f.write("=" * 50 + "\n\n")
            f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"Scenario: {report.scenario_name}\n")
            f.write(f"Location: {meta.location_label} ({meta.latitude_deg:.4f}°)\n")
            f.write(f"Date: {meta.date}\n")
            f.write(f"Panel: {meta.panel_inclination_deg:g}° tilt, "
                    f"{meta.panel_azimuth_deg:g}° azimuth\n\n")

            if not report.has_data:
                f.write(f"{NO_DATA_MESSAGE}\n")
                return

            trajectory = report.trajectory_summary()
            f.write("SUN PATH\n")
            f.write("-" * 8 + "\n")
            f.write(f"Sunrise: {trajectory['sunrise']}  Sunset: {trajectory['sunset']}\n")
            f.write(f"Day length: {trajectory['day_length_hours']:.2f} h\n")
            f.write(f"Peak altitude: {trajectory['peak_altitude_deg']:.2f}°\n\n")

            energy = report.energy_dict()
            f.write("DAILY ENERGY\n")
            f.write("-" * 12 + "\n")
            f.write(f"Total energy: {energy['total_kwh']:.3f} kWh\n")
            f.write(f"Peak power: {energy['peak_w']:.1f} W\n")
            f.write(f"Generation hours: {energy['active_hours']:.2f} h\n\n")

            summary = report.financial_summary()
            f.write("FINANCIAL PROJECTION\n")
            f.write("-" * 20 + "\n")
            f.write(f"Annual savings: ${summary['annual_savings']:.2f}\n")
            if summary['payback_years'] is not None:
                f.write(f"Payback: {summary['payback_years']:.1f} years (year {summary['payback_year']})\n")
            else:
                f.write("Payback: not reached within the projection\n")
            f.write(f"Accumulated cash flow: ${summary['final_cash_flow']:.2f}\n")
