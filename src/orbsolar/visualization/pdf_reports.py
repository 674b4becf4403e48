"""
PDF Report Generation
====================

Generates the technical viability report for a simulated day.

The report contains the project configuration, the daily energy analysis,
the financial projection, the power generation curve and the per-point
simulation detail.

Classes:
    PDFReportGenerator: Main PDF report generation class
    ReportSections: Individual report section generators
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List

from reportlab.graphics.charts.lineplots import LinePlot
from reportlab.graphics.shapes import Drawing, String
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..simulation.report import SimulationReport
from .data_export import NO_DATA_MESSAGE

logger = logging.getLogger(__name__)


HEADER_TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f59e0b')),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
    ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
    ('BACKGROUND', (0, 1), (-1, -1), colors.HexColor('#fffbeb')),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey)
])

PLAIN_TABLE_STYLE = TableStyle([
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 9),
    ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#f3f4f6')),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey)
])


def _money(value) -> str:
    return f"${value:,.2f}" if value is not None else "n/a"


class ReportSections:
    """Generates individual sections of the PDF report"""

    def __init__(self, styles=None):
        """Initialize report sections"""
        self.styles = styles or getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            'OrbTitle',
            parent=self.styles['Heading1'],
            fontSize=20,
            spaceAfter=6,
            textColor=colors.HexColor('#b45309')
        )
        self.heading_style = ParagraphStyle(
            'OrbHeading',
            parent=self.styles['Heading2'],
            fontSize=13,
            spaceBefore=12,
            spaceAfter=8,
            textColor=colors.HexColor('#1f2937')
        )

    def generate_header(self, report: SimulationReport) -> List:
        content = [
            Paragraph("Orb Solar Simulation", self.title_style),
            Paragraph("Solar Viability Technical Report", self.styles['Heading3']),
            Paragraph(f"Report date: {datetime.now().strftime('%Y-%m-%d')}", self.styles['Normal']),
            Spacer(1, 0.2*inch)
        ]
        return content

    def generate_project_section(self, report: SimulationReport) -> List:
        """Site, date and panel configuration"""
        meta = report.metadata
        longitude = f"{meta.longitude_deg:.4f}°" if meta.longitude_deg is not None else "n/a"
        data = [
            ['Location', meta.location_label],
            ['Coordinates', f"Lat {meta.latitude_deg:.4f}°, Lng {longitude}"],
            ['Simulation date', meta.date],
            ['Panel inclination', f"{meta.panel_inclination_deg:g}°"],
            ['Panel azimuth', f"{meta.panel_azimuth_deg:g}° (0°=North, 180°=South)"],
            ['Trajectory points', str(meta.sample_count)]
        ]
        table = Table(data, colWidths=[2*inch, 4*inch])
        table.setStyle(PLAIN_TABLE_STYLE)
        return [Paragraph("1. Project Configuration", self.heading_style), table]

    def generate_energy_section(self, report: SimulationReport) -> List:
        """Daily energy and financial tables"""
        energy = report.energy_dict()
        trajectory = report.trajectory_summary()
        summary = report.financial_summary()

        energy_data = [
            ['Metric', 'Value'],
            ['Total daily energy', f"{energy['total_kwh']:.3f} kWh"],
            ['Peak power', f"{energy['peak_w']:.1f} W"],
            ['Generation hours', f"{energy['active_hours']:.2f} h"],
            ['Sunrise / sunset', f"{trajectory['sunrise']} / {trajectory['sunset']}"],
            ['Peak sun altitude', f"{trajectory['peak_altitude_deg']:.2f}°"]
        ]
        energy_table = Table(energy_data, colWidths=[3*inch, 3*inch])
        energy_table.setStyle(HEADER_TABLE_STYLE)

        payback = (f"{summary['payback_years']:.1f} years"
                   if summary['payback_years'] is not None else "Not reached")
        financial_data = [
            ['Financial metric', 'Projection'],
            ['Daily savings', _money(summary['daily_savings'])],
            ['Monthly savings', _money(summary['monthly_savings'])],
            ['Annual savings', _money(summary['annual_savings'])],
            ['Payback period', payback],
            ['Simple payback (cost / annual savings)',
             f"{summary['simple_payback_years']:.1f} years"
             if summary['simple_payback_years'] is not None else "n/a"],
            ['Accumulated cash flow', _money(summary['final_cash_flow'])]
        ]
        financial_table = Table(financial_data, colWidths=[3*inch, 3*inch])
        financial_table.setStyle(HEADER_TABLE_STYLE)

        return [
            Paragraph("2. Energy Analysis (Daily)", self.heading_style),
            energy_table,
            Spacer(1, 0.2*inch),
            financial_table
        ]

    def generate_cash_flow_table(self, report: SimulationReport) -> List:
        data = [['Year', 'Annual savings', 'Accumulated cash flow']]
        for row in report.financial_rows():
            data.append([
                str(row['year']),
                _money(row['annual_savings']),
                _money(row['accumulated_cash_flow'])
            ])
        table = Table(data, colWidths=[1*inch, 2.5*inch, 2.5*inch], repeatRows=1)
        table.setStyle(HEADER_TABLE_STYLE)
        return [Spacer(1, 0.2*inch), table]

    def generate_power_curve(self, report: SimulationReport) -> List:
        """Power output against point index"""
        rows = report.rows()
        drawing = Drawing(6*inch, 2.6*inch)

        plot = LinePlot()
        plot.x = 40
        plot.y = 30
        plot.width = 6*inch - 60
        plot.height = 2.6*inch - 50
        plot.data = [[(row['index'], row['power_output_w']) for row in rows]]
        plot.lines[0].strokeColor = colors.HexColor('#f59e0b')
        plot.lines[0].strokeWidth = 1.5
        plot.xValueAxis.valueMin = 1
        plot.xValueAxis.valueMax = max(len(rows), 2)
        plot.yValueAxis.valueMin = 0
        plot.yValueAxis.valueMax = max(max(row['power_output_w'] for row in rows), 1.0) * 1.1
        plot.xValueAxis.labelTextFormat = lambda v: self._time_label(rows, v)
        drawing.add(plot)
        drawing.add(String(40, 2.6*inch - 12, "Power output (W) over solar time", fontSize=9))

        return [Paragraph("3. Power Generation Curve", self.heading_style), drawing]

    @staticmethod
    def _time_label(rows, value) -> str:
        position = int(round(value)) - 1
        if 0 <= position < len(rows):
            return rows[position]['solar_time']
        return ""

    def generate_detail_section(self, report: SimulationReport) -> List:
        """Per-point detail table"""
        data = [['#', 'Solar time', 'Altitude', 'Incidence', 'Irradiance (W/m²)', 'Panel temp', 'Power']]
        for row in report.rows():
            data.append([
                str(row['index']),
                row['solar_time'],
                f"{row['altitude_deg']:.1f}°",
                f"{row['incidence_angle_deg']:.1f}°",
                f"{row['incident_radiation_wm2']:.0f}",
                f"{row['panel_temp_c']:.1f} °C",
                f"{row['power_output_w']:.1f} W"
            ])
        table = Table(data, repeatRows=1)
        table.setStyle(HEADER_TABLE_STYLE)
        return [Paragraph("4. Simulation Detail", self.heading_style), table]

    def generate_no_data_section(self) -> List:
        return [
            Paragraph("2. Energy Analysis (Daily)", self.heading_style),
            Paragraph(NO_DATA_MESSAGE, self.styles['Normal'])
        ]


class PDFReportGenerator:
    """
    PDF technical report generator.

    Features:
    - Project configuration header
    - Daily energy and financial tables
    - Power generation curve drawn with reportlab graphics
    - Per-point simulation detail and yearly cash flow
    """

    def __init__(self, output_dir: str = "reports"):
        """Initialize PDF report generator"""
        self.output_dir = Path(output_dir)
        self.sections = ReportSections()

    def generate_report(self, report: SimulationReport, filename: str = None) -> str:
        """
        Generate the PDF report

        Args:
            report: Simulation report
            filename: Optional custom filename or path

        Returns:
            Path to generated PDF file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"solar_report_{report.scenario_name}_{timestamp}.pdf"

        filepath = Path(filename)
        if not filepath.is_absolute() and filepath.parent == Path("."):
            filepath = self.output_dir / filepath
        filepath.parent.mkdir(parents=True, exist_ok=True)

        doc = SimpleDocTemplate(str(filepath), pagesize=A4,
                                rightMargin=54, leftMargin=54,
                                topMargin=54, bottomMargin=36,
                                title=f"Solar report - {report.scenario_name}")
        doc.build(self.build_story(report), onFirstPage=self._page_footer,
                  onLaterPages=self._page_footer)

        logger.info(f"PDF report written to {filepath}")
        return str(filepath)

    def build_story(self, report: SimulationReport) -> List:
        """Flowables for the whole document"""
        content = []
        content.extend(self.sections.generate_header(report))
        content.extend(self.sections.generate_project_section(report))

        if not report.has_data:
            content.extend(self.sections.generate_no_data_section())
            return content

        content.extend(self.sections.generate_energy_section(report))
        content.extend(self.sections.generate_cash_flow_table(report))
        content.append(PageBreak())
        content.extend(self.sections.generate_power_curve(report))
        content.extend(self.sections.generate_detail_section(report))
        return content

    @staticmethod
    def _page_footer(canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.drawCentredString(A4[0] / 2, 20, f"Page {doc.page}")
        canvas.restoreState()
