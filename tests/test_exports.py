"""
Tests for CSV, JSON, Excel and PDF exports and interactive plots.
"""

import json
import sys
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import pytest
from reportlab.platypus import PageBreak

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.config import DataFormatType, ScenarioConfig
from orbsolar.simulation import run_scenario
from orbsolar.visualization import DataExporter, InteractivePlots, PDFReportGenerator, ReportGenerator
from orbsolar.visualization.data_export import NO_DATA_MESSAGE


@pytest.fixture(scope="module")
def reports():
    manager = ScenarioConfig()
    return {
        name: run_scenario(manager.create_from_template(name))
        for name in ("Mexico_City_Summer", "Polar_Night")
    }


@pytest.fixture
def daylight(reports):
    return reports["Mexico_City_Summer"]


@pytest.fixture
def polar(reports):
    return reports["Polar_Night"]


class TestCSVExport:
    """Test the CSV document layout"""

    def test_layout(self, daylight, tmp_path):
        csv_text = DataExporter(str(tmp_path)).generate_csv(daylight)
        lines = csv_text.splitlines()

        assert lines[0] == "Solar Trajectory Export"
        assert "Location,Mexico City" in lines
        assert "Date,2025-06-21" in lines
        assert "Total points,100" in lines
        assert "Daily energy" in lines
        assert "Financial projection" in lines
        assert NO_DATA_MESSAGE not in csv_text

    def test_two_decimal_values(self, daylight, tmp_path):
        path = DataExporter(str(tmp_path)).export_csv(daylight, "day.csv")
        content = Path(path).read_text(encoding="utf-8-sig")

        header_index = next(i for i, line in enumerate(content.splitlines()) if line.startswith("Point,"))
        first_row = content.splitlines()[header_index + 1].split(",")
        assert first_row[0] == "1"
        assert first_row[1] == daylight.trajectory_summary()["sunrise"]
        assert all(len(value.split(".")[1]) == 2 for value in first_row[2:] if "." in value)

    def test_written_with_bom(self, daylight, tmp_path):
        path = DataExporter(str(tmp_path)).export_csv(daylight, "day.csv")
        assert Path(path).read_bytes().startswith(b"\xef\xbb\xbf")

    def test_no_data(self, polar, tmp_path):
        path = DataExporter(str(tmp_path)).export_csv(polar, "polar.csv")
        content = Path(path).read_text(encoding="utf-8-sig")

        assert "Location,Svalbard" in content
        assert NO_DATA_MESSAGE in content
        assert "Daily energy" not in content

    def test_default_filename(self, daylight, tmp_path):
        path = Path(DataExporter(str(tmp_path)).export_csv(daylight))
        assert path.parent == tmp_path
        assert path.name.startswith("solar_trajectory_Mexico_City_Summer_")


class TestJSONExport:
    """Test the JSON export"""

    def test_content(self, daylight, tmp_path):
        path = DataExporter(str(tmp_path)).export_json(daylight, "day.json")
        data = json.loads(Path(path).read_text(encoding="utf-8"))

        assert data["scenario_name"] == "Mexico_City_Summer"
        assert data["has_data"] is True
        assert len(data["rows"]) == 100
        assert data["energy"]["total_kwh"] == pytest.approx(daylight.day.energy.total_kwh)
        assert len(data["financial"]["years"]) == 20
        assert "export_timestamp" in data["export_info"]

    def test_no_data(self, polar, tmp_path):
        path = DataExporter(str(tmp_path)).export_json(polar, "polar.json")
        data = json.loads(Path(path).read_text(encoding="utf-8"))

        assert data["has_data"] is False
        assert data["rows"] == []
        assert data["energy"] is None
        assert data["message"] == NO_DATA_MESSAGE


class TestExcelExport:
    """Test the Excel workbook"""

    def test_sheets(self, daylight, tmp_path):
        path = DataExporter(str(tmp_path)).export_excel(daylight, "day.xlsx")
        sheets = pd.read_excel(path, sheet_name=None)

        assert list(sheets) == ["Project", "Trajectory", "Energy", "Financial", "Summary"]
        assert len(sheets["Trajectory"]) == 100
        assert len(sheets["Financial"]) == 20
        assert "Power Pt (W)" in sheets["Trajectory"].columns

    def test_no_data(self, polar, tmp_path):
        path = DataExporter(str(tmp_path)).export_excel(polar, "polar.xlsx")
        sheets = pd.read_excel(path, sheet_name=None)

        assert list(sheets) == ["Project", "Trajectory"]
        assert sheets["Trajectory"]["Message"][0] == NO_DATA_MESSAGE


class TestPDFReport:
    """Test PDF generation"""

    def test_generates_pdf(self, daylight, tmp_path):
        path = PDFReportGenerator(str(tmp_path)).generate_report(daylight, "report.pdf")
        assert Path(path).read_bytes().startswith(b"%PDF")

    def test_no_data_pdf(self, polar, tmp_path):
        generator = PDFReportGenerator(str(tmp_path))
        story = generator.build_story(polar)
        path = generator.generate_report(polar, "polar.pdf")

        assert Path(path).read_bytes().startswith(b"%PDF")
        assert any(getattr(flowable, "text", None) == NO_DATA_MESSAGE for flowable in story)
        assert not any(isinstance(flowable, PageBreak) for flowable in story)


class TestReportPackage:
    """Test multi-format packages"""

    def test_all_formats(self, daylight, tmp_path):
        files = ReportGenerator(str(tmp_path)).generate_report_package(daylight)

        assert set(files) == {"csv", "json", "excel", "pdf", "summary"}
        for path in files.values():
            assert Path(path).is_absolute()
            assert Path(path).exists()

        summary = Path(files["summary"]).read_text(encoding="utf-8")
        assert "Mexico City" in summary
        assert "DAILY ENERGY" in summary

    def test_subset(self, polar, tmp_path):
        files = ReportGenerator(str(tmp_path)).generate_report_package(polar, ["csv"])

        assert set(files) == {"csv", "summary"}
        assert NO_DATA_MESSAGE in Path(files["summary"]).read_text(encoding="utf-8")

    def test_unknown_format(self, daylight, tmp_path):
        with pytest.raises(ValueError):
            ReportGenerator(str(tmp_path)).generate_report_package(daylight, ["docx"])

    def test_supported_formats_follow_format_types(self):
        assert ReportGenerator.SUPPORTED_FORMATS == tuple(fmt.value for fmt in DataFormatType)
        assert ReportGenerator.SUPPORTED_FORMATS == ("csv", "json", "excel", "pdf")


class TestInteractivePlots:
    """Test plotly figure construction"""

    @pytest.fixture
    def plotter(self):
        return InteractivePlots()

    def test_report_figures(self, plotter, daylight):
        for build in (plotter.plot_sun_path, plotter.plot_incidence, plotter.plot_power_curve,
                      plotter.plot_cash_flow, plotter.create_dashboard):
            fig = build(daylight)
            assert isinstance(fig, go.Figure)
            assert len(fig.data) > 0

    def test_empty_figures(self, plotter, polar):
        for build in (plotter.plot_sun_path, plotter.plot_power_curve, plotter.create_dashboard):
            fig = build(polar)
            assert len(fig.data) == 0
            assert fig.layout.annotations[0].text == "No solar trajectory for this date"

    def test_compare_scenarios(self, plotter, reports):
        fig = plotter.compare_scenarios(reports)
        bars = [trace for trace in fig.data if isinstance(trace, go.Bar)]

        assert len(bars) == 1
        assert list(bars[0].x) == ["Mexico_City_Summer", "Polar_Night"]
        assert bars[0].y[1] == 0.0

    def test_export_html(self, plotter, daylight, tmp_path):
        path = tmp_path / "power.html"
        plotter.export_plot(plotter.plot_power_curve(daylight), str(path))
        assert path.exists()

    def test_export_unknown_format(self, plotter, daylight, tmp_path):
        with pytest.raises(ValueError):
            plotter.export_plot(plotter.plot_power_curve(daylight), str(tmp_path / "x.bmp"), format="bmp")
