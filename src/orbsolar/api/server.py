"""
API Server
==========

Flask-based REST API server for the solar yield application.

Provides endpoints for scenario templates, trajectory and free-mode
incidence evaluation, full-day simulation and report downloads for the
web frontend.

Routes:
    GET /api/health - Liveness and version
    GET /api/scenarios - List scenario templates
    GET /api/scenarios/{name} - Get one scenario template
    POST /api/trajectory - Sun trajectory for a date and latitude
    POST /api/incidence - Free-mode incidence for one sun position
    POST /api/simulation - Run a full scenario
    POST /api/export/{format} - Download a report (csv, json, excel, pdf)
"""

import io
import logging
import tempfile
from datetime import date, datetime
from pathlib import Path

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .. import __version__
from ..config.scenario_config import ScenarioConfig, SimulationConfig
from ..panel.panel_geometry import AzimuthConvention, PanelGeometryResolver, PanelOrientation
from ..simulation.report import run_scenario
from ..solar.solar_position import SIMULATION_SAMPLE_COUNT, compute_trajectory
from ..visualization.data_export import DataExporter
from ..visualization.pdf_reports import PDFReportGenerator

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend

scenario_config = ScenarioConfig()
resolver = PanelGeometryResolver()

EXPORT_MIMETYPES = {
    'csv': ('text/csv', 'csv'),
    'json': ('application/json', 'json'),
    'excel': ('application/vnd.openxmlformats-officedocument.spreadsheetml.sheet', 'xlsx'),
    'pdf': ('application/pdf', 'pdf')
}


class TrajectoryRequest(BaseModel):
    """Body of POST /api/trajectory"""
    model_config = ConfigDict(extra="forbid")

    date: date
    latitude_deg: float = Field(..., ge=-90, le=90)
    sample_count: int = Field(SIMULATION_SAMPLE_COUNT, ge=1, le=10000)


class IncidenceRequest(BaseModel):
    """Body of POST /api/incidence"""
    model_config = ConfigDict(extra="forbid")

    altitude_deg: float = Field(..., ge=-90, le=90)
    azimuth_deg: float
    inclination_deg: float = Field(..., ge=0, le=90)
    panel_azimuth_deg: float
    azimuth_convention: AzimuthConvention = AzimuthConvention.NORTH_CLOCKWISE


def _bad_request(message):
    return jsonify({
        'success': False,
        'error': message
    }), 400


def _server_error(e: Exception):
    logger.exception(f"Request to {request.path} failed")
    return jsonify({
        'success': False,
        'error': str(e)
    }), 500


def _validation_message(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
    )


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


# API Routes
@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': __version__
    })


@app.route('/api/scenarios', methods=['GET'])
def get_scenarios():
    """Get all available scenario templates"""
    try:
        scenarios_data = []
        for name in scenario_config.list_templates():
            config = scenario_config.create_from_template(name)
            scenarios_data.append({
                'id': name,
                'name': config.scenario_name,
                'description': config.description,
                'type': 'template',
                'summary': scenario_config.generate_config_summary(config)
            })

        return jsonify({
            'success': True,
            'scenarios': scenarios_data
        })

    except Exception as e:
        return _server_error(e)


@app.route('/api/scenarios/<scenario_name>', methods=['GET'])
def get_scenario_details(scenario_name: str):
    """Get the full configuration of one template"""
    try:
        if scenario_name not in scenario_config.templates:
            return jsonify({
                'success': False,
                'error': f'Scenario not found: {scenario_name}'
            }), 404

        config = scenario_config.create_from_template(scenario_name)
        return jsonify({
            'success': True,
            'scenario': config.model_dump(mode="json")
        })

    except Exception as e:
        return _server_error(e)


@app.route('/api/trajectory', methods=['POST'])
def get_trajectory():
    """Sun trajectory for a date and latitude"""
    data = _json_body()
    if data is None:
        return _bad_request('No data provided')

    try:
        params = TrajectoryRequest(**data)
    except ValidationError as e:
        return _bad_request(_validation_message(e))

    try:
        trajectory = compute_trajectory(params.date, params.latitude_deg, params.sample_count)
        if trajectory is None:
            return jsonify({
                'success': True,
                'trajectory': None,
                'message': 'The sun does not rise or set on this date at this latitude'
            })

        return jsonify({
            'success': True,
            'trajectory': {
                'day_of_year': trajectory.day_of_year,
                'declination_deg': trajectory.declination_deg,
                'sunrise_hour_angle_deg': trajectory.sunrise_hour_angle_deg,
                'sunset_hour_angle_deg': trajectory.sunset_hour_angle_deg,
                'hour_angle_step_deg': trajectory.hour_angle_step_deg,
                'sunrise': trajectory.sunrise_label,
                'sunset': trajectory.sunset_label,
                'day_length_hours': trajectory.day_length_hours,
                'points': [
                    {
                        'index': point.index,
                        'solar_time': point.solar_time_label,
                        'hour_angle_deg': point.hour_angle_deg,
                        'altitude_deg': point.altitude_deg,
                        'azimuth_deg': point.azimuth_deg
                    }
                    for point in trajectory.points
                ]
            }
        })

    except Exception as e:
        return _server_error(e)


@app.route('/api/incidence', methods=['POST'])
def get_incidence():
    """Free-mode evaluation of one manually placed sun"""
    data = _json_body()
    if data is None:
        return _bad_request('No data provided')

    try:
        params = IncidenceRequest(**data)
    except ValidationError as e:
        return _bad_request(_validation_message(e))

    try:
        orientation = PanelOrientation.from_convention(
            params.inclination_deg, params.panel_azimuth_deg, params.azimuth_convention
        )
        geometry = resolver.evaluate_free_mode(
            params.altitude_deg, params.azimuth_deg, orientation, params.azimuth_convention
        )
        return jsonify({
            'success': True,
            'panel_azimuth_deg': orientation.azimuth_deg,
            'wall_solar_azimuth_deg': geometry.wall_solar_azimuth_deg,
            'incidence_angle_deg': geometry.incidence_angle_deg,
            'efficiency_pct': geometry.efficiency_pct
        })

    except Exception as e:
        return _server_error(e)


@app.route('/api/simulation', methods=['POST'])
def run_simulation():
    """Run a full scenario and return rows, energy and financial projection"""
    data = _json_body()
    if data is None:
        return _bad_request('No data provided')

    try:
        config = SimulationConfig(**data)
    except ValidationError as e:
        return _bad_request(_validation_message(e))

    try:
        report = run_scenario(config)
        logger.info(f"Simulated {config.scenario_name}: has_data={report.has_data}")
        return jsonify({
            'success': True,
            'results': report.to_dict()
        })

    except Exception as e:
        return _server_error(e)


@app.route('/api/export/<export_format>', methods=['POST'])
def export_report(export_format: str):
    """Run a scenario and download the report in the requested format"""
    if export_format not in EXPORT_MIMETYPES:
        return _bad_request(f'Unsupported export format: {export_format}')

    data = _json_body()
    if data is None:
        return _bad_request('No data provided')

    try:
        config = SimulationConfig(**data)
    except ValidationError as e:
        return _bad_request(_validation_message(e))

    try:
        report = run_scenario(config)
        mimetype, extension = EXPORT_MIMETYPES[export_format]
        download_name = f"solar_trajectory_{config.site.date.isoformat()}.{extension}"

        with tempfile.TemporaryDirectory() as tmp_dir:
            target = str(Path(tmp_dir) / download_name)
            if export_format == 'pdf':
                file_path = PDFReportGenerator(tmp_dir).generate_report(report, target)
            else:
                exporter = DataExporter(tmp_dir)
                writer = {
                    'csv': exporter.export_csv,
                    'json': exporter.export_json,
                    'excel': exporter.export_excel
                }[export_format]
                file_path = writer(report, target)
            payload = Path(file_path).read_bytes()

        return send_file(
            io.BytesIO(payload),
            mimetype=mimetype,
            as_attachment=True,
            download_name=download_name
        )

    except Exception as e:
        return _server_error(e)


def create_app():
    """Create and configure Flask app"""
    return app


def run_server(host='127.0.0.1', port=5000, debug=False):
    """Run the API server"""
    logging.basicConfig(level=logging.INFO)
    logger.info(f"Starting API server on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_server(debug=True)
