"""
Orb Solar Simulation - Main Interface

This module provides the main interface for the solar yield analysis system.
It integrates all modules and provides a high-level API for running
simulations, managing scenarios, and generating results.

Usage:
    from orbsolar.main import SolarYieldModel

    model = SolarYieldModel()
    model.create_scenario_from_template('Mexico_City_Summer')
    results = model.run_simulation()
    model.plot_results()
    model.export_results('results/')
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config.scenario_config import ScenarioConfig, SimulationConfig
from .panel.panel_geometry import AzimuthConvention, PanelGeometryResolver, PanelOrientation
from .simulation.report import SimulationReport, run_scenario
from .visualization.data_export import ReportGenerator
from .visualization.interactive_plots import InteractivePlots


# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class SolarYieldModel:
    """
    Main interface for daily solar yield analysis.

    This class provides a high-level API for running a complete simulated
    day, from scenario configuration to visualization and export.

    Features:
    - Complete simulation workflow
    - Scenario templates and file-based configuration
    - Free-mode incidence evaluation
    - Interactive visualizations
    - CSV/JSON/Excel/PDF export
    - Scenario comparison
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 log_level: str = "INFO"):
        """
        Initialize solar yield model

        Args:
            config: Simulation configuration
            log_level: Logging level
        """
        logger.setLevel(getattr(logging, log_level.upper()))

        self.config = config
        self.scenario_manager = ScenarioConfig()
        self.resolver = PanelGeometryResolver()
        self.plotter = InteractivePlots()

        self.report: Optional[SimulationReport] = None
        self.simulation_time: Optional[float] = None

        self.is_initialized = config is not None
        self.is_simulation_complete = False

    def load_scenario(self, filepath: str) -> bool:
        """
        Load simulation scenario from file

        Args:
            filepath: Path to configuration file

        Returns:
            True if successful
        """
        try:
            logger.info(f"Loading scenario from {filepath}")
            self._set_config(self.scenario_manager.load_config(filepath))
            logger.info("Scenario loaded successfully")
            return True

        except Exception as e:
            logger.error(f"Failed to load scenario: {e}")
            return False

    def create_scenario_from_template(self, template_name: str, **kwargs) -> bool:
        """
        Create scenario from predefined template

        Args:
            template_name: Name of template
            **kwargs: Configuration overrides

        Returns:
            True if successful
        """
        try:
            logger.info(f"Creating scenario from template: {template_name}")
            self._set_config(self.scenario_manager.create_from_template(template_name, **kwargs))
            logger.info("Scenario created successfully")
            return True

        except Exception as e:
            logger.error(f"Failed to create scenario: {e}")
            return False

    def _set_config(self, config: SimulationConfig):
        self.config = config
        self.report = None
        self.is_initialized = True
        self.is_simulation_complete = False

    def run_simulation(self) -> SimulationReport:
        """
        Run the configured day through the full pipeline

        Returns:
            Simulation report; its day and financial parts are None when
            the sun does not rise or set on the configured date
        """
        if not self.is_initialized:
            raise ValueError("Model not initialized. Load a scenario first.")

        logger.info(f"Starting simulation of {self.config.scenario_name}...")
        start_time = datetime.now()

        try:
            self.report = run_scenario(self.config)
            self.simulation_time = (datetime.now() - start_time).total_seconds()
            self.is_simulation_complete = True

            if self.report.has_data:
                energy = self.report.day.energy
                logger.info(f"Simulation completed in {self.simulation_time:.3f} seconds: "
                            f"{energy.total_kwh:.3f} kWh, peak {energy.peak_w:.1f} W")
            else:
                logger.warning("No solar trajectory for this date and latitude; no yield produced")

            return self.report

        except Exception as e:
            logger.error(f"Simulation failed: {e}")
            raise

    def evaluate_free_mode(self, altitude_deg: float, azimuth_deg: float,
                           inclination_deg: float, panel_azimuth_deg: float,
                           convention: AzimuthConvention = AzimuthConvention.NORTH_CLOCKWISE) -> Dict[str, float]:
        """
        Incidence of a manually placed sun on a panel, without a trajectory

        Args:
            altitude_deg: Sun altitude
            azimuth_deg: Sun azimuth in the given convention
            inclination_deg: Panel tilt
            panel_azimuth_deg: Panel azimuth in the given convention
            convention: Azimuth reference frame of both azimuths

        Returns:
            Wall-solar azimuth, incidence angle and efficiency
        """
        orientation = PanelOrientation.from_convention(inclination_deg, panel_azimuth_deg, convention)
        geometry = self.resolver.evaluate_free_mode(altitude_deg, azimuth_deg, orientation, convention)
        return {
            'wall_solar_azimuth_deg': geometry.wall_solar_azimuth_deg,
            'incidence_angle_deg': geometry.incidence_angle_deg,
            'efficiency_pct': geometry.efficiency_pct
        }

    def plot_results(self, plot_types: Optional[List[str]] = None,
                     save_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate visualization plots

        Args:
            plot_types: Types of plots to generate
            save_path: Optional directory to save HTML plots

        Returns:
            Dictionary of plot figures
        """
        if not self.is_simulation_complete:
            raise ValueError("No simulation results available. Run simulation first.")

        if plot_types is None:
            plot_types = ["sun_path", "incidence", "power_curve", "cash_flow"]

        builders = {
            "sun_path": self.plotter.plot_sun_path,
            "incidence": self.plotter.plot_incidence,
            "power_curve": self.plotter.plot_power_curve,
            "cash_flow": self.plotter.plot_cash_flow,
            "dashboard": self.plotter.create_dashboard
        }

        logger.info("Generating plots...")
        plots = {}

        try:
            if save_path:
                Path(save_path).mkdir(parents=True, exist_ok=True)

            for plot_type in plot_types:
                if plot_type not in builders:
                    logger.warning(f"Unknown plot type: {plot_type}")
                    continue

                fig = builders[plot_type](
                    self.report,
                    title=f"{self.config.scenario_name} - {plot_type.replace('_', ' ').title()}"
                )
                plots[plot_type] = fig

                if save_path:
                    self.plotter.export_plot(fig, f"{save_path}/{plot_type}.html")

            logger.info(f"Generated {len(plots)} plots")
            return plots

        except Exception as e:
            logger.error(f"Plot generation failed: {e}")
            return {}

    def export_results(self, output_dir: str, formats: Optional[List[str]] = None) -> bool:
        """
        Export simulation results

        Args:
            output_dir: Output directory path
            formats: Export formats (csv, json, excel, pdf)

        Returns:
            True if successful
        """
        if not self.is_simulation_complete:
            raise ValueError("No simulation results available. Run simulation first.")

        if formats is None:
            formats = ["csv", "excel"]

        logger.info(f"Exporting results to {output_dir}...")
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        try:
            generator = ReportGenerator(str(output_path))
            files = generator.generate_report_package(self.report, formats)
            for kind, path in files.items():
                logger.info(f"{kind} written to {path}")

            config_path = output_path / f"{self.config.scenario_name}_config.json"
            self.scenario_manager.save_config(self.config, str(config_path))

            logger.info(f"Results exported to {output_dir}")
            return True

        except Exception as e:
            logger.error(f"Export failed: {e}")
            return False

    def get_summary(self) -> Dict[str, Any]:
        """
        Get simulation summary

        Returns:
            Summary dictionary
        """
        if not self.is_simulation_complete:
            return {"status": "No simulation completed"}

        report = self.report
        return {
            'scenario': {
                'name': self.config.scenario_name,
                'description': self.config.description,
                'location': report.metadata.location_label,
                'date': report.metadata.date
            },
            'has_data': report.has_data,
            'trajectory': report.trajectory_summary(),
            'energy': report.energy_dict(),
            'financial': report.financial_summary(),
            'simulation': {
                'time_seconds': self.simulation_time,
                'data_points': len(report.rows()),
                'completion_time': datetime.now().isoformat()
            }
        }

    def compare_scenarios(self, scenarios: Dict[str, str]) -> Dict[str, Any]:
        """
        Compare multiple scenarios

        Args:
            scenarios: Dictionary of scenario name to template name or config file path

        Returns:
            Reports per scenario plus a 'comparison_plot' figure
        """
        logger.info("Comparing scenarios...")

        comparison_results: Dict[str, Any] = {}

        try:
            for scenario_name, source in scenarios.items():
                logger.info(f"Running scenario: {scenario_name}")

                if source in self.scenario_manager.templates:
                    config = self.scenario_manager.create_from_template(source)
                else:
                    config = self.scenario_manager.load_config(source)
                comparison_results[scenario_name] = run_scenario(config)

            if comparison_results:
                comparison_results['comparison_plot'] = self.plotter.compare_scenarios(
                    dict(comparison_results)
                )

            logger.info("Scenario comparison completed")
            return comparison_results

        except Exception as e:
            logger.error(f"Scenario comparison failed: {e}")
            return {}

    def validate_configuration(self) -> Dict[str, Any]:
        """
        Validate current configuration

        Returns:
            Validation results
        """
        if not self.config:
            return {"feasible": False, "issues": ["No configuration loaded"],
                    "warnings": [], "recommendations": []}

        return self.scenario_manager.validate_site_feasibility(self.config)

    def list_available_templates(self) -> List[str]:
        return self.scenario_manager.list_templates()

    def get_configuration_info(self) -> Dict[str, Any]:
        """
        Get current configuration information

        Returns:
            Configuration summary
        """
        if not self.config:
            return {"status": "No configuration loaded"}

        return self.scenario_manager.generate_config_summary(self.config)


def main(argv: Optional[List[str]] = None):
    """Command line interface for the solar yield model"""
    import argparse

    parser = argparse.ArgumentParser(description="Orb Solar Simulation - daily panel yield")
    parser.add_argument("config", nargs="?", help="Configuration file path (.json, .yaml)")
    parser.add_argument("--output", "-o", help="Output directory", default="results")
    parser.add_argument("--formats", nargs="+", default=["csv", "excel"],
                        choices=list(ReportGenerator.SUPPORTED_FORMATS), help="Export formats")
    parser.add_argument("--plots", action="store_true", help="Generate plots")
    parser.add_argument("--template", help="Create scenario from template")
    parser.add_argument("--list-templates", action="store_true", help="List available templates")
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    args = parser.parse_args(argv)

    model = SolarYieldModel(log_level=args.log_level)

    # List templates
    if args.list_templates:
        templates = model.list_available_templates()
        print("Available templates:")
        for template in templates:
            print(f"  - {template}")
        return 0

    # Create from template or load configuration
    if args.template:
        success = model.create_scenario_from_template(args.template)
    elif args.config:
        success = model.load_scenario(args.config)
    else:
        parser.error("a configuration file or --template is required")

    if not success:
        print("Failed to load configuration")
        return 1

    validation = model.validate_configuration()
    for warning in validation['warnings']:
        print(f"Warning: {warning}")
    if not validation['feasible']:
        print("Configuration validation failed:")
        for issue in validation['issues']:
            print(f"  - {issue}")
        return 1

    print("Running simulation...")
    model.run_simulation()

    if args.plots:
        print("Generating plots...")
        model.plot_results(save_path=args.output)

    print("Exporting results...")
    model.export_results(args.output, args.formats)

    summary = model.get_summary()
    print("\nSimulation Summary:")
    if not summary['has_data']:
        print("  No solar trajectory: the sun does not rise or set on this date")
        return 0

    trajectory = summary['trajectory']
    energy = summary['energy']
    financial = summary['financial']
    print(f"  Sunrise / Sunset: {trajectory['sunrise']} / {trajectory['sunset']}")
    print(f"  Daily Energy: {energy['total_kwh']:.3f} kWh")
    print(f"  Peak Power: {energy['peak_w']:.1f} W")
    print(f"  Generation Hours: {energy['active_hours']:.2f} h")
    print(f"  Annual Savings: ${financial['annual_savings']:.2f}")
    if financial['payback_years'] is not None:
        print(f"  Payback: {financial['payback_years']:.1f} years")
    else:
        print("  Payback: not reached")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
