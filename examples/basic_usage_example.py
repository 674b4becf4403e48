#!/usr/bin/env python3
"""
Basic Usage Example for the Orb Solar Simulation

This example demonstrates how to simulate one day of panel yield for a
south-facing roof panel in Mexico City on the summer solstice.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.main import SolarYieldModel
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main example function"""
    print("=" * 60)
    print("Orb Solar Simulation - Basic Usage Example")
    print("=" * 60)

    # Create model instance
    print("\n1. Creating solar yield model...")
    model = SolarYieldModel()

    # Show available templates
    print("\n2. Available scenario templates:")
    templates = model.list_available_templates()
    for template in templates:
        print(f"   - {template}")

    # Create scenario from template
    print("\n3. Creating Mexico City summer scenario...")
    success = model.create_scenario_from_template(
        "Mexico_City_Summer",
        scenario_name="Example_Roof_Panel",
        description="Example roof panel demonstration",
        panel={"inclination_deg": 25.0}
    )

    if not success:
        print("Failed to create scenario")
        return

    # Validate configuration
    print("\n4. Validating configuration...")
    validation = model.validate_configuration()
    print(f"Configuration valid: {validation['feasible']}")

    if validation['warnings']:
        print("Warnings:")
        for warning in validation['warnings']:
            print(f"   - {warning}")

    if validation['recommendations']:
        print("Recommendations:")
        for rec in validation['recommendations']:
            print(f"   - {rec}")

    # Get configuration info
    print("\n5. Configuration summary:")
    config_info = model.get_configuration_info()
    print(f"   Location: {config_info['site']['location_name']} ({config_info['site']['latitude_deg']}°)")
    print(f"   Date: {config_info['site']['date']}")
    print(f"   Panel tilt: {config_info['panel']['inclination_deg']}°")
    print(f"   Panel azimuth: {config_info['panel']['azimuth_deg']}° (north-clockwise)")
    print(f"   Trajectory points: {config_info['simulation_settings']['sample_count']}")

    # Run simulation
    print("\n6. Running simulation...")

    try:
        model.run_simulation()
        print("   ✓ Simulation completed successfully!")
    except Exception as e:
        print(f"   ✗ Simulation failed: {e}")
        return

    # Get summary
    print("\n7. Simulation Results Summary:")
    summary = model.get_summary()
    trajectory = summary['trajectory']
    energy = summary['energy']
    print(f"   Sunrise / sunset: {trajectory['sunrise']} / {trajectory['sunset']}")
    print(f"   Day length: {trajectory['day_length_hours']:.2f} h")
    print(f"   Peak sun altitude: {trajectory['peak_altitude_deg']:.2f}°")
    print(f"   Daily energy: {energy['total_kwh']:.3f} kWh")
    print(f"   Peak power: {energy['peak_w']:.1f} W")
    print(f"   Generation hours: {energy['active_hours']:.2f} h")
    print(f"   Simulation time: {summary['simulation']['time_seconds']:.3f} seconds")

    # Financial projection
    print("\n8. Financial Projection:")
    financial = summary['financial']
    print(f"   Daily savings: ${financial['daily_savings']:.3f}")
    print(f"   Annual savings: ${financial['annual_savings']:.2f}")
    if financial['payback_years'] is not None:
        print(f"   Payback: {financial['payback_years']:.2f} years (year {financial['payback_year']})")
    else:
        print("   Payback: not reached within the projection")
    print(f"   Accumulated cash flow: ${financial['final_cash_flow']:.2f}")

    # Free mode
    print("\n9. Free mode: sun at 60° altitude due south")
    free = model.evaluate_free_mode(60.0, 180.0, 25.0, 180.0)
    print(f"   Incidence: {free['incidence_angle_deg']:.2f}°  Efficiency: {free['efficiency_pct']:.1f}%")

    # Generate plots
    print("\n10. Generating visualizations...")
    output_dir = Path("example_results")
    output_dir.mkdir(exist_ok=True)

    try:
        plots = model.plot_results(
            plot_types=["sun_path", "power_curve", "cash_flow"],
            save_path=str(output_dir)
        )
        print(f"    ✓ Generated {len(plots)} plots in {output_dir}")
        print("    Files created:")
        for plot_type in plots.keys():
            print(f"      - {plot_type}.html")
    except Exception as e:
        print(f"    ✗ Plot generation failed: {e}")

    # Export results
    print("\n11. Exporting results...")
    try:
        success = model.export_results(str(output_dir), formats=["csv", "excel", "pdf"])
        if success:
            print(f"    ✓ Results exported to {output_dir}")
        else:
            print("    ✗ Export failed")
    except Exception as e:
        print(f"    ✗ Export failed: {e}")

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print(f"Check the '{output_dir}' directory for results and plots.")
    print("=" * 60)


if __name__ == "__main__":
    main()
