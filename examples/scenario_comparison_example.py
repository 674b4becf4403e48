#!/usr/bin/env python3
"""
Scenario Comparison Example

This example compares the daily yield and payback of several sites and
dates, then sweeps the panel tilt for one site to find the best
inclination for that day.
"""

import sys
from pathlib import Path

# Add the src directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.main import SolarYieldModel
from orbsolar.config import ScenarioConfig
from orbsolar.simulation import run_scenario
import logging

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main comparison example function"""
    print("=" * 60)
    print("Orb Solar Simulation - Scenario Comparison Example")
    print("=" * 60)

    model = SolarYieldModel()

    scenarios = {
        "Equator": "Equator_Equinox",
        "Mexico_City": "Mexico_City_Summer",
        "Madrid": "Madrid_Winter",
        "Svalbard": "Polar_Night"
    }

    print("\n1. Comparing the following scenarios:")
    for name, template in scenarios.items():
        print(f"   - {name}: {template}")

    print("\n2. Running simulations for each scenario...")
    results = model.compare_scenarios(scenarios)
    comparison_plot = results.pop('comparison_plot', None)

    print("\n3. Scenario Comparison Results:")
    print("-" * 72)
    print(f"{'Scenario':<13} {'Sunrise':<8} {'Sunset':<8} {'Energy (kWh)':<13} {'Peak (W)':<9} {'Payback (yr)':<12}")
    print("-" * 72)

    for name, report in results.items():
        if not report.has_data:
            print(f"{name:<13} {'-':<8} {'-':<8} {'no data':<13}")
            continue
        trajectory = report.trajectory_summary()
        energy = report.energy_dict()
        payback = report.financial_summary()['payback_years']
        payback_text = f"{payback:.2f}" if payback is not None else "never"
        print(f"{name:<13} {trajectory['sunrise']:<8} {trajectory['sunset']:<8} "
              f"{energy['total_kwh']:<13.3f} {energy['peak_w']:<9.1f} {payback_text:<12}")

    # Tilt sweep for one site
    print("\n4. Tilt sweep for Madrid on the winter solstice:")
    print("-" * 40)
    manager = ScenarioConfig()
    best = None
    for tilt in range(0, 91, 10):
        config = manager.create_from_template("Madrid_Winter", panel={"inclination_deg": float(tilt)})
        report = run_scenario(config)
        total = report.day.energy.total_kwh
        print(f"   {tilt:>2}°: {total:.3f} kWh")
        if best is None or total > best[1]:
            best = (tilt, total)

    print(f"• Best tilt: {best[0]}° ({best[1]:.3f} kWh)")

    output_dir = Path("comparison_results")
    output_dir.mkdir(exist_ok=True)

    if comparison_plot is not None:
        print("\n5. Saving comparison plot...")
        model.plotter.export_plot(comparison_plot, str(output_dir / "scenario_comparison.html"))
        print(f"    ✓ Comparison plot saved to {output_dir / 'scenario_comparison.html'}")

    print("\n" + "=" * 60)
    print("Scenario comparison completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
