"""
Orb Solar Simulation
====================

Solar geometry and panel yield engine. For a date, a latitude and a panel
orientation it reconstructs the sun's path across the day, resolves the
angle of incidence on the panel, estimates radiation, panel temperature
and power, integrates daily energy and projects 20 years of savings.

Main Components:
- Solar position and daily trajectory
- Panel geometry (wall-solar azimuth, incidence, efficiency)
- Thermal and power model
- Energy integration
- Financial projection
- Export, PDF reports, interactive plots and a REST API

Usage:
    >>> from orbsolar.main import SolarYieldModel
    >>> model = SolarYieldModel()
    >>> model.create_scenario_from_template('Mexico_City_Summer')
    >>> report = model.run_simulation()
    >>> model.export_results('results/', ['csv', 'pdf'])
"""

__version__ = "1.0.0"
