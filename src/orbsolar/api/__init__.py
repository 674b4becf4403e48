"""
API Module
==========

This module provides the REST API server used by the web frontend.

Routes:
    /api/scenarios - Scenario templates
    /api/trajectory - Sun trajectory
    /api/incidence - Free-mode incidence
    /api/simulation - Full-day simulation
    /api/export - Report downloads
"""
