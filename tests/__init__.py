"""Test package for heritage-geo-analysis.

This package contains:
- Unit tests (test_geodesy.py, test_spatial.py, test_routing.py, test_export.py)
- Overlay provider tests (test_overlays.py)
- Record loading and configuration tests (test_catalog.py, test_config.py)
- HTTP action tests (test_actions.py)
- Test configuration (conftest.py)
"""
