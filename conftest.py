"""
Root conftest.py for pytest configuration

Registers the project markers and applies them from each test's location.
"""
from tests.markers import DOMAIN_MARKERS, OTHER_MARKERS, PRIMARY_MARKERS, apply_auto_markers


def pytest_collection_modifyitems(config, items):
    """Apply automatic markers based on test location"""
    for item in items:
        apply_auto_markers(item)


def pytest_configure(config):
    """Register primary, domain and auxiliary markers."""
    for markers in (PRIMARY_MARKERS, DOMAIN_MARKERS, OTHER_MARKERS):
        for name, description in markers.items():
            config.addinivalue_line("markers", f"{name}: {description}")
