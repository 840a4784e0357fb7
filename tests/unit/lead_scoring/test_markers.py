"""
Tests for location-based marker inheritance
"""
import pytest

from tests.markers import DOMAIN_MARKERS, PRIMARY_MARKERS

pytestmark = pytest.mark.unit


def marker_names(request):
    return {mark.name for mark in request.node.iter_markers()}


class TestAutoMarkers:
    def test_package_marker_from_directory(self, request):
        names = marker_names(request)

        assert "lead_scoring" in names
        assert "core" not in names

    def test_primary_marker_not_duplicated(self, request):
        units = [mark for mark in request.node.iter_markers() if mark.name == "unit"]

        assert len(units) == 1

    def test_markers_registered(self, pytestconfig):
        registered = " ".join(pytestconfig.getini("markers"))

        for name in list(PRIMARY_MARKERS) + list(DOMAIN_MARKERS) + ["critical"]:
            assert f"{name}:" in registered
