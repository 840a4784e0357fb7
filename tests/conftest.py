"""
Shared fixtures for all tests
"""
import os

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")

from core.config import get_settings  # noqa: E402
from lead_scoring.defaults import default_scoring_config, default_scoring_rules  # noqa: E402
from lead_scoring.models import Lead  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the settings cache so environment changes are picked up"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def scoring_config():
    """Default team scoring configuration"""
    return default_scoring_config()


@pytest.fixture
def scoring_rules():
    """Default team starter rules"""
    return default_scoring_rules()


@pytest.fixture
def executive_lead():
    """Well-qualified lead on a corporate domain"""
    return Lead(
        email="jane.doe@acme-industries.com",
        name="Jane Doe",
        company="Acme Industries",
        domain="acme-industries.com",
        fields={
            "title": "Chief Executive Officer",
            "company_size": "enterprise",
            "industry": "technology",
            "urgency": "high",
            "engagement": "very_interested",
        },
        utm={"source": "google-ads", "medium": "cpc"},
    )


@pytest.fixture
def rules_file(tmp_path):
    """Write a rules document to a temporary YAML file and return its path"""

    def _write(content: str, name: str = "scoring_rules.yaml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
