"""
Tests for the default team configuration
"""
import pytest

from lead_scoring.defaults import default_scoring_config, default_scoring_rules, default_team_document
from lead_scoring.rules_schema import IfThenDefinition, WeightDefinition, validate_scoring_rule

pytestmark = pytest.mark.unit


class TestDefaultConfig:
    """Test default_scoring_config()"""

    def test_weights_and_penalties(self):
        config = default_scoring_config()

        assert (config.weights.job_role, config.weights.urgency, config.weights.engagement) == (45, 25, 30)
        assert config.negative.competitor == 20
        assert config.negative.free_email == 10
        assert config.negative.invalid_domain == 15
        assert config.negative.spam == 30

    def test_bands(self):
        bands = default_scoring_config().bands

        assert (bands.high, bands.medium, bands.low) == (75, 50, 0)

    def test_enrichment_tables(self):
        enrichment = default_scoring_config().enrichment

        assert enrichment.company_size["enterprise"] == 20
        assert enrichment.industry["technology"] == 15

    def test_fresh_instance_each_call(self):
        assert default_scoring_config() is not default_scoring_config()


class TestDefaultRules:
    """Test default_scoring_rules()"""

    def test_rules_are_valid_and_ordered(self):
        rules = default_scoring_rules("team-9")

        assert [rule.order for rule in rules] == sorted(rule.order for rule in rules)
        assert all(rule.team_id == "team-9" for rule in rules)
        assert all(validate_scoring_rule(rule) == [] for rule in rules)

    def test_rule_kinds(self):
        definitions = [rule.parse_definition() for rule in default_scoring_rules()]

        assert isinstance(definitions[0], IfThenDefinition)
        assert isinstance(definitions[-1], WeightDefinition)

    def test_team_document(self):
        document = default_team_document("ops")

        assert document["version"] == "1.0"
        assert document["teams"]["ops"]["config"]["teamId"] == "ops"
        assert document["teams"]["ops"]["rules"][0]["type"] == "IF_THEN"
