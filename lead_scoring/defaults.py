"""Default team scoring configuration and starter rules"""

from typing import Any, Dict, List

from .rules_schema import ScoringConfig, ScoringRule


def default_scoring_config() -> ScoringConfig:
    """Configuration used when a team is first provisioned"""
    return ScoringConfig.model_validate(
        {
            "version": 1,
            "weights": {"jobRole": 45, "urgency": 25, "engagement": 30},
            "negative": {"competitor": 20, "freeEmail": 10, "invalidDomain": 15, "spam": 30},
            "enrichment": {
                "companySize": {"enterprise": 20, "large": 15, "medium": 10, "small": 5, "startup": 0},
                "industry": {
                    "technology": 15,
                    "finance": 12,
                    "healthcare": 10,
                    "manufacturing": 8,
                    "retail": 5,
                    "other": 0,
                },
            },
            "bands": {"high": 75, "medium": 50, "low": 0},
        }
    )


_DEFAULT_RULES: List[Dict[str, Any]] = [
    {
        "id": "high-budget",
        "type": "IF_THEN",
        "order": 1,
        "definition": {
            "if": [{"field": "fields.budget", "op": "greater_equal", "value": 10000}],
            "then": {"adjust": 15, "reason": "High budget"},
        },
    },
    {
        "id": "decision-maker",
        "type": "IF_THEN",
        "order": 2,
        "definition": {
            "if": [{"field": "fields.title", "op": "regex", "value": r"\b(ceo|founder|owner)\b"}],
            "then": {"adjust": 20, "reason": "Decision maker"},
        },
    },
    {
        "id": "paid-search",
        "type": "IF_THEN",
        "order": 3,
        "definition": {
            "if": [
                {"field": "utm.source", "op": "equals", "value": "google"},
                {"field": "utm.medium", "op": "equals", "value": "cpc"},
            ],
            "then": {"adjust": 10, "reason": "Paid search"},
        },
    },
    {
        "id": "company-size",
        "type": "WEIGHT",
        "order": 4,
        "definition": {
            "field": "fields.company_size",
            "weights": {"enterprise": 10, "large": 5, "startup": -5},
        },
    },
]


def default_scoring_rules(team_id: str = "default") -> List[ScoringRule]:
    """Starter rule set, in evaluation order"""
    return [ScoringRule.model_validate({**rule, "teamId": team_id}) for rule in _DEFAULT_RULES]


def default_team_document(team_id: str = "default") -> Dict[str, Any]:
    """Rules document holding the defaults for one team, ready for YAML"""
    config = default_scoring_config().model_dump(by_alias=True, exclude_none=True)
    config["teamId"] = team_id
    rules = [rule.model_dump(by_alias=True, mode="json", exclude_none=True) for rule in default_scoring_rules(team_id)]
    return {"version": "1.0", "teams": {team_id: {"config": config, "rules": rules}}}
