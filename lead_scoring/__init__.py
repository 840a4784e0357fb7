"""
Lead Scoring

Deterministic lead scoring: weighted base scoring, ordered team rules and
band classification, plus a file-backed configuration supply.
"""

from .bands import classify
from .base_scorer import BaseScorer
from .defaults import default_scoring_config, default_scoring_rules
from .engine import ScoringEngine, evaluate
from .field_resolver import resolve
from .models import Adjustment, EvaluationResult, Lead, RuleApplicationResult, RuleOutcome, ScoreResult
from .rules_interpreter import RuleInterpreter
from .rules_schema import ScoringConfig, ScoringRule, validate_scoring_config, validate_scoring_rule
from .types import Band, Operator, RuleStatus, RuleType

__version__ = "0.1.0"

__all__ = [
    # Engine
    "ScoringEngine",
    "BaseScorer",
    "RuleInterpreter",
    "evaluate",
    "classify",
    "resolve",
    # Models
    "Lead",
    "ScoreResult",
    "Adjustment",
    "RuleOutcome",
    "RuleApplicationResult",
    "EvaluationResult",
    "ScoringConfig",
    "ScoringRule",
    # Types
    "Band",
    "Operator",
    "RuleType",
    "RuleStatus",
    # Helpers
    "default_scoring_config",
    "default_scoring_rules",
    "validate_scoring_config",
    "validate_scoring_rule",
]
