"""
Scoring Types and Enumerations

Type definitions for the scoring engine: qualification bands, rule kinds,
condition operators and per-rule outcome states.
"""

from enum import Enum


class Band(str, Enum):
    """
    Ordinal qualification band derived from a final score
    """

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Numeric rank for ordering (higher = better qualified)"""
        order = {
            Band.LOW: 0,
            Band.MEDIUM: 1,
            Band.HIGH: 2,
        }
        return order[self]

    @property
    def description(self) -> str:
        """Human-readable description of the band"""
        descriptions = {
            Band.HIGH: "Sales-ready lead, route for immediate follow-up",
            Band.MEDIUM: "Qualified lead, route to standard follow-up",
            Band.LOW: "Unqualified or incomplete lead, nurture only",
        }
        return descriptions[self]


class RuleType(str, Enum):
    """Kinds of team-defined scoring rules"""

    IF_THEN = "IF_THEN"  # Conditional point adjustment
    WEIGHT = "WEIGHT"  # Field value to point lookup


class Operator(str, Enum):
    """Comparison operators available to IF_THEN conditions"""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"
    IN = "in"
    NOT_IN = "not_in"
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


class RuleStatus(str, Enum):
    """What happened to a rule during one evaluation"""

    APPLIED = "applied"  # Matched and contributed a delta
    NOT_MATCHED = "not_matched"  # Valid, evaluated, conditions did not hold
    SKIPPED = "skipped"  # Disabled, malformed or failed during evaluation
