"""
Scoring data models

Lightweight dataclasses carried between the scoring stages. Configuration
and rule payloads live in ``rules_schema`` as Pydantic models; everything in
this module is created fresh for one evaluation and discarded afterwards.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import SCORE_CATEGORIES
from .types import Band, RuleStatus

_LEAD_KEYS = ("email", "name", "company", "domain", "fields", "utm")


@dataclass(frozen=True)
class Lead:
    """
    Lead record as submitted by a form, webhook or CRM sync

    ``fields`` is an open-ended attribute map that may be nested arbitrarily
    deep and may even refer back to itself; nothing here walks it.
    """

    email: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    domain: Optional[str] = None
    fields: Mapping = field(default_factory=dict)
    utm: Mapping = field(default_factory=dict)
    extra: Mapping = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Lead":
        """Build a lead from a raw mapping without copying nested values"""
        fields_ = data.get("fields")
        utm = data.get("utm", data.get("utmParams"))
        return cls(
            email=data.get("email"),
            name=data.get("name"),
            company=data.get("company"),
            domain=data.get("domain"),
            fields=fields_ if isinstance(fields_, Mapping) else {},
            utm=utm if isinstance(utm, Mapping) else {},
            extra={key: value for key, value in data.items() if key not in _LEAD_KEYS and key != "utmParams"},
        )

    def as_attribute_map(self) -> Dict[str, Any]:
        """Shallow attribute map used as the root for field paths"""
        attributes = dict(self.extra)
        attributes.update(
            {
                "email": self.email,
                "name": self.name,
                "company": self.company,
                "domain": self.domain,
                "fields": self.fields,
                "utm": self.utm,
            }
        )
        return attributes


def coerce_lead(value: Any) -> Optional[Lead]:
    """Return a ``Lead`` for lead-like input, ``None`` for anything else"""
    if isinstance(value, Lead):
        return value
    if isinstance(value, Mapping):
        return Lead.from_dict(value)
    return None


def empty_components() -> Dict[str, int]:
    return {category: 0 for category in SCORE_CATEGORIES}


@dataclass
class ScoreResult:
    """Output of the base scorer"""

    score: int
    components: Dict[str, int] = field(default_factory=empty_components)
    tags: List[str] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)


@dataclass(frozen=True)
class Adjustment:
    """One signed point delta contributed by a rule"""

    rule: str
    delta: int
    rule_id: Optional[str] = None

    def render(self) -> str:
        return f"{self.rule} ({self.delta:+d})"

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.rule, "delta": self.delta}


@dataclass(frozen=True)
class RuleOutcome:
    """What a single rule did during one evaluation"""

    rule_id: Optional[str]
    status: RuleStatus
    adjustment: Optional[Adjustment] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def applied(cls, rule_id: str, adjustment: Adjustment) -> "RuleOutcome":
        return cls(rule_id=rule_id, status=RuleStatus.APPLIED, adjustment=adjustment)

    @classmethod
    def not_matched(cls, rule_id: str) -> "RuleOutcome":
        return cls(rule_id=rule_id, status=RuleStatus.NOT_MATCHED)

    @classmethod
    def skipped(cls, rule_id: Optional[str], reason: str, message: Optional[str] = None) -> "RuleOutcome":
        return cls(rule_id=rule_id, status=RuleStatus.SKIPPED, reason=reason, message=message)

    @property
    def is_skipped(self) -> bool:
        return self.status == RuleStatus.SKIPPED


@dataclass
class RuleApplicationResult:
    """Output of the rule interpreter; ``final_score`` is not clamped"""

    final_score: int
    adjustments: List[Adjustment] = field(default_factory=list)
    outcomes: List[RuleOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> List[RuleOutcome]:
        return [outcome for outcome in self.outcomes if outcome.is_skipped]


@dataclass
class EvaluationResult:
    """
    Final result of scoring one lead

    ``to_dict()`` is the payload handed to persistence: the score and band
    for the lead record, the trace for the audit timeline.
    """

    score: int
    band: Band
    tags: List[str] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    adjustments: List[Adjustment] = field(default_factory=list)
    components: Dict[str, int] = field(default_factory=empty_components)
    base_score: int = 0
    outcomes: List[RuleOutcome] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "band": self.band.value,
            "tags": list(self.tags),
            "trace": list(self.trace),
            "adjustments": [adjustment.to_dict() for adjustment in self.adjustments],
        }

    def explain(self) -> str:
        """Multi-line human-readable summary of the evaluation"""
        lines = [f"Score: {self.score} ({self.band.value}) - {self.band.description}"]
        lines.append(f"Base score: {self.base_score}")
        breakdown = ", ".join(f"{name}={points}" for name, points in self.components.items())
        lines.append(f"Components: {breakdown}")
        lines.append(f"Tags: {', '.join(self.tags) if self.tags else '-'}")
        if self.trace:
            lines.append("Trace:")
            lines.extend(f"  - {entry}" for entry in self.trace)
        skipped = [outcome for outcome in self.outcomes if outcome.is_skipped]
        if skipped:
            lines.append(f"Skipped rules: {', '.join(str(outcome.rule_id) for outcome in skipped)}")
        return "\n".join(lines)
