"""Schema and validators for team scoring configuration and rules

This module defines the Pydantic models for a team's ``ScoringConfig``
(weights, penalties, enrichment tables, band thresholds) and its ordered
``ScoringRule`` list, plus the YAML document that stores both per team.

Rule definitions are kept as raw payloads on ``ScoringRule`` and parsed on
demand into one of the two typed shapes, so that one malformed rule never
prevents the rest of a team's rules from loading.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.exceptions import ConfigurationError, RuleDefinitionError
from core.logging import get_logger

from .types import Operator, RuleType

logger = get_logger(__name__, domain="lead_scoring")

_LIST_OPERATORS = (Operator.IN, Operator.NOT_IN)


# ---------------------------------------------------------------------------
# Scoring configuration
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WeightsConfig(_CamelModel):
    """Point ceilings for the positive signal families."""

    job_role: float = Field(default=0.0, ge=0, alias="jobRole")
    urgency: float = Field(default=0.0, ge=0)
    engagement: float = Field(default=0.0, ge=0)


class NegativeConfig(_CamelModel):
    """Penalty magnitudes. Sign is ignored, penalties always subtract."""

    competitor: float = 0.0
    free_email: float = Field(default=0.0, alias="freeEmail")
    invalid_domain: float = Field(default=0.0, alias="invalidDomain")
    spam: float = 0.0


class EnrichmentConfig(_CamelModel):
    """Tier → points lookup tables for enrichment data."""

    company_size: Dict[str, float] = Field(default_factory=dict, alias="companySize")
    industry: Dict[str, float] = Field(default_factory=dict)

    @field_validator("company_size", "industry")
    @classmethod
    def normalize_tiers(cls, v):
        return {str(tier).strip().lower(): points for tier, points in v.items()}


class BandThresholds(_CamelModel):
    """Ascending thresholds separating LOW, MEDIUM and HIGH."""

    high: float
    medium: float
    low: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _accept_ranges(cls, data):
        """Accept ``{"high": {"min": 71, "max": 100}}`` range objects."""
        if isinstance(data, Mapping):
            data = {
                key: (value.get("min") if isinstance(value, Mapping) else value)
                for key, value in data.items()
            }
        return data

    @model_validator(mode="after")
    def _validate_order(self) -> BandThresholds:
        if not self.low <= self.medium <= self.high:
            raise ValueError(
                f"Band thresholds must ascend low <= medium <= high, "
                f"got low={self.low}, medium={self.medium}, high={self.high}"
            )
        return self


class ScoringConfig(_CamelModel):
    """A team's scoring configuration snapshot.

    Any of the four sub-tables may be missing; the scorer then treats that
    category as not configured and contributes zero for it.
    """

    id: Optional[str] = None
    team_id: Optional[str] = Field(default=None, alias="teamId")
    version: int = 1
    weights: Optional[WeightsConfig] = None
    negative: Optional[NegativeConfig] = None
    enrichment: Optional[EnrichmentConfig] = None
    bands: Optional[BandThresholds] = None
    competitor_domains: List[str] = Field(default_factory=list, alias="competitorDomains")

    @field_validator("id", "team_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return None if v is None else str(v)

    @field_validator("competitor_domains")
    @classmethod
    def _normalize_domains(cls, v):
        return [domain.strip().lower() for domain in v if domain and domain.strip()]

    @property
    def is_complete(self) -> bool:
        return None not in (self.weights, self.negative, self.enrichment, self.bands)

    @classmethod
    def coerce(cls, value: Any) -> Optional[ScoringConfig]:
        """Return a validated config, or ``None`` when the input is unusable."""
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            logger.warning("Scoring config rejected", extra={"reason": f"unsupported type {type(value).__name__}"})
            return None
        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            logger.warning("Scoring config rejected", extra={"reason": str(exc)})
            return None


# ---------------------------------------------------------------------------
# Scoring rules
# ---------------------------------------------------------------------------


class Condition(_CamelModel):
    """One ``{field, op, value}`` test inside an IF_THEN rule."""

    field: str = Field(..., min_length=1)
    op: Operator
    value: Any = None

    @model_validator(mode="after")
    def _validate_comparand(self) -> Condition:
        if self.op in _LIST_OPERATORS and not isinstance(self.value, (list, tuple, set, frozenset)):
            raise ValueError(f"Operator '{self.op.value}' requires a list value")
        return self


class ThenAction(_CamelModel):
    """Point adjustment applied when every condition holds."""

    adjust: float
    reason: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_add(cls, data):
        if isinstance(data, Mapping) and "adjust" not in data and "add" in data:
            data = {**data, "adjust": data["add"]}
        return data


class IfThenDefinition(_CamelModel):
    conditions: List[Condition] = Field(..., alias="if", min_length=1)
    then: ThenAction


class WeightDefinition(_CamelModel):
    field: str = Field(..., min_length=1)
    weights: Dict[str, float]
    reason: Optional[str] = None

    @field_validator("weights", mode="before")
    @classmethod
    def _stringify_keys(cls, v):
        if isinstance(v, Mapping):
            return {str(key): points for key, points in v.items()}
        return v


RuleDefinition = Union[IfThenDefinition, WeightDefinition]

_DEFINITION_MODELS = {
    RuleType.IF_THEN: IfThenDefinition,
    RuleType.WEIGHT: WeightDefinition,
}


class ScoringRule(_CamelModel):
    """A team-defined rule; ``definition`` stays raw until parsed."""

    id: str
    team_id: Optional[str] = Field(default=None, alias="teamId")
    type: RuleType
    enabled: bool = True
    order: int = 0
    definition: Any = None

    @field_validator("id", "team_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return None if v is None else str(v)

    def parse_definition(self) -> RuleDefinition:
        """Validate the raw definition against the shape for ``type``.

        Raises:
            RuleDefinitionError: If the payload does not match.
        """
        model = _DEFINITION_MODELS[self.type]
        if not isinstance(self.definition, Mapping):
            raise RuleDefinitionError(self.id, f"{self.type.value} definition must be a mapping")
        try:
            return model.model_validate(self.definition)
        except ValidationError as exc:
            raise RuleDefinitionError(
                self.id,
                f"Invalid {self.type.value} definition",
                errors=[error["msg"] for error in exc.errors()],
            ) from exc


# ---------------------------------------------------------------------------
# Rules document (YAML)
# ---------------------------------------------------------------------------


class TeamScoringSettings(_CamelModel):
    config: ScoringConfig
    rules: List[ScoringRule] = Field(default_factory=list)


class ScoringRulesDocument(BaseModel):
    """Root schema for the scoring rules YAML document."""

    version: str = Field(..., pattern=r"^\d+\.\d+$", description="Document version")
    teams: Dict[str, TeamScoringSettings] = Field(..., description="Per-team scoring settings")

    @field_validator("teams", mode="before")
    @classmethod
    def _stringify_team_ids(cls, v):
        if isinstance(v, Mapping):
            return {str(team_id): settings for team_id, settings in v.items()}
        return v

    @model_validator(mode="after")
    def _validate_teams(self) -> ScoringRulesDocument:
        if not self.teams:
            raise ValueError("At least one team must be defined")
        for team_id, team in self.teams.items():
            ids = [rule.id for rule in team.rules]
            duplicates = sorted({rule_id for rule_id in ids if ids.count(rule_id) > 1})
            if duplicates:
                raise ValueError(f"Team '{team_id}' has duplicate rule ids: {duplicates}")
            if not team.config.is_complete:
                logger.warning("Team scoring config is incomplete", extra={"team_id": team_id})
        return self


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------


def _format_errors(exc: ValidationError) -> List[str]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        errors.append(f"{location}: {error['msg']}" if location else error["msg"])
    return errors


def validate_scoring_config(data: Any) -> List[str]:
    """Return human-readable problems with a config payload (empty when valid)."""
    if not isinstance(data, Mapping):
        return ["Scoring config must be a mapping"]
    try:
        config = ScoringConfig.model_validate(data)
    except ValidationError as exc:
        return _format_errors(exc)

    errors = []
    for name in ("weights", "negative", "enrichment", "bands"):
        if getattr(config, name) is None:
            errors.append(f"{name}: section is missing, category will not be scored")
    return errors


def validate_scoring_rule(data: Any) -> List[str]:
    """Return human-readable problems with a rule payload (empty when valid)."""
    if isinstance(data, ScoringRule):
        rule = data
    elif isinstance(data, Mapping):
        try:
            rule = ScoringRule.model_validate(data)
        except ValidationError as exc:
            return _format_errors(exc)
    else:
        return ["Scoring rule must be a mapping"]

    errors = []
    if rule.order < 0:
        errors.append("order: must be a non-negative integer")
    try:
        rule.parse_definition()
    except RuleDefinitionError as exc:
        errors.extend(f"definition: {message}" for message in exc.details.get("errors") or [exc.message])
    return errors


def resolve_rules_path() -> Path:
    """Return the effective scoring rules path from settings."""
    from core.config import get_settings

    return Path(get_settings().resolve_rules_path())


def load_rules_document(path: os.PathLike | str) -> ScoringRulesDocument:
    """Load a YAML file and return a validated ``ScoringRulesDocument``.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigurationError(f"Scoring rules file not found: {path_obj}", setting="scoring_rules_path")

    try:
        with path_obj.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Scoring rules file '{path_obj}' is not valid YAML: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            f"Scoring rules file '{path_obj}' could not be read: {exc}", setting="scoring_rules_path"
        ) from exc

    try:
        return ScoringRulesDocument.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigurationError(
            f"Validation failed for scoring rules file '{path_obj}': {'; '.join(_format_errors(exc))}"
        ) from exc
