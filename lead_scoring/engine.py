"""
Scoring orchestrator

Sequences the base scorer, the rule interpreter and the band classifier into
a single ``evaluate`` call. The orchestrator always returns a result: absent
configuration, invalid leads, malformed rules and unexpected failures each
degrade to a defined score, band and tag set.
"""

import time
from functools import lru_cache
from typing import Any, Iterable, Optional

from core.logging import get_logger
from core.metrics import MetricsCollector, get_metrics_collector

from . import constants as c
from .bands import classify
from .base_scorer import BaseScorer, clamp
from .models import EvaluationResult, RuleApplicationResult
from .rules_interpreter import RuleInterpreter
from .rules_schema import ScoringConfig
from .types import Band

logger = get_logger(__name__, domain="lead_scoring")


class ScoringEngine:
    """
    Lead scoring orchestrator

    Stateless between calls; a single instance may be shared across threads.
    """

    def __init__(
        self,
        base_scorer: Optional[BaseScorer] = None,
        interpreter: Optional[RuleInterpreter] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.base_scorer = base_scorer or BaseScorer()
        self.interpreter = interpreter or RuleInterpreter()
        self.metrics = metrics or get_metrics_collector()

    @classmethod
    def from_settings(cls, settings=None) -> "ScoringEngine":
        """Build an engine whose domain tables include the configured extras"""
        if settings is None:
            from core.config import get_settings

            settings = get_settings()
        scorer = BaseScorer(
            competitor_domains=c.COMPETITOR_DOMAINS | set(settings.extra_competitor_domains),
            free_email_domains=c.FREE_EMAIL_DOMAINS | set(settings.extra_free_email_domains),
        )
        return cls(base_scorer=scorer)

    def evaluate(self, lead: Any, config: Any, rules: Optional[Iterable[Any]] = None) -> EvaluationResult:
        """
        Score a lead

        Args:
            lead: ``Lead`` or raw lead mapping
            config: Team ``ScoringConfig`` (or raw mapping); None means the
                team has no configuration
            rules: The team's full rule list, disabled rules included

        Returns:
            EvaluationResult with score clamped to [0, 100]
        """
        start = time.perf_counter()
        try:
            result = self._evaluate(lead, config, rules)
        except Exception as e:
            logger.exception("Lead scoring failed, returning degraded result", extra={"error_type": type(e).__name__})
            self.metrics.track_error(type(e).__name__, "lead_scoring")
            result = EvaluationResult(
                score=0,
                band=Band.LOW,
                tags=[c.TAG_SCORING_ERROR],
                trace=[f"Scoring failed: {type(e).__name__}"],
            )

        self.metrics.track_evaluation(result.band.value, time.perf_counter() - start)
        return result

    def _evaluate(self, lead: Any, config: Any, rules: Optional[Iterable[Any]]) -> EvaluationResult:
        scoring_config = ScoringConfig.coerce(config)
        if scoring_config is None:
            return EvaluationResult(score=0, band=Band.LOW, tags=[c.TAG_NO_CONFIG])

        base = self.base_scorer.score(lead, scoring_config)
        if c.TAG_INVALID_DATA in base.tags:
            applied = RuleApplicationResult(final_score=base.score)
        else:
            applied = self.interpreter.apply(lead, rules, base.score)

        for outcome in applied.skipped:
            self.metrics.track_rule_skipped(outcome.reason)

        if scoring_config.bands is None:
            logger.warning("Band thresholds missing, using defaults", extra={"config_id": scoring_config.id})

        final_score = clamp(applied.final_score)
        band = classify(final_score, scoring_config.bands)
        trace = list(base.trace) + [adjustment.render() for adjustment in applied.adjustments]

        logger.debug(
            "Lead evaluated",
            extra={
                "score": final_score,
                "band": band.value,
                "adjustment_count": len(applied.adjustments),
                "skipped_rules": len(applied.skipped),
            },
        )

        return EvaluationResult(
            score=final_score,
            band=band,
            tags=list(base.tags),
            trace=trace,
            adjustments=list(applied.adjustments),
            components=dict(base.components),
            base_score=base.score,
            outcomes=list(applied.outcomes),
        )


@lru_cache()
def get_engine() -> ScoringEngine:
    """Get the shared engine built from settings"""
    return ScoringEngine.from_settings()


def evaluate(lead: Any, config: Any, rules: Optional[Iterable[Any]] = None) -> EvaluationResult:
    """Score a lead with the shared engine"""
    return get_engine().evaluate(lead, config, rules)
