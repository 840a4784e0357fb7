"""
Base scorer

Computes the initial score of a lead from four weighted signal families
(job role, urgency, engagement, enrichment) and the negative penalties
(competitor, free email, invalid domain, spam). Every fired signal leaves a
trace line; silent signals leave nothing.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional, Tuple

from core.logging import get_logger

from . import constants as c
from .field_resolver import first_present, resolve
from .models import Lead, ScoreResult, coerce_lead, empty_components
from .rules_schema import ScoringConfig

logger = get_logger(__name__, domain="lead_scoring")

_DOMAIN_RE = re.compile(c.DOMAIN_PATTERN)
_SPAM_RES = tuple(re.compile(pattern) for pattern in c.SPAM_LOCAL_PART_PATTERNS)
_ROLE_RES = tuple(
    (tier, fraction, re.compile(r"(?<![a-z0-9])(?:" + "|".join(re.escape(term) for term in terms) + r")(?![a-z0-9])"))
    for tier, fraction, terms in c.JOB_ROLE_TIERS
)


def to_points(value: Any) -> int:
    """Round a point value half away from zero"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def scaled_points(weight: Any, fraction: Any) -> int:
    """Points for a fraction of a category weight, free of float error"""
    return to_points(Decimal(str(weight)) * Decimal(str(fraction)))


def clamp(value: float, low: int = c.MIN_SCORE, high: int = c.MAX_SCORE) -> int:
    return max(low, min(high, to_points(value)))


def _normalize_level(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return re.sub(r"[\s\-]+", "_", value.strip().lower())


def _split_email(email: Any) -> Tuple[Optional[str], Optional[str]]:
    if not isinstance(email, str) or not email.strip():
        return None, None
    local, sep, domain = email.strip().lower().rpartition("@")
    if not sep:
        return email.strip().lower(), None
    return local, domain or None


def _matches_domain(domain: Optional[str], domains: Iterable[str]) -> bool:
    """True when ``domain`` or one of its parent domains is listed"""
    if not domain:
        return False
    candidates = set(domains)
    parts = domain.split(".")
    return any(".".join(parts[i:]) in candidates for i in range(len(parts) - 1))


class BaseScorer:
    """
    Weighted multi-factor scorer

    Domain tables are constructor inputs so that teams and tests can supply
    their own; the module constants are only the defaults.
    """

    def __init__(
        self,
        competitor_domains: Optional[Iterable[str]] = None,
        free_email_domains: Optional[Iterable[str]] = None,
        disposable_domains: Optional[Iterable[str]] = None,
    ):
        self.competitor_domains = frozenset(
            c.COMPETITOR_DOMAINS if competitor_domains is None else (d.lower() for d in competitor_domains)
        )
        self.free_email_domains = frozenset(
            c.FREE_EMAIL_DOMAINS if free_email_domains is None else (d.lower() for d in free_email_domains)
        )
        self.disposable_domains = frozenset(
            c.DISPOSABLE_EMAIL_DOMAINS if disposable_domains is None else (d.lower() for d in disposable_domains)
        )

    def score(self, lead: Any, config: Any) -> ScoreResult:
        """
        Score a lead against a team configuration

        Args:
            lead: ``Lead`` or raw lead mapping
            config: ``ScoringConfig`` or raw mapping; missing sub-tables
                leave their category at zero

        Returns:
            ScoreResult with every category present in ``components``
        """
        lead_obj = coerce_lead(lead)
        if lead_obj is None:
            reason = "lead is missing" if lead is None else f"expected a mapping, got {type(lead).__name__}"
            return ScoreResult(
                score=0,
                components=empty_components(),
                tags=[c.TAG_INVALID_DATA],
                trace=[f"Invalid lead data: {reason}"],
            )

        scoring_config = ScoringConfig.coerce(config) or ScoringConfig()
        root = lead_obj.as_attribute_map()
        result = ScoreResult(score=0)

        self._score_job_role(root, scoring_config, result)
        self._score_level(
            root, scoring_config, result, c.CATEGORY_URGENCY, c.URGENCY_PATHS, c.URGENCY_LEVELS, "Urgency"
        )
        self._score_level(
            root, scoring_config, result, c.CATEGORY_ENGAGEMENT, c.ENGAGEMENT_PATHS, c.ENGAGEMENT_LEVELS, "Engagement"
        )
        self._score_enrichment(root, scoring_config, result)
        self._score_negative(lead_obj, root, scoring_config, result)

        result.score = clamp(sum(result.components.values()))
        logger.debug(
            "Base score computed",
            extra={"score": result.score, "tags": result.tags, "domain_name": self._lead_domain(lead_obj)},
        )
        return result

    # Positive signals

    def _score_job_role(self, root: dict, config: ScoringConfig, result: ScoreResult) -> None:
        if config.weights is None:
            return
        title = first_present(root, c.TITLE_PATHS)
        if not isinstance(title, str):
            return
        lowered = title.lower()
        for tier, fraction, pattern in _ROLE_RES:
            if pattern.search(lowered):
                points = scaled_points(config.weights.job_role, fraction)
                result.components[c.CATEGORY_JOB_ROLE] = points
                if tier == "executive":
                    result.add_tag(c.TAG_EXECUTIVE)
                result.trace.append(f"Job role '{title}' matched {tier} tier ({points:+d})")
                return

    def _score_level(self, root, config, result, category, paths, levels, label) -> None:
        if config.weights is None:
            return
        level = _normalize_level(first_present(root, paths))
        fraction = levels.get(level) if level else None
        if fraction is None:
            return
        weight = getattr(config.weights, category)
        points = scaled_points(weight, fraction)
        result.components[category] = points
        result.trace.append(f"{label} '{level}' ({points:+d})")

    def _score_enrichment(self, root: dict, config: ScoringConfig, result: ScoreResult) -> None:
        if config.enrichment is None:
            return
        lookups = (
            ("Company size", c.COMPANY_SIZE_PATHS, config.enrichment.company_size),
            ("Industry", c.INDUSTRY_PATHS, config.enrichment.industry),
        )
        total = 0
        for label, paths, table in lookups:
            tier = first_present(root, paths)
            if not isinstance(tier, str):
                continue
            key = tier.strip().lower()
            if key not in table:
                continue
            points = to_points(table[key])
            total += points
            result.add_tag(c.TAG_ENRICHED)
            result.add_tag(key)
            result.trace.append(f"{label} '{key}' ({points:+d})")
        result.components[c.CATEGORY_ENRICHMENT] = total

    # Negative signals

    @staticmethod
    def _lead_domain(lead: Lead) -> Optional[str]:
        if isinstance(lead.domain, str) and lead.domain.strip():
            return lead.domain.strip().lower()
        return _split_email(lead.email)[1]

    def _score_negative(self, lead: Lead, root: dict, config: ScoringConfig, result: ScoreResult) -> None:
        if config.negative is None:
            return
        local_part, email_domain = _split_email(lead.email)
        domain = self._lead_domain(lead)
        competitor_domains = self.competitor_domains | set(config.competitor_domains)

        penalties: List[Tuple[bool, float, str, str]] = [
            (
                _matches_domain(domain, competitor_domains)
                or _matches_domain(email_domain, competitor_domains)
                or resolve(root, c.ENRICHMENT_COMPETITOR_FLAG) is True,
                config.negative.competitor,
                c.TAG_COMPETITOR,
                c.TRACE_COMPETITOR,
            ),
            (
                email_domain in self.free_email_domains or resolve(root, c.ENRICHMENT_FREE_MAILBOX_FLAG) is True,
                config.negative.free_email,
                c.TAG_FREE_EMAIL,
                c.TRACE_FREE_EMAIL,
            ),
            (
                self._is_invalid_domain(lead, domain, email_domain),
                config.negative.invalid_domain,
                c.TAG_INVALID_DOMAIN,
                c.TRACE_INVALID_DOMAIN,
            ),
            (
                self._is_spam(local_part, email_domain),
                config.negative.spam,
                c.TAG_SPAM,
                c.TRACE_SPAM,
            ),
        ]

        total = 0
        for fired, magnitude, tag, trace_line in penalties:
            if not fired:
                continue
            total -= to_points(abs(magnitude))
            result.add_tag(tag)
            result.trace.append(trace_line)
        result.components[c.CATEGORY_NEGATIVE] = total

    @staticmethod
    def _is_invalid_domain(lead: Lead, domain: Optional[str], email_domain: Optional[str]) -> bool:
        if lead.email is not None and not isinstance(lead.email, str):
            return True
        if isinstance(lead.email, str) and lead.email.strip() and not email_domain:
            return True
        if domain is None:
            return False
        return not _DOMAIN_RE.match(domain)

    def _is_spam(self, local_part: Optional[str], email_domain: Optional[str]) -> bool:
        if email_domain and _matches_domain(email_domain, self.disposable_domains):
            return True
        if local_part:
            return any(pattern.search(local_part) for pattern in _SPAM_RES)
        return False
