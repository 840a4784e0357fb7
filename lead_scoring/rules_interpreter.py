"""
Rule interpreter

Evaluates a team's ordered custom rules against a lead. Each rule produces a
``RuleOutcome``; the loop only ever looks at outcomes, so a disabled,
malformed or failing rule turns into ``skipped`` and evaluation carries on
with the next one.
"""

import operator
import re
from collections.abc import Mapping
from numbers import Number
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from core.exceptions import RuleDefinitionError
from core.logging import get_logger

from .base_scorer import to_points
from .field_resolver import resolve
from .models import Adjustment, RuleApplicationResult, RuleOutcome, coerce_lead
from .rules_schema import Condition, IfThenDefinition, ScoringRule, WeightDefinition
from .types import Operator

logger = get_logger(__name__, domain="lead_scoring")

# Skip reasons
SKIP_DISABLED = "disabled"
SKIP_INVALID_RULE = "invalid_rule"
SKIP_INVALID_DEFINITION = "invalid_definition"
SKIP_EVALUATION_ERROR = "evaluation_error"

_ACRONYMS = {"utm": "UTM", "id": "ID", "url": "URL", "crm": "CRM"}


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _same(actual: Any, expected: Any) -> bool:
    """Equality that keeps booleans apart from numbers"""
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _is_present(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and value == "")


def _numeric(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        return _is_number(actual) and _is_number(expected) and compare(actual, expected)

    return check


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        return expected is not None and str(expected).lower() in actual.lower()
    if isinstance(actual, (list, tuple, set, frozenset)):
        return any(_same(item, expected) for item in actual)
    return False


def _not_contains(actual: Any, expected: Any) -> bool:
    if not isinstance(actual, (str, list, tuple, set, frozenset)):
        return False
    return not _contains(actual, expected)


def _starts_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and isinstance(expected, str) and actual.lower().startswith(expected.lower())


def _ends_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and isinstance(expected, str) and actual.lower().endswith(expected.lower())


def _regex(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, str) or actual is None or isinstance(actual, (Mapping, list, tuple)):
        return False
    try:
        return re.search(expected, str(actual), re.IGNORECASE) is not None
    except re.error:
        return False


def _in(actual: Any, expected: Any) -> bool:
    return any(_same(actual, item) for item in expected)


OPERATORS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQUALS: _same,
    Operator.NOT_EQUALS: lambda actual, expected: not _same(actual, expected),
    Operator.GREATER_THAN: _numeric(operator.gt),
    Operator.LESS_THAN: _numeric(operator.lt),
    Operator.GREATER_EQUAL: _numeric(operator.ge),
    Operator.LESS_EQUAL: _numeric(operator.le),
    Operator.CONTAINS: _contains,
    Operator.NOT_CONTAINS: _not_contains,
    Operator.STARTS_WITH: _starts_with,
    Operator.ENDS_WITH: _ends_with,
    Operator.REGEX: _regex,
    Operator.IN: _in,
    Operator.NOT_IN: lambda actual, expected: not _in(actual, expected),
    Operator.EXISTS: lambda actual, _: _is_present(actual),
    Operator.NOT_EXISTS: lambda actual, _: not _is_present(actual),
}


def evaluate_condition(condition: Condition, root: Any) -> bool:
    """Resolve the condition's field against ``root`` and apply its operator"""
    actual = resolve(root, condition.field)
    return bool(OPERATORS[condition.op](actual, condition.value))


def weight_reason(path: str) -> str:
    """Derive an adjustment reason from a weighted field path

    ``utm.source`` becomes ``"UTM source weight"``; the ``fields`` prefix is
    dropped so ``fields.company_size`` becomes ``"Company size weight"``.
    """
    words: List[str] = []
    for segment in path.split("."):
        if segment == "fields" or not segment:
            continue
        spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", segment).replace("_", " ").replace("-", " ")
        for word in spaced.split():
            words.append(_ACRONYMS.get(word.lower(), word.lower()))
    label = " ".join(words) or path
    return f"{label[0].upper()}{label[1:]} weight"


def _weight_key(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    return None


class RuleInterpreter:
    """Applies ordered IF_THEN / WEIGHT rules on top of a base score"""

    def apply(self, lead: Any, rules: Optional[Iterable[Any]], base_score: int) -> RuleApplicationResult:
        """
        Apply rules in ascending ``order`` and accumulate their deltas

        Args:
            lead: ``Lead`` or raw lead mapping
            rules: Full rule list for the team, disabled rules included
            base_score: Score produced by the base scorer

        Returns:
            RuleApplicationResult; ``final_score`` is base plus every applied
            delta and is not clamped here
        """
        lead_obj = coerce_lead(lead)
        root = lead_obj.as_attribute_map() if lead_obj is not None else {}

        outcomes: List[RuleOutcome] = []
        parsed: List[ScoringRule] = []
        for raw in rules or ():
            rule, outcome = self._coerce_rule(raw)
            if rule is None:
                outcomes.append(outcome)
            else:
                parsed.append(rule)

        running = base_score
        adjustments: List[Adjustment] = []
        for rule in sorted(parsed, key=lambda r: r.order):
            outcome = self._apply_rule(rule, root)
            outcomes.append(outcome)
            if outcome.adjustment is not None:
                running += outcome.adjustment.delta
                adjustments.append(outcome.adjustment)

        return RuleApplicationResult(final_score=running, adjustments=adjustments, outcomes=outcomes)

    @staticmethod
    def _coerce_rule(raw: Any) -> Tuple[Optional[ScoringRule], Optional[RuleOutcome]]:
        if isinstance(raw, ScoringRule):
            return raw, None
        rule_id = raw.get("id") if isinstance(raw, Mapping) else None
        try:
            return ScoringRule.model_validate(raw), None
        except ValidationError as e:
            logger.debug("Skipping malformed rule", extra={"rule_id": rule_id, "error": str(e)})
            return None, RuleOutcome.skipped(
                None if rule_id is None else str(rule_id), SKIP_INVALID_RULE, message=str(e)
            )

    def _apply_rule(self, rule: ScoringRule, root: Any) -> RuleOutcome:
        if not rule.enabled:
            return RuleOutcome.skipped(rule.id, SKIP_DISABLED)

        try:
            definition = rule.parse_definition()
        except RuleDefinitionError as e:
            logger.debug("Skipping rule with invalid definition", extra={"rule_id": rule.id, "error": e.message})
            return RuleOutcome.skipped(rule.id, SKIP_INVALID_DEFINITION, message=e.message)

        try:
            if isinstance(definition, IfThenDefinition):
                adjustment = self._apply_if_then(rule, definition, root)
            else:
                adjustment = self._apply_weight(rule, definition, root)
        except Exception as e:
            logger.warning(
                "Rule evaluation failed, skipping",
                extra={"rule_id": rule.id, "error": str(e), "error_type": type(e).__name__},
            )
            return RuleOutcome.skipped(rule.id, SKIP_EVALUATION_ERROR, message=str(e))

        if adjustment is None:
            return RuleOutcome.not_matched(rule.id)
        return RuleOutcome.applied(rule.id, adjustment)

    @staticmethod
    def _apply_if_then(rule: ScoringRule, definition: IfThenDefinition, root: Any) -> Optional[Adjustment]:
        if not all(evaluate_condition(condition, root) for condition in definition.conditions):
            return None
        reason = definition.then.reason or f"Rule {rule.id}"
        return Adjustment(rule=reason, delta=to_points(definition.then.adjust), rule_id=rule.id)

    @staticmethod
    def _apply_weight(rule: ScoringRule, definition: WeightDefinition, root: Any) -> Optional[Adjustment]:
        key = _weight_key(resolve(root, definition.field))
        if key is None or key not in definition.weights:
            return None
        reason = definition.reason or weight_reason(definition.field)
        return Adjustment(rule=reason, delta=to_points(definition.weights[key]), rule_id=rule.id)
