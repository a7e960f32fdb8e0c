"""
Compliance Engine — evaluates a field-value map against a rule catalog.

The engine is a plain object built by the caller (API startup, CLI, tests)
around an immutable rule catalog:

    engine = ComplianceEngine()                 # FAA Part 450 catalog
    result = engine.validate_application(fields)
    score  = engine.get_compliance_score(fields)
    report = engine.generate_compliance_report(fields)

Every call is a pure function of `fields`. A rule that raises is isolated:
it becomes one warning and the remaining rules still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from part450_portal.compliance.rules import FAA_PART450_RULES, ComplianceRule
from part450_portal.models.enums import CanonicalField, RuleCategory, Severity
from part450_portal.models.schemas import (
    CategorySummary,
    ComplianceReport,
    ComplianceResult,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100


@dataclass(frozen=True)
class _RuleOutcome:
    rule: ComplianceRule
    result: ComplianceResult | None  # None when the rule raised


def normalize_fields(fields: Mapping[str, Any] | None) -> dict[str, str]:
    """
    Map incoming keys onto canonical field names.

    Deprecated spellings resolve to their canonical field; unknown keys are
    ignored; None counts as empty.
    """
    normalized: dict[str, str] = {}
    for key, value in (fields or {}).items():
        field = CanonicalField.from_name(key)
        if field is None:
            logger.debug(f"[COMPLIANCE] Ignoring unknown field key: {key!r}")
            continue
        if key != field.value:
            logger.debug(f"[COMPLIANCE] Deprecated field name {key!r} → {field.value}")
            # An explicit canonical key wins over its deprecated spelling
            if field.value in fields:
                continue
        normalized[field.value] = "" if value is None else str(value)
    return normalized


def score_from_result(result: ComplianceResult) -> int:
    """max(0, 100 − (25×critical + 10×high + 5×medium)); low issues are free."""
    penalty = sum(issue.severity.score_weight for issue in result.issues)
    return max(0, MAX_SCORE - penalty)


class ComplianceEngine:
    """Runs an immutable rule catalog over field-value maps."""

    def __init__(self, rules: Sequence[ComplianceRule] = FAA_PART450_RULES):
        self._rules: tuple[ComplianceRule, ...] = tuple(rules)
        ids = [r.id for r in self._rules]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate rule ids in catalog: {ids}")

    @property
    def rules(self) -> tuple[ComplianceRule, ...]:
        return self._rules

    # ── Core pass ────────────────────────────────────────

    def _run_rules(self, fields: Mapping[str, Any] | None) -> list[_RuleOutcome]:
        data = normalize_fields(fields)
        outcomes: list[_RuleOutcome] = []
        for rule in self._rules:
            try:
                outcomes.append(_RuleOutcome(rule, rule.evaluate(data)))
            except Exception:
                logger.exception(f"[COMPLIANCE] Rule {rule.id} ({rule.title}) failed")
                outcomes.append(_RuleOutcome(rule, None))
        return outcomes

    @staticmethod
    def _aggregate(outcomes: list[_RuleOutcome]) -> ComplianceResult:
        aggregate = ComplianceResult()
        for outcome in outcomes:
            if outcome.result is None:
                aggregate.warnings.append(
                    f"Compliance check failed for {outcome.rule.title} ({outcome.rule.id})"
                )
                continue
            aggregate.issues.extend(outcome.result.issues)
            aggregate.warnings.extend(outcome.result.warnings)
            aggregate.recommendations.extend(outcome.result.recommendations)
        aggregate.passed = aggregate.critical_count() == 0
        return aggregate

    @staticmethod
    def _summarize(outcomes: list[_RuleOutcome]) -> dict[RuleCategory, CategorySummary]:
        summary: dict[RuleCategory, CategorySummary] = {}
        for outcome in outcomes:
            bucket = summary.setdefault(outcome.rule.category, CategorySummary())
            if outcome.result is not None and outcome.result.passed:
                bucket.passed += 1
            else:
                bucket.failed += 1
                if outcome.result is not None:
                    bucket.issues.extend(outcome.result.issues)
        return summary

    # ── Public API ───────────────────────────────────────

    def validate_application(self, fields: Mapping[str, Any] | None) -> ComplianceResult:
        result = self._aggregate(self._run_rules(fields))
        logger.info(
            f"[COMPLIANCE] {len(self._rules)} rules | issues={len(result.issues)} "
            f"critical={result.critical_count()} | passed={result.passed}"
        )
        return result

    def get_compliance_score(self, fields: Mapping[str, Any] | None) -> int:
        return score_from_result(self._aggregate(self._run_rules(fields)))

    def get_compliance_summary(
        self, fields: Mapping[str, Any] | None
    ) -> dict[RuleCategory, CategorySummary]:
        return self._summarize(self._run_rules(fields))

    def generate_compliance_report(self, fields: Mapping[str, Any] | None) -> ComplianceReport:
        outcomes = self._run_rules(fields)
        result = self._aggregate(outcomes)
        report = ComplianceReport(
            score=score_from_result(result),
            passed=result.passed,
            summary=self._summarize(outcomes),
            issues=result.issues,
            warnings=result.warnings,
            recommendations=result.recommendations,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            f"[COMPLIANCE] Report: score={report.score} passed={report.passed} "
            f"critical={sum(1 for i in report.issues if i.severity == Severity.CRITICAL)}"
        )
        return report
