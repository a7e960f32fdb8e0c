"""
FAA Part 450 compliance rules — static, data-described, independent.

A rule is either:
  • FIELD_PRESENCE — a list of FieldRequirements (min trimmed length per
    field) plus optional FieldAdvisories (keyword hints → recommendations);
  • CUSTOM — an explicit validator callable.

The evaluator for each kind is looked up in a closed table keyed by
RuleKind, so an unknown kind or a rule missing what its kind needs fails
when the rule is constructed, not when it is run.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from part450_portal.models.enums import CanonicalField as F
from part450_portal.models.enums import RuleCategory, RuleKind, Severity
from part450_portal.models.schemas import ComplianceIssue, ComplianceResult

logger = logging.getLogger(__name__)

FieldValueMap = Mapping[str, str]
RuleValidator = Callable[[FieldValueMap], ComplianceResult]


# ── Rule building blocks ─────────────────────────────────


class FieldRequirement(BaseModel):
    """Fails when the trimmed value is missing or shorter than min_length."""
    model_config = ConfigDict(frozen=True)

    field: F
    min_length: int
    severity: Severity
    message: str
    fix: str

    def check(self, fields: FieldValueMap, citation: str) -> ComplianceIssue | None:
        value = (fields.get(self.field.value) or "").strip()
        if len(value) >= self.min_length:
            return None
        return ComplianceIssue(
            field=self.field,
            message=self.message,
            severity=self.severity,
            regulation=citation,
            fix=self.fix,
        )


class FieldAdvisory(BaseModel):
    """Recommendation when a present value mentions none of the keywords."""
    model_config = ConfigDict(frozen=True)

    field: F
    keywords: tuple[str, ...]
    recommendation: str

    def check(self, fields: FieldValueMap) -> str | None:
        value = (fields.get(self.field.value) or "").strip().lower()
        if not value:
            return None
        if any(k.lower() in value for k in self.keywords):
            return None
        return self.recommendation


class ComplianceRule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    category: RuleCategory
    title: str
    description: str = ""
    regulation: str  # full heading, e.g. "14 CFR § 450.101 - Safety Criteria"
    citation: str  # short form carried by each issue, e.g. "14 CFR § 450.101"
    severity: Severity
    kind: RuleKind = RuleKind.FIELD_PRESENCE
    requirements: tuple[FieldRequirement, ...] = ()
    advisories: tuple[FieldAdvisory, ...] = ()
    validator: Optional[RuleValidator] = None

    @model_validator(mode="after")
    def _check_kind(self) -> "ComplianceRule":
        if self.kind not in RULE_EVALUATORS:
            raise ValueError(f"Rule {self.id}: no evaluator registered for kind {self.kind}")
        if self.kind == RuleKind.FIELD_PRESENCE and not self.requirements:
            raise ValueError(f"Rule {self.id}: field_presence rules need at least one requirement")
        if self.kind == RuleKind.CUSTOM and self.validator is None:
            raise ValueError(f"Rule {self.id}: custom rules need a validator")
        return self

    def evaluate(self, fields: FieldValueMap) -> ComplianceResult:
        """Run this rule alone. `passed` is False iff a critical issue was raised."""
        result = RULE_EVALUATORS[self.kind](self, fields)
        result.passed = result.critical_count() == 0
        return result


# ── Evaluators (one per RuleKind) ────────────────────────


def _evaluate_field_presence(rule: ComplianceRule, fields: FieldValueMap) -> ComplianceResult:
    issues = [
        issue
        for req in rule.requirements
        if (issue := req.check(fields, rule.citation)) is not None
    ]
    recommendations = [
        rec for adv in rule.advisories if (rec := adv.check(fields)) is not None
    ]
    return ComplianceResult(issues=issues, recommendations=recommendations)


def _evaluate_custom(rule: ComplianceRule, fields: FieldValueMap) -> ComplianceResult:
    result = rule.validator(fields)
    # Copy so callers' validators can return shared instances safely
    return result.model_copy(deep=True)


RULE_EVALUATORS: dict[RuleKind, Callable[[ComplianceRule, FieldValueMap], ComplianceResult]] = {
    RuleKind.FIELD_PRESENCE: _evaluate_field_presence,
    RuleKind.CUSTOM: _evaluate_custom,
}


# ── FAA Part 450 catalog ─────────────────────────────────

FAA_PART450_RULES: tuple[ComplianceRule, ...] = (
    ComplianceRule(
        id="safety-001",
        category=RuleCategory.SAFETY,
        title="Public Safety Analysis Required",
        description="All applications must include comprehensive public safety analysis",
        regulation="14 CFR § 450.101 - Safety Criteria",
        citation="14 CFR § 450.101",
        severity=Severity.CRITICAL,
        requirements=(
            FieldRequirement(
                field=F.EARLY_RISK_ASSESSMENTS,
                min_length=50,
                severity=Severity.CRITICAL,
                message="Comprehensive risk assessment required for public safety",
                fix="Provide detailed risk analysis including casualty expectation calculations",
            ),
            FieldRequirement(
                field=F.PUBLIC_SAFETY_CHALLENGES,
                min_length=30,
                severity=Severity.HIGH,
                message="Public safety challenges must be identified and addressed",
                fix="Describe specific public safety challenges and mitigation strategies",
            ),
        ),
        advisories=(
            FieldAdvisory(
                field=F.PLANNED_SAFETY_TOOLS,
                keywords=("debris", "sara"),
                recommendation=(
                    "Consider naming FAA-recognized analysis tools (e.g. DEBRIS, SARA) "
                    "in the planned safety tools section"
                ),
            ),
        ),
    ),
    ComplianceRule(
        id="technical-001",
        category=RuleCategory.TECHNICAL,
        title="Vehicle Technical Specifications",
        description="Complete vehicle technical data must be provided",
        regulation="14 CFR § 450.103 - Vehicle Requirements",
        citation="14 CFR § 450.103",
        severity=Severity.CRITICAL,
        requirements=(
            FieldRequirement(
                field=F.TECHNICAL_SUMMARY,
                min_length=100,
                severity=Severity.CRITICAL,
                message="Comprehensive technical summary required",
                fix="Provide detailed technical specifications including propulsion, structure, and systems",
            ),
            FieldRequirement(
                field=F.DIMENSIONS_MASS_STAGES,
                min_length=50,
                severity=Severity.HIGH,
                message="Vehicle dimensions, mass, and stage configuration required",
                fix="Specify vehicle dimensions, mass, and stage configuration",
            ),
        ),
    ),
    ComplianceRule(
        id="operational-001",
        category=RuleCategory.OPERATIONAL,
        title="Launch Site and Operations",
        description="Launch site information and operational procedures required",
        regulation="14 CFR § 450.105 - Launch Site Requirements",
        citation="14 CFR § 450.105",
        severity=Severity.CRITICAL,
        requirements=(
            FieldRequirement(
                field=F.LAUNCH_SITE,
                min_length=10,
                severity=Severity.CRITICAL,
                message="Specific launch site location required",
                fix="Provide exact launch site location and facility details",
            ),
            FieldRequirement(
                field=F.SITE_NAMES_COORDINATES,
                min_length=20,
                severity=Severity.HIGH,
                message="Launch site coordinates required",
                fix="Provide precise latitude and longitude coordinates",
            ),
        ),
        advisories=(
            FieldAdvisory(
                field=F.SITE_NAMES_COORDINATES,
                keywords=("°", "lat", "long"),
                recommendation="Express site coordinates in degrees latitude/longitude",
            ),
        ),
    ),
    ComplianceRule(
        id="documentation-001",
        category=RuleCategory.DOCUMENTATION,
        title="Mission Description Completeness",
        description="Complete mission description and concept of operations required",
        regulation="14 CFR § 450.107 - Application Information",
        citation="14 CFR § 450.107",
        severity=Severity.CRITICAL,
        requirements=(
            FieldRequirement(
                field=F.MISSION_OBJECTIVE,
                min_length=50,
                severity=Severity.CRITICAL,
                message="Clear mission objective required",
                fix="Provide detailed mission objective and purpose",
            ),
            FieldRequirement(
                field=F.VEHICLE_DESCRIPTION,
                min_length=100,
                severity=Severity.CRITICAL,
                message="Comprehensive vehicle description required",
                fix="Provide detailed vehicle description including type, capabilities, and characteristics",
            ),
        ),
    ),
    ComplianceRule(
        id="timeline-001",
        category=RuleCategory.TIMELINE,
        title="Application Timeline Requirements",
        description="Realistic timeline and launch window information required",
        regulation="14 CFR § 450.109 - Timeline Requirements",
        citation="14 CFR § 450.109",
        severity=Severity.HIGH,
        requirements=(
            FieldRequirement(
                field=F.INTENDED_WINDOW,
                min_length=20,
                severity=Severity.HIGH,
                message="Intended launch window required",
                fix="Specify intended launch window with dates and timeframes",
            ),
            FieldRequirement(
                field=F.FULL_APPLICATION_TIMELINE,
                min_length=30,
                severity=Severity.MEDIUM,
                message="Application submission timeline required",
                fix="Provide timeline for full application submission",
            ),
        ),
    ),
)


def custom_rule(
    rule_id: str,
    category: RuleCategory,
    title: str,
    validator: RuleValidator,
    severity: Severity = Severity.MEDIUM,
    citation: str = "",
) -> ComplianceRule:
    """Build a CUSTOM rule around an explicit validator."""
    return ComplianceRule(
        id=rule_id,
        category=category,
        title=title,
        regulation=citation,
        citation=citation,
        severity=severity,
        kind=RuleKind.CUSTOM,
        validator=validator,
    )
