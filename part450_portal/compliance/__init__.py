"""Compliance — FAA Part 450 rule catalog and engine."""

from part450_portal.compliance.engine import ComplianceEngine, normalize_fields
from part450_portal.compliance.rules import (
    FAA_PART450_RULES,
    ComplianceRule,
    FieldAdvisory,
    FieldRequirement,
    custom_rule,
)

__all__ = [
    "ComplianceEngine",
    "normalize_fields",
    "FAA_PART450_RULES",
    "ComplianceRule",
    "FieldAdvisory",
    "FieldRequirement",
    "custom_rule",
]
