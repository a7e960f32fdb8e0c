from .enums import (
    FIELD_CATALOG_VERSION,
    AssistMode,
    CanonicalField,
    CommandKind,
    RuleCategory,
    RuleKind,
    Severity,
)
from .schemas import (
    AutoFillResult,
    CategorySummary,
    ChatCommand,
    ComplianceIssue,
    ComplianceReport,
    ComplianceResult,
    FieldSuggestion,
    FormSection,
)

__all__ = [
    "FIELD_CATALOG_VERSION",
    "AssistMode",
    "CanonicalField",
    "CommandKind",
    "RuleCategory",
    "RuleKind",
    "Severity",
    "AutoFillResult",
    "CategorySummary",
    "ChatCommand",
    "ComplianceIssue",
    "ComplianceReport",
    "ComplianceResult",
    "FieldSuggestion",
    "FormSection",
]
