"""
Reusable data schemas for the compliance and extraction core.
Each schema is a clearly-bounded object returned by one component and
serialized as-is by the API layer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import FIELD_CATALOG_VERSION, AssistMode, CanonicalField, CommandKind, RuleCategory, Severity


# ── Compliance Engine ────────────────────────────────────


class ComplianceIssue(BaseModel):
    """One actionable finding tied to exactly one canonical field."""
    field: CanonicalField
    message: str
    severity: Severity
    regulation: str
    fix: str


class ComplianceResult(BaseModel):
    passed: bool = True
    issues: list[ComplianceIssue] = []
    warnings: list[str] = []
    recommendations: list[str] = []

    def critical_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.CRITICAL)


class CategorySummary(BaseModel):
    passed: int = 0
    failed: int = 0
    issues: list[ComplianceIssue] = []


class ComplianceReport(BaseModel):
    """Dashboard payload: score, verdict, per-category summary and findings."""
    score: int = Field(ge=0, le=100)
    passed: bool
    summary: dict[RuleCategory, CategorySummary] = {}
    issues: list[ComplianceIssue] = []
    warnings: list[str] = []
    recommendations: list[str] = []
    timestamp: str = ""
    catalog_version: str = FIELD_CATALOG_VERSION


# ── Response Extractor / Auto-fill ───────────────────────


class FieldSuggestion(BaseModel):
    field: CanonicalField
    value: str
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    reasoning: str = ""


class AutoFillResult(BaseModel):
    fields: dict[str, str] = {}
    suggestions: list[FieldSuggestion] = []
    message: str = ""
    source: str = "llm"  # "llm" | "local" | "none"
    mission_type: str = ""  # keyword classification of the user input
    mode: AssistMode = AssistMode.FORM


# ── Chat commands ────────────────────────────────────────


class FormSection(BaseModel):
    title: str
    fields: tuple[CanonicalField, ...]


class ChatCommand(BaseModel):
    kind: CommandKind = CommandKind.NONE
    field: CanonicalField | None = None
    section_index: int | None = None  # 0-based
    value: str = ""
    raw: str = ""
