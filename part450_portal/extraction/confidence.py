"""
Confidence scoring for extracted field values.

A scorer is any callable (field, value) -> float in [0, 1]. The default
heuristic only rewards evidence that a value looks like what the field asks
for; it has no effect on which fields are extracted.
"""

from __future__ import annotations

import re
from typing import Callable

from part450_portal.models.enums import CanonicalField as F

ConfidenceScorer = Callable[[F, str], float]

BASE_CONFIDENCE = 0.6
LENGTH_BONUS = 0.1
SUBSTANTIVE_LENGTH = 50
KEYWORD_BONUS = 0.2
MAX_CONFIDENCE = 0.99

_UNIT_RE = re.compile(r"\b\d+(?:[.,]\d+)?\s*(?:kg|t|tons?|lbs?|m|meters?|ft|feet)\b", re.I)
_COORD_RE = re.compile(r"\d+(?:\.\d+)?\s*°\s*[NSEW]", re.I)
_DATE_RE = re.compile(
    r"\b(?:q[1-4]\s*\d{4}|\d{4}|january|february|march|april|may|june|july|"
    r"august|september|october|november|december)\b",
    re.I,
)

# Field-specific evidence. Each entry is either a regex or keyword list.
_FIELD_EVIDENCE: dict[F, re.Pattern[str] | tuple[str, ...]] = {
    F.DIMENSIONS_MASS_STAGES: _UNIT_RE,
    F.TECHNICAL_SUMMARY: _UNIT_RE,
    F.SITE_NAMES_COORDINATES: _COORD_RE,
    F.LAUNCH_WINDOW: _DATE_RE,
    F.INTENDED_WINDOW: _DATE_RE,
    F.FULL_APPLICATION_TIMELINE: _DATE_RE,
    F.PROPULSION_TYPES: ("liquid", "solid", "hybrid", "electric", "engine", "methane", "kerosene", "lox"),
    F.RECOVERY_SYSTEMS: ("parachute", "reusable", "landing", "expendable", "splashdown"),
    F.PLANNED_SAFETY_TOOLS: ("debris", "sara", "monte carlo", "casualty"),
    F.EARLY_RISK_ASSESSMENTS: ("casualty", "hazard", "probability", "expected casualty"),
    F.LICENSE_TYPE_INTENT: ("vehicle operator license", "mission-specific", "mission specific", "license"),
    F.LAUNCH_SITE: ("space center", "spaceport", "space force base", "flight facility", "pad", "lc-", "slc-"),
    F.CLARIFY_PART450: ("450", "cfr", "§"),
}


def _has_evidence(field: F, value: str) -> bool:
    evidence = _FIELD_EVIDENCE.get(field)
    if evidence is None:
        return False
    if isinstance(evidence, re.Pattern):
        return bool(evidence.search(value))
    lowered = value.lower()
    return any(re.search(rf"\b{re.escape(k)}", lowered) for k in evidence)


def keyword_confidence(field: F, value: str) -> float:
    """Default heuristic: base + length bonus + field-specific keyword bonus."""
    text = (value or "").strip()
    if not text:
        return 0.0
    score = BASE_CONFIDENCE
    if len(text) >= SUBSTANTIVE_LENGTH:
        score += LENGTH_BONUS
    if _has_evidence(field, text):
        score += KEYWORD_BONUS
    return round(min(score, MAX_CONFIDENCE), 2)


def fixed_confidence(value: float) -> ConfidenceScorer:
    """Scorer that ignores content — useful for tests and trusted sources."""
    clamped = max(0.0, min(1.0, value))

    def _score(field: F, text: str) -> float:
        return clamped if (text or "").strip() else 0.0

    return _score
