"""
Keyword analysis — header-free fallback for plain mission prose.

Used by the auto-fill assistant when neither the LLM reply nor the user's
text carries section headers. Every value is evidence from the text: a
verbatim sentence, a regex match, or a known launch site named in the text
(plus that site's reference coordinates). Nothing is filled from a template.
"""

from __future__ import annotations

import logging
import re

from part450_portal.models.enums import CanonicalField as F

logger = logging.getLogger(__name__)

# ── Reference data ───────────────────────────────────────

KNOWN_LAUNCH_SITES: dict[str, str] = {
    "kennedy space center": "Kennedy Space Center",
    "ksc": "Kennedy Space Center",
    "cape canaveral space force station": "Cape Canaveral Space Force Station",
    "cape canaveral": "Cape Canaveral",
    "vandenberg space force base": "Vandenberg Space Force Base",
    "vandenberg": "Vandenberg",
    "wallops flight facility": "Wallops Flight Facility",
    "wallops": "Wallops",
    "spaceport america": "Spaceport America",
    "boca chica": "Boca Chica",
    "starbase": "Starbase",
}

SITE_COORDINATES: dict[str, str] = {
    "Kennedy Space Center": "28.5729° N, 80.6490° W",
    "Cape Canaveral": "28.5729° N, 80.6490° W",
    "Cape Canaveral Space Force Station": "28.5729° N, 80.6490° W",
    "Vandenberg": "34.6483° N, 120.6018° W",
    "Vandenberg Space Force Base": "34.6483° N, 120.6018° W",
    "Wallops": "37.9401° N, 75.4706° W",
    "Wallops Flight Facility": "37.9401° N, 75.4706° W",
    "Spaceport America": "32.9904° N, 106.9751° W",
    "Boca Chica": "25.9961° N, 97.1553° W",
    "Starbase": "25.9961° N, 97.1553° W",
}

# Most specific first; the first type with a keyword hit wins.
MISSION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "interplanetary": ("mars", "moon", "lunar", "martian", "interplanetary", "deep space", "planetary"),
    "suborbital": ("suborbital", "space tourism", "microgravity", "parabolic"),
    "orbital": ("orbital", "low earth orbit", "leo", "geosynchronous", "geostationary", "medium earth orbit"),
    "satellite": ("satellite", "telecommunications", "earth observation", "remote sensing"),
    "test": ("test flight", "demonstration", "prototype", "experimental"),
}

# Fields answered by the first sentence that mentions one of the keywords.
SENTENCE_KEYWORDS: dict[F, tuple[str, ...]] = {
    F.PROPULSION_TYPES: (
        "liquid", "solid", "hybrid", "electric propulsion", "methane", "kerosene", "lox",
        "hydrogen", "engine", "engines",
    ),
    F.RECOVERY_SYSTEMS: (
        "parachute", "parachutes", "reusable", "propulsive landing", "expendable",
        "splashdown", "recovery",
    ),
    F.AIRSPACE_MARITIME_NOTES: ("airspace", "flight corridor", "exclusion zone", "exclusion zones", "maritime"),
    F.LICENSE_TYPE_INTENT: ("operator license", "vehicle license", "mission-specific", "mission specific"),
    F.EARLY_RISK_ASSESSMENTS: ("risk assessment", "hazard analysis", "expected casualty"),
    F.PUBLIC_SAFETY_CHALLENGES: ("public safety", "public risk", "populated"),
}

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")
_COORD_RE = re.compile(
    r"\d+(?:\.\d+)?\s*°\s*[NS]\s*,?\s*\d+(?:\.\d+)?\s*°\s*[EW]", re.I
)
_MASS_RE = re.compile(r"\b\d[\d,]*(?:\.\d+)?\s*(?:kg|tonnes?|tons?|lbs?|pounds)\b", re.I)
_LENGTH_RE = re.compile(r"\b\d[\d,]*(?:\.\d+)?\s*(?:m|meters?|metres?|ft|feet)\b", re.I)
_WINDOW_RE = re.compile(
    r"\b(?:Q[1-4]\s*\d{4}|(?:early|mid|late)[\s-]\d{4}|(?:January|February|March|April|May|"
    r"June|July|August|September|October|November|December)\s+\d{4})\b",
    re.I,
)


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<![A-Za-z0-9])(?:{alternation})(?![A-Za-z0-9])", re.I)


_SITE_RE = _keyword_pattern(tuple(KNOWN_LAUNCH_SITES))
_MISSION_RES = {kind: _keyword_pattern(words) for kind, words in MISSION_KEYWORDS.items()}
_SENTENCE_RES = {field: _keyword_pattern(words) for field, words in SENTENCE_KEYWORDS.items()}


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text or "") if s.strip()]


def classify_mission(text: str) -> str | None:
    """Mission type from MISSION_KEYWORDS, or None when nothing matches."""
    for kind, pattern in _MISSION_RES.items():
        if pattern.search(text or ""):
            return kind
    return None


def find_launch_site(text: str) -> str | None:
    match = _SITE_RE.search(text or "")
    return KNOWN_LAUNCH_SITES[match.group(0).lower()] if match else None


class KeywordAnalysisStrategy:
    """Evidence-only field extraction from header-free prose."""

    name = "keyword_analysis"

    def extract(self, text: str) -> dict[str, str]:
        if not text or not text.strip():
            return {}
        fields: dict[str, str] = {}

        site = find_launch_site(text)
        if site:
            fields[F.LAUNCH_SITE.value] = site

        coords = _COORD_RE.search(text)
        if coords:
            fields[F.SITE_NAMES_COORDINATES.value] = coords.group(0)
        elif site and site in SITE_COORDINATES:
            fields[F.SITE_NAMES_COORDINATES.value] = f"{site}: {SITE_COORDINATES[site]}"

        measures = [m.group(0) for m in _MASS_RE.finditer(text)]
        measures += [m.group(0) for m in _LENGTH_RE.finditer(text)]
        if measures:
            fields[F.DIMENSIONS_MASS_STAGES.value] = "; ".join(dict.fromkeys(measures))

        window = _WINDOW_RE.search(text)
        if window:
            fields[F.LAUNCH_WINDOW.value] = window.group(0)

        sentences = split_sentences(text)
        for field, pattern in _SENTENCE_RES.items():
            hit = next((s for s in sentences if pattern.search(s)), None)
            if hit:
                fields[field.value] = hit

        logger.debug(f"[EXTRACT] Keyword analysis found {len(fields)} field(s): {sorted(fields)}")
        return fields
