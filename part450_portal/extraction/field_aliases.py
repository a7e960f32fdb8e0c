"""
Field Alias Table and Section Header catalog.

Both are plain configuration data: adding a new header means adding its
uppercase label to SECTION_HEADERS and (if it is new wording) an alias to
FIELD_ALIASES. Extraction and rule logic never need to change.

Alias keys are normalized with normalize_alias(): lower-cased, every
non-letter removed. "LAUNCH/RE-ENTRY SEQUENCE", "launch reentry sequence"
and "launchReEntrySequence" all collapse to "launchreentrysequence".
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from part450_portal.models.enums import CanonicalField as F
from part450_portal.models.schemas import FormSection

_NON_LETTERS = re.compile(r"[^a-z]")


def normalize_alias(label: str) -> str:
    return _NON_LETTERS.sub("", label.lower())


# ── Alias groups (human-readable; normalized at build time) ──
# Every alias must resolve to exactly one field. Single words that commonly
# open ordinary prose lines ("mass", "orbit", "schedule") are left out.

FIELD_ALIASES: dict[F, tuple[str, ...]] = {
    F.MISSION_OBJECTIVE: ("mission objective", "mission", "objective", "mission purpose"),
    F.VEHICLE_DESCRIPTION: ("vehicle description", "vehicle", "launch vehicle"),
    F.LAUNCH_REENTRY_SEQUENCE: (
        "launch reentry sequence", "launch sequence", "reentry sequence",
        "flight sequence", "mission sequence", "flight profile",
    ),
    F.TRAJECTORY_OVERVIEW: ("trajectory overview", "trajectory", "trajectory profile"),
    F.SAFETY_CONSIDERATIONS: ("safety considerations", "safety", "safety measures"),
    F.GROUND_OPERATIONS: ("ground operations", "ground ops"),
    F.TECHNICAL_SUMMARY: (
        "technical summary", "technical specifications", "technical data",
    ),
    F.DIMENSIONS_MASS_STAGES: (
        "dimensions mass stages", "dimensions", "physical characteristics",
        "vehicle dimensions",
    ),
    F.PROPULSION_TYPES: ("propulsion types", "propulsion", "propulsion system"),
    F.RECOVERY_SYSTEMS: ("recovery systems", "recovery", "recovery system"),
    F.GROUND_SUPPORT_EQUIPMENT: ("ground support equipment", "ground support", "gse"),
    F.SITE_NAMES_COORDINATES: (
        "site names coordinates", "site coordinates", "coordinates", "site names",
    ),
    F.SITE_OPERATOR: ("site operator", "facility operator"),
    F.AIRSPACE_MARITIME_NOTES: (
        "airspace maritime notes", "airspace", "airspace considerations",
        "exclusion zones",
    ),
    F.LAUNCH_SITE: ("launch site", "launch location", "launch pad"),
    F.LAUNCH_WINDOW: ("launch window", "launch timing"),
    F.FLIGHT_PATH: ("flight path", "flight route"),
    F.LANDING_SITE: (
        "landing site", "recovery site", "landing recovery site", "landing location",
    ),
    F.EARLY_RISK_ASSESSMENTS: (
        "early risk assessments", "risk assessment", "risk assessments",
        "hazard analysis", "risk analysis",
    ),
    F.PUBLIC_SAFETY_CHALLENGES: (
        "public safety challenges", "public safety", "public risk",
    ),
    F.PLANNED_SAFETY_TOOLS: (
        "planned safety tools", "safety tools", "safety analysis tools",
    ),
    F.FULL_APPLICATION_TIMELINE: (
        "full application timeline", "application timeline", "submission timeline",
    ),
    F.INTENDED_WINDOW: (
        "intended window", "timeline", "target window", "planned window",
        "mission window", "intended launch window",
    ),
    F.LICENSE_TYPE_INTENT: ("license type intent", "license type", "license intent"),
    F.CLARIFY_PART450: (
        "clarify part 450", "part 450 questions", "questions for faa", "faa questions",
    ),
    F.UNIQUE_TECH_INTERNATIONAL: (
        "unique tech international", "unique technology", "international aspects",
        "unique aspects",
    ),
}


class FieldAliasTable:
    """
    Normalized alias → canonical field lookup.

    Lookup is exact on the normalized key: an unknown label is a miss,
    never a guess.
    """

    def __init__(self, groups: Mapping[F, Iterable[str]]):
        self._table: dict[str, F] = {}
        for field, aliases in groups.items():
            for alias in (field.value, *aliases):
                self._register(normalize_alias(alias), field)

    def _register(self, key: str, field: F) -> None:
        if not key:
            raise ValueError(f"Alias for {field.value} normalizes to an empty key")
        existing = self._table.get(key)
        if existing is not None and existing is not field:
            raise ValueError(
                f"Alias '{key}' maps to both {existing.value} and {field.value}"
            )
        self._table[key] = field

    def lookup(self, label: str) -> F | None:
        return self._table.get(normalize_alias(label))

    def __contains__(self, label: str) -> bool:
        return self.lookup(label) is not None

    def __len__(self) -> int:
        return len(self._table)


DEFAULT_ALIAS_TABLE = FieldAliasTable(FIELD_ALIASES)


# ── Section Header catalog (catalog order matters for the regex pass) ──

_PUNCTUATED_HEADERS: tuple[str, ...] = (
    "LAUNCH/REENTRY SEQUENCE",
    "LAUNCH/RE-ENTRY SEQUENCE",
    "DIMENSIONS, MASS & STAGES",
    "DIMENSIONS/MASS/STAGES",
    "SITE NAMES & COORDINATES",
    "AIRSPACE/MARITIME NOTES",
    "LANDING/RECOVERY SITE",
    "UNIQUE TECH/INTERNATIONAL",
)

SECTION_HEADERS: tuple[str, ...] = tuple(
    alias.upper() for aliases in FIELD_ALIASES.values() for alias in aliases
) + _PUNCTUATED_HEADERS


# ── Part 450 pre-application form layout ─────────────────

FORM_SECTIONS: tuple[FormSection, ...] = (
    FormSection(
        title="Concept of Operations (CONOPS)",
        fields=(
            F.MISSION_OBJECTIVE, F.VEHICLE_DESCRIPTION, F.LAUNCH_REENTRY_SEQUENCE,
            F.TRAJECTORY_OVERVIEW, F.SAFETY_CONSIDERATIONS, F.GROUND_OPERATIONS,
        ),
    ),
    FormSection(
        title="Vehicle Overview",
        fields=(
            F.TECHNICAL_SUMMARY, F.DIMENSIONS_MASS_STAGES, F.PROPULSION_TYPES,
            F.RECOVERY_SYSTEMS, F.GROUND_SUPPORT_EQUIPMENT,
        ),
    ),
    FormSection(
        title="Planned Launch/Reentry Location(s)",
        fields=(F.SITE_NAMES_COORDINATES, F.SITE_OPERATOR, F.AIRSPACE_MARITIME_NOTES),
    ),
    FormSection(
        title="Launch Information",
        fields=(F.LAUNCH_SITE, F.LAUNCH_WINDOW, F.FLIGHT_PATH, F.LANDING_SITE),
    ),
    FormSection(
        title="Preliminary Risk or Safety Considerations",
        fields=(
            F.EARLY_RISK_ASSESSMENTS, F.PUBLIC_SAFETY_CHALLENGES, F.PLANNED_SAFETY_TOOLS,
        ),
    ),
    FormSection(
        title="Timeline & Intent",
        fields=(F.FULL_APPLICATION_TIMELINE, F.INTENDED_WINDOW, F.LICENSE_TYPE_INTENT),
    ),
    FormSection(
        title="List of Questions for FAA",
        fields=(F.CLARIFY_PART450, F.UNIQUE_TECH_INTERNATIONAL),
    ),
)


def field_label(field: F) -> str:
    """Human label for a field: its first alias, title-cased."""
    aliases = FIELD_ALIASES.get(field, ())
    return aliases[0].title() if aliases else field.value
