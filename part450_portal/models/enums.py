from __future__ import annotations

from enum import Enum

FIELD_CATALOG_VERSION = "part450-preapp-v1"


class CanonicalField(str, Enum):
    # ── 1. Concept of Operations (CONOPS) ────────────────
    MISSION_OBJECTIVE = "missionObjective"
    VEHICLE_DESCRIPTION = "vehicleDescription"
    LAUNCH_REENTRY_SEQUENCE = "launchReentrySequence"
    TRAJECTORY_OVERVIEW = "trajectoryOverview"
    SAFETY_CONSIDERATIONS = "safetyConsiderations"
    GROUND_OPERATIONS = "groundOperations"
    # ── 2. Vehicle Overview ──────────────────────────────
    TECHNICAL_SUMMARY = "technicalSummary"
    DIMENSIONS_MASS_STAGES = "dimensionsMassStages"
    PROPULSION_TYPES = "propulsionTypes"
    RECOVERY_SYSTEMS = "recoverySystems"
    GROUND_SUPPORT_EQUIPMENT = "groundSupportEquipment"
    # ── 3. Planned Launch/Reentry Location(s) ────────────
    SITE_NAMES_COORDINATES = "siteNamesCoordinates"
    SITE_OPERATOR = "siteOperator"
    AIRSPACE_MARITIME_NOTES = "airspaceMaritimeNotes"
    # ── 4. Launch Information ────────────────────────────
    LAUNCH_SITE = "launchSite"
    LAUNCH_WINDOW = "launchWindow"
    FLIGHT_PATH = "flightPath"
    LANDING_SITE = "landingSite"
    # ── 5. Preliminary Risk or Safety Considerations ─────
    EARLY_RISK_ASSESSMENTS = "earlyRiskAssessments"
    PUBLIC_SAFETY_CHALLENGES = "publicSafetyChallenges"
    PLANNED_SAFETY_TOOLS = "plannedSafetyTools"
    # ── 6. Timeline & Intent ─────────────────────────────
    FULL_APPLICATION_TIMELINE = "fullApplicationTimeline"
    INTENDED_WINDOW = "intendedWindow"
    LICENSE_TYPE_INTENT = "licenseTypeIntent"
    # ── 7. Questions for FAA ─────────────────────────────
    CLARIFY_PART450 = "clarifyPart450"
    UNIQUE_TECH_INTERNATIONAL = "uniqueTechInternational"

    @classmethod
    def from_name(cls, name: str) -> CanonicalField | None:
        """Resolve an exact field identifier or a deprecated spelling."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return DEPRECATED_FIELD_NAMES.get(name)


# Older call sites spelled the sequence field with a capital E.
DEPRECATED_FIELD_NAMES: dict[str, CanonicalField] = {
    "launchReEntrySequence": CanonicalField.LAUNCH_REENTRY_SEQUENCE,
}


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def score_weight(self) -> int:
        return _SEVERITY_WEIGHTS[self]


_SEVERITY_WEIGHTS = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 10,
    Severity.MEDIUM: 5,
    Severity.LOW: 0,
}


class RuleCategory(str, Enum):
    SAFETY = "safety"
    TECHNICAL = "technical"
    OPERATIONAL = "operational"
    DOCUMENTATION = "documentation"
    TIMELINE = "timeline"


class RuleKind(str, Enum):
    FIELD_PRESENCE = "field_presence"
    CUSTOM = "custom"


class AssistMode(str, Enum):
    FORM = "form"
    CHAT = "chat"


class CommandKind(str, Enum):
    NONE = "none"
    SAVE_DRAFT = "save_draft"
    SUBMIT_APPLICATION = "submit_application"
    REPLACE_FIELD = "replace_field"
    FILL_SECTION = "fill_section"
    AUTO_FILL = "auto_fill"
    UNKNOWN_FIELD = "unknown_field"
    UNKNOWN_SECTION = "unknown_section"
