"""Extraction — free-form prose → canonical field values."""

from part450_portal.extraction.field_aliases import (
    DEFAULT_ALIAS_TABLE,
    FIELD_ALIASES,
    FORM_SECTIONS,
    SECTION_HEADERS,
    FieldAliasTable,
    normalize_alias,
)
from part450_portal.extraction.keyword_analysis import KeywordAnalysisStrategy, classify_mission
from part450_portal.extraction.response_extractor import (
    RegexFallbackStrategy,
    ResponseExtractor,
    SectionHeaderStrategy,
    extract,
)

__all__ = [
    "DEFAULT_ALIAS_TABLE",
    "FIELD_ALIASES",
    "FORM_SECTIONS",
    "SECTION_HEADERS",
    "FieldAliasTable",
    "normalize_alias",
    "KeywordAnalysisStrategy",
    "classify_mission",
    "RegexFallbackStrategy",
    "ResponseExtractor",
    "SectionHeaderStrategy",
    "extract",
]
