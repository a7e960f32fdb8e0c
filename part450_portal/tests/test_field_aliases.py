"""
Tests: Field Alias Table and Section Header catalog.

Run with:
    pytest part450_portal/tests/test_field_aliases.py -v
"""

import pytest
from part450_portal.extraction.field_aliases import (
    DEFAULT_ALIAS_TABLE,
    FIELD_ALIASES,
    FORM_SECTIONS,
    SECTION_HEADERS,
    FieldAliasTable,
    field_label,
    normalize_alias,
)
from part450_portal.extraction.response_extractor import extract
from part450_portal.models.enums import CanonicalField


class TestNormalizeAlias:
    def test_case_and_punctuation_collapse(self):
        assert normalize_alias("LAUNCH/RE-ENTRY SEQUENCE") == "launchreentrysequence"
        assert normalize_alias("launchReEntrySequence") == "launchreentrysequence"

    def test_digits_are_dropped(self):
        assert normalize_alias("Clarify Part 450") == "clarifypart"


class TestAliasTable:
    def test_every_header_resolves(self):
        """Alias closure: each catalog header maps to a canonical field."""
        missing = [h for h in SECTION_HEADERS if DEFAULT_ALIAS_TABLE.lookup(h) is None]
        assert missing == []

    def test_every_field_has_aliases(self):
        assert set(FIELD_ALIASES) == set(CanonicalField)

    def test_field_identifiers_resolve_to_themselves(self):
        for field in CanonicalField:
            assert DEFAULT_ALIAS_TABLE.lookup(field.value) is field

    def test_deprecated_spelling_resolves(self):
        assert DEFAULT_ALIAS_TABLE.lookup("launchReEntrySequence") is CanonicalField.LAUNCH_REENTRY_SEQUENCE

    def test_timeline_maps_to_intended_window(self):
        assert DEFAULT_ALIAS_TABLE.lookup("TIMELINE") is CanonicalField.INTENDED_WINDOW
        assert DEFAULT_ALIAS_TABLE.lookup("APPLICATION TIMELINE") is CanonicalField.FULL_APPLICATION_TIMELINE

    def test_unknown_label_is_a_miss(self):
        assert DEFAULT_ALIAS_TABLE.lookup("BUDGET") is None
        assert "budget" not in DEFAULT_ALIAS_TABLE

    def test_conflicting_alias_rejected(self):
        with pytest.raises(ValueError, match="maps to both"):
            FieldAliasTable({
                CanonicalField.LAUNCH_SITE: ("pad",),
                CanonicalField.LANDING_SITE: ("PAD",),
            })

    def test_empty_alias_rejected(self):
        with pytest.raises(ValueError, match="empty key"):
            FieldAliasTable({CanonicalField.LAUNCH_SITE: ("123",)})


class TestFormSections:
    def test_sections_cover_every_field_once(self):
        fields = [f for section in FORM_SECTIONS for f in section.fields]
        assert len(FORM_SECTIONS) == 7
        assert sorted(fields) == sorted(CanonicalField)

    def test_field_label(self):
        assert field_label(CanonicalField.MISSION_OBJECTIVE) == "Mission Objective"


class TestHeaderExtraction:
    @pytest.mark.parametrize("header", SECTION_HEADERS)
    def test_each_header_extracts_to_its_field(self, header):
        assert extract(f"{header}\nSome content") == {
            DEFAULT_ALIAS_TABLE.lookup(header).value: "Some content",
        }

    def test_table_holds_more_aliases_than_fields(self):
        assert len(DEFAULT_ALIAS_TABLE) > len(CanonicalField)
