"""
Tests: Chat command parsing and form-state updates.

Run with:
    pytest part450_portal/tests/test_commands.py -v
"""

import pytest
from part450_portal.models.enums import CanonicalField, CommandKind
from part450_portal.services.commands import apply_command, describe_command, parse_command


class TestParseCommand:
    @pytest.mark.parametrize("text", ["save draft", "  Save Draft  "])
    def test_save_draft(self, text):
        assert parse_command(text).kind == CommandKind.SAVE_DRAFT

    def test_submit_application(self):
        assert parse_command("submit application").kind == CommandKind.SUBMIT_APPLICATION

    def test_replace_field_by_alias(self):
        cmd = parse_command("replace launch site with Vandenberg SFB, SLC-4E")
        assert cmd.kind == CommandKind.REPLACE_FIELD
        assert cmd.field == CanonicalField.LAUNCH_SITE
        assert cmd.value == "Vandenberg SFB, SLC-4E"

    def test_replace_field_by_identifier(self):
        cmd = parse_command("replace the missionObjective section with Land on Mars")
        assert cmd.field == CanonicalField.MISSION_OBJECTIVE
        assert cmd.value == "Land on Mars"

    def test_replace_unknown_field(self):
        cmd = parse_command("replace budget with ten million")
        assert cmd.kind == CommandKind.UNKNOWN_FIELD
        assert cmd.field is None

    def test_fill_section(self):
        cmd = parse_command("fill section 4 with TBD")
        assert cmd.kind == CommandKind.FILL_SECTION
        assert cmd.section_index == 3
        assert cmd.value == "TBD"

    @pytest.mark.parametrize("number", ["0", "8", "42"])
    def test_fill_section_out_of_range(self, number):
        cmd = parse_command(f"fill section {number} with TBD")
        assert cmd.kind == CommandKind.UNKNOWN_SECTION

    @pytest.mark.parametrize(
        "text",
        ["auto fill", "please AUTOFILL this", "fill form", "analyze and fill", "fill application"],
    )
    def test_auto_fill(self, text):
        assert parse_command(text).kind == CommandKind.AUTO_FILL

    @pytest.mark.parametrize("text", ["", "What is Part 450?", "save the draft later"])
    def test_no_command(self, text):
        assert parse_command(text).kind == CommandKind.NONE


class TestApplyCommand:
    def test_replace_does_not_mutate_input(self):
        state = {"launchSite": "KSC"}
        updated = apply_command(parse_command("replace launch site with CCSFS"), state)
        assert updated == {"launchSite": "CCSFS"}
        assert state == {"launchSite": "KSC"}

    def test_fill_section_sets_every_field(self):
        updated = apply_command(parse_command("fill section 7 with Pending"), {})
        assert updated == {"clarifyPart450": "Pending", "uniqueTechInternational": "Pending"}

    def test_non_editing_commands_leave_state(self):
        state = {"launchSite": "KSC"}
        for text in ("save draft", "fill section 9 with x", "replace budget with 1"):
            assert apply_command(parse_command(text), state) == state


class TestDescribeCommand:
    def test_unknown_section_message(self):
        assert describe_command(parse_command("fill section 9 with x")) == "Section 9 does not exist."

    def test_replace_message(self):
        message = describe_command(parse_command("replace launch site with CCSFS"))
        assert message == 'I\'ve replaced the launchSite section with: "CCSFS"'
