"""
Chat command parser for the application editor.

Recognized commands:
  save draft                     → SAVE_DRAFT
  submit application             → SUBMIT_APPLICATION
  replace <field> with <value>   → REPLACE_FIELD   (UNKNOWN_FIELD on alias miss)
  fill section <n> with <text>   → FILL_SECTION    (UNKNOWN_SECTION if out of range)
  auto fill / fill form / ...    → AUTO_FILL
Everything else parses as NONE and is left to the assistant.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from part450_portal.extraction.field_aliases import (
    DEFAULT_ALIAS_TABLE,
    FORM_SECTIONS,
    FieldAliasTable,
)
from part450_portal.models.enums import CommandKind
from part450_portal.models.schemas import ChatCommand

logger = logging.getLogger(__name__)

_REPLACE_RE = re.compile(r"^(?:replace|update|change)\s+(.+?)\s+(?:with|to)\s+(.+)$", re.I | re.S)
_FILL_SECTION_RE = re.compile(r"^fill\s+section\s+(\d+)\s+with\s+(.+)$", re.I | re.S)
_AUTO_FILL_PHRASES = ("auto fill", "autofill", "fill form", "analyze and fill", "fill application")


def parse_command(text: str, aliases: FieldAliasTable = DEFAULT_ALIAS_TABLE) -> ChatCommand:
    raw = (text or "").strip()
    lower = raw.lower()

    if lower == "save draft":
        return ChatCommand(kind=CommandKind.SAVE_DRAFT, raw=raw)
    if lower == "submit application":
        return ChatCommand(kind=CommandKind.SUBMIT_APPLICATION, raw=raw)

    match = _FILL_SECTION_RE.match(raw)
    if match:
        index = int(match.group(1)) - 1
        value = match.group(2).strip()
        if not 0 <= index < len(FORM_SECTIONS):
            return ChatCommand(kind=CommandKind.UNKNOWN_SECTION, section_index=index, value=value, raw=raw)
        return ChatCommand(kind=CommandKind.FILL_SECTION, section_index=index, value=value, raw=raw)

    match = _REPLACE_RE.match(raw)
    if match:
        label, value = match.group(1).strip(), match.group(2).strip()
        label = re.sub(r"^the\s+|\s+(?:section|field)$", "", label, flags=re.I)
        field = aliases.lookup(label)
        if field is None:
            logger.debug(f"[COMMAND] Unknown field in replace command: {label!r}")
            return ChatCommand(kind=CommandKind.UNKNOWN_FIELD, value=value, raw=raw)
        return ChatCommand(kind=CommandKind.REPLACE_FIELD, field=field, value=value, raw=raw)

    if any(phrase in lower for phrase in _AUTO_FILL_PHRASES):
        return ChatCommand(kind=CommandKind.AUTO_FILL, raw=raw)

    return ChatCommand(kind=CommandKind.NONE, raw=raw)


def apply_command(command: ChatCommand, form_state: Mapping[str, str]) -> dict[str, str]:
    """Return a new form state with the command's edits merged in."""
    updated = dict(form_state)
    if command.kind == CommandKind.REPLACE_FIELD and command.field is not None:
        updated[command.field.value] = command.value
    elif command.kind == CommandKind.FILL_SECTION and command.section_index is not None:
        for field in FORM_SECTIONS[command.section_index].fields:
            updated[field.value] = command.value
    return updated


def describe_command(command: ChatCommand) -> str:
    """Assistant-facing acknowledgement for a parsed command."""
    if command.kind == CommandKind.SAVE_DRAFT:
        return "Draft saved successfully."
    if command.kind == CommandKind.SUBMIT_APPLICATION:
        return "Opening email dialog to submit application to FAA officials."
    if command.kind == CommandKind.REPLACE_FIELD and command.field is not None:
        return f'I\'ve replaced the {command.field.value} section with: "{command.value}"'
    if command.kind == CommandKind.FILL_SECTION and command.section_index is not None:
        return f'Section {command.section_index + 1} filled with: "{command.value}"'
    if command.kind == CommandKind.UNKNOWN_SECTION:
        return f"Section {(command.section_index or 0) + 1} does not exist."
    if command.kind == CommandKind.UNKNOWN_FIELD:
        return "Field not found. Try a section name such as 'mission objective' or 'launch site'."
    if command.kind == CommandKind.AUTO_FILL:
        return "Analyzing your mission description to auto-fill the form."
    return (
        "I can help with general questions, form analysis, and dashboard commands like "
        "'save draft', 'submit application', or 'fill section X with ...'."
    )
