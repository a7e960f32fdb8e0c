"""
Response Extractor — free-form prose → {canonical field: value}.

Two ordered strategies sit behind one `extract()` call:

  1. SectionHeaderStrategy  — walks lines, treating catalog headers that open
                              a line as section delimiters.
  2. RegexFallbackStrategy  — only runs when pass 1 found nothing; finds
                              literal uppercase headers anywhere in the text
                              and captures the span up to the next one.

Missing a field is acceptable; assigning a wrong value is not. Unknown
headers and alias misses are dropped silently and no input ever raises.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol, Sequence

from part450_portal.extraction.confidence import ConfidenceScorer, keyword_confidence
from part450_portal.extraction.field_aliases import (
    DEFAULT_ALIAS_TABLE,
    SECTION_HEADERS,
    FieldAliasTable,
    field_label,
)
from part450_portal.models.enums import CanonicalField
from part450_portal.models.schemas import FieldSuggestion

logger = logging.getLogger(__name__)

_LEADING_DECORATION = re.compile(r"^[#*\s]+")
_TRAILING_DECORATION = re.compile(r"[*\s]+$")
_INLINE_DELIMITERS = (":", "-", "–", "—")


def _join_lines(chunks: Sequence[str]) -> str:
    return " ".join(c.strip() for c in chunks if c.strip()).strip()


class ExtractionStrategy(Protocol):
    name: str

    def extract(self, text: str) -> dict[str, str]: ...


def _literal_header_pattern(headers: Sequence[str]) -> re.Pattern[str]:
    """Literal uppercase headers anywhere, never inside a longer word."""
    alternation = "|".join(re.escape(h) for h in sorted(headers, key=len, reverse=True))
    return re.compile(rf"(?<![A-Za-z0-9])({alternation})(?![A-Za-z0-9])")


def _strip_delimiter(chunk: str) -> str:
    chunk = chunk.lstrip(" \t*")
    if chunk[:1] in _INLINE_DELIMITERS:
        chunk = chunk[1:]
    return chunk.strip(" \t*")


# ── Pass 1 ───────────────────────────────────────────────


class SectionHeaderStrategy:
    """Line-oriented segmentation on catalog headers (last write wins)."""

    name = "section_headers"

    def __init__(
        self,
        headers: Sequence[str] = SECTION_HEADERS,
        aliases: FieldAliasTable = DEFAULT_ALIAS_TABLE,
    ):
        self._aliases = aliases
        # Longest first so "PUBLIC SAFETY" is preferred over "SAFETY"-style prefixes
        self._headers = sorted({h.upper() for h in headers}, key=len, reverse=True)
        self._literal = _literal_header_pattern(self._headers)

    def match_header(self, line: str) -> tuple[str, str] | None:
        """
        Return (header, inline_text) when *line* is a header line, else None.

        A header line is a catalog header on its own, or a header followed by
        an inline delimiter (``MISSION OBJECTIVE: ...``). Case is ignored,
        except that a header written literally in capitals may also be
        followed directly by text (``LAUNCH SITE Kennedy Space Center``).
        """
        cleaned = _TRAILING_DECORATION.sub("", _LEADING_DECORATION.sub("", line))
        if not cleaned:
            return None

        for header in self._headers:
            if cleaned[: len(header)].upper() != header:
                continue
            rest = cleaned[len(header):]
            if not rest.strip():
                return header, ""
            stripped = rest.lstrip(" *\t")
            # Dashes only delimit when spaced ("SAFETY - ..."), not "SAFETY-CRITICAL"
            spaced = rest.lstrip("*")[:1].isspace()
            if stripped[:1] == ":" or (stripped[:1] in _INLINE_DELIMITERS and spaced):
                return header, stripped[1:].lstrip(" *\t").strip()
            if cleaned.startswith(header) and rest[:1].isspace():
                return header, rest.strip()
        return None

    def split_inline(self, header: str, inline: str) -> list[tuple[str, str]]:
        """Split a header line's inline text at further literal headers."""
        segments: list[tuple[str, str]] = []
        current, start = header, 0
        for match in self._literal.finditer(inline):
            segments.append((current, _strip_delimiter(inline[start:match.start()])))
            current, start = match.group(1), match.end()
        segments.append((current, _strip_delimiter(inline[start:])))
        return segments

    def _flush(self, section: str | None, buffer: list[str], fields: dict[str, str]) -> None:
        if section is None:
            return
        value = _join_lines(buffer)
        if not value:
            return
        field = self._aliases.lookup(section)
        if field is None:
            logger.debug(f"[EXTRACT] Dropping section with unknown alias: {section!r}")
            return
        if field.value in fields:
            logger.debug(f"[EXTRACT] {field.value} overwritten by later section {section!r}")
        fields[field.value] = value

    def extract(self, text: str) -> dict[str, str]:
        fields: dict[str, str] = {}
        section: str | None = None
        buffer: list[str] = []

        for raw in (text or "").splitlines():
            line = raw.strip()
            header = self.match_header(line) if line else None
            if header is not None:
                self._flush(section, buffer, fields)
                *closed, (section, inline) = self.split_inline(*header)
                for name, value in closed:
                    self._flush(name, [value], fields)
                buffer = [inline] if inline else []
                continue
            if line and section is not None:
                buffer.append(line)

        self._flush(section, buffer, fields)
        return fields


# ── Pass 2 ───────────────────────────────────────────────


class RegexFallbackStrategy:
    """
    Header spans found anywhere in the text, including mid-line.

    Only literal uppercase headers count here, since there are no line
    boundaries to lean on. Each header's first occurrence captures the text
    up to the next header occurrence (or end of text). Fields are then
    assigned in catalog order, so a later catalog header wins ties.
    """

    name = "regex_fallback"

    def __init__(
        self,
        headers: Sequence[str] = SECTION_HEADERS,
        aliases: FieldAliasTable = DEFAULT_ALIAS_TABLE,
    ):
        self._aliases = aliases
        self._catalog = list(dict.fromkeys(h.upper() for h in headers))
        self._pattern = _literal_header_pattern(self._catalog)

    def _spans(self, text: str) -> dict[str, str]:
        """First occurrence of each header → captured span."""
        matches = list(self._pattern.finditer(text))
        spans: dict[str, str] = {}
        for i, match in enumerate(matches):
            header = match.group(1)
            if header in spans:
                continue
            end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
            spans[header] = _join_lines(_strip_delimiter(text[match.end():end]).splitlines())
        return spans

    def extract(self, text: str) -> dict[str, str]:
        if not text:
            return {}
        spans = self._spans(text)
        fields: dict[str, str] = {}
        for header in self._catalog:
            value = spans.get(header, "")
            if not value:
                continue
            field = self._aliases.lookup(header)
            if field is None:
                logger.debug(f"[EXTRACT] Regex pass dropping unknown alias: {header!r}")
                continue
            fields[field.value] = value
        return fields


# ── Extractor ────────────────────────────────────────────


class ResponseExtractor:
    """
    Run strategies in order; the first non-empty result wins.

    Primary interface:
        fields      = extractor.extract(text)
        suggestions = extractor.suggest(text)
    """

    def __init__(
        self,
        headers: Sequence[str] = SECTION_HEADERS,
        aliases: FieldAliasTable = DEFAULT_ALIAS_TABLE,
        scorer: ConfidenceScorer = keyword_confidence,
        strategies: Sequence[ExtractionStrategy] | None = None,
    ):
        self.scorer = scorer
        self.strategies: tuple[ExtractionStrategy, ...] = tuple(
            strategies
            if strategies is not None
            else (
                SectionHeaderStrategy(headers, aliases),
                RegexFallbackStrategy(headers, aliases),
            )
        )

    def extract(self, text: str) -> dict[str, str]:
        if not text or not text.strip():
            return {}
        for strategy in self.strategies:
            fields = strategy.extract(text)
            if fields:
                logger.debug(
                    f"[EXTRACT] {strategy.name} produced {len(fields)} field(s): "
                    f"{sorted(fields)}"
                )
                return fields
        logger.debug(f"[EXTRACT] No section headers found in {len(text)} chars")
        return {}

    def suggest(self, text: str) -> list[FieldSuggestion]:
        """Extract and wrap each field as a scored suggestion."""
        return self.to_suggestions(self.extract(text))

    def to_suggestions(self, fields: dict[str, str], reasoning: str = "") -> list[FieldSuggestion]:
        suggestions: list[FieldSuggestion] = []
        for name, value in fields.items():
            field = CanonicalField(name)
            suggestions.append(FieldSuggestion(
                field=field,
                value=value,
                confidence=self.scorer(field, value),
                reasoning=reasoning or f"Taken from the '{field_label(field)}' section.",
            ))
        return suggestions


def extract(text: str) -> dict[str, str]:
    """Convenience wrapper using the default catalog."""
    return ResponseExtractor().extract(text)
