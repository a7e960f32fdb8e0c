"""
Auto-fill Assistant — prompt the LLM, parse its prose, suggest field values.

The LLM is an injected `generate(prompt) -> str` callable. Its reply is
never trusted to be structured: the Response Extractor parses it. When that
yields nothing (or the call fails) the user's own text is parsed instead,
first for section headers and then by keyword analysis. Results are cached
by (mode, input, user id), where the input is the same truncated text the
prompt and the fallback see.
"""

from __future__ import annotations

import logging
from typing import Callable

from part450_portal.config import Settings, get_settings
from part450_portal.extraction.field_aliases import FORM_SECTIONS, field_label
from part450_portal.extraction.keyword_analysis import KeywordAnalysisStrategy, classify_mission
from part450_portal.extraction.response_extractor import ResponseExtractor
from part450_portal.models.enums import AssistMode
from part450_portal.models.schemas import AutoFillResult
from part450_portal.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]

NOTHING_EXTRACTED_MESSAGE = (
    "I couldn't extract enough information to auto-fill the form. Please provide "
    "more details about your mission, vehicle, and operations."
)

SYSTEM_PROMPT = """You are SPLI Chat, an assistant for FAA Part 450 launch and reentry licensing.
You help applicants with Part 450 compliance questions, licensing requirements and
pre-application forms. Always be professional, accurate, and compliance-focused."""

FORM_INSTRUCTIONS = """Analyze the mission description below and draft content for the
Part 450 pre-application. Answer ONLY with the sections you can support from the
description. Put each section header alone on its own line, in capitals, exactly as
listed, followed by the section content on the next lines. Do not invent facts.

Section headers:
{headers}"""

_REASONING = {
    "llm": "Parsed from the assistant's structured reply.",
    "local": "Parsed from section headers in your description.",
    "keywords": "Found in your description by keyword analysis.",
}


def primary_headers() -> list[str]:
    """One header per field, in form order."""
    return [field_label(f).upper() for section in FORM_SECTIONS for f in section.fields]


class AutoFillAssistant:
    def __init__(
        self,
        generate: TextGenerator | None = None,
        extractor: ResponseExtractor | None = None,
        cache: ResponseCache[AutoFillResult] | None = None,
        settings: Settings | None = None,
        keywords: KeywordAnalysisStrategy | None = None,
    ):
        self.settings = settings or get_settings()
        self.generate = generate
        self.extractor = extractor or ResponseExtractor()
        self.keywords = keywords or KeywordAnalysisStrategy()
        self.cache = cache if cache is not None else ResponseCache(
            max_entries=self.settings.cache_max_entries,
            ttl_seconds=self.settings.cache_ttl_seconds,
        )

    def truncate(self, user_input: str) -> str:
        return (user_input or "")[: self.settings.assist_input_max_chars]

    # ── Prompt ───────────────────────────────────────────

    def build_prompt(self, user_input: str, mode: AssistMode = AssistMode.FORM) -> str:
        parts = [SYSTEM_PROMPT]
        if mode == AssistMode.FORM:
            parts.append(FORM_INSTRUCTIONS.format(headers="\n".join(primary_headers())))
        parts.append(f"User input: {self.truncate(user_input)}")
        return "\n\n".join(parts)

    # ── Auto-fill ────────────────────────────────────────

    def _call_llm(self, prompt: str) -> tuple[str | None, bool]:
        """Return (reply, ok). ok is False only when the generator raised."""
        if self.generate is None:
            return None, True
        try:
            return self.generate(prompt), True
        except Exception as e:
            logger.warning(f"[ASSIST] LLM call failed, using local extraction: {e}")
            return None, False

    def _local_fields(self, text: str) -> tuple[dict[str, str], str]:
        fields = self.extractor.extract(text)
        if fields:
            return fields, "local"
        fields = self.keywords.extract(text)
        return fields, ("keywords" if fields else "none")

    def _build(self, text: str, mode: AssistMode) -> tuple[AutoFillResult, bool]:
        reply, llm_ok = self._call_llm(self.build_prompt(text, mode))

        fields: dict[str, str] = {}
        origin = "none"
        if reply:
            fields = self.extractor.extract(reply)
            origin = "llm" if fields else "none"
        if not fields:
            fields, origin = self._local_fields(text)

        suggestions = self.extractor.to_suggestions(
            fields, reasoning=_REASONING.get(origin, "")
        )
        mission_type = classify_mission(text) or ""

        if mode == AssistMode.CHAT and reply:
            message = reply.strip()
        elif fields:
            names = ", ".join(field_label(s.field) for s in suggestions)
            message = (
                "I've automatically filled the following sections based on your "
                f"mission description: {names}."
            )
            if mission_type:
                message += f" Detected mission type: {mission_type}."
        else:
            message = NOTHING_EXTRACTED_MESSAGE

        source = "local" if origin == "keywords" else origin
        logger.info(
            f"[ASSIST] mode={mode.value} source={source} ({origin}) "
            f"fields={len(fields)} mission_type={mission_type or '-'}"
        )
        result = AutoFillResult(
            fields=fields,
            suggestions=suggestions,
            message=message,
            source=source,
            mission_type=mission_type,
            mode=mode,
        )
        return result, llm_ok

    def autofill(
        self,
        user_input: str,
        user_id: str = "",
        mode: AssistMode = AssistMode.FORM,
    ) -> AutoFillResult:
        # The key covers exactly the text the prompt and the fallback see
        text = self.truncate(user_input)
        key = self.cache.make_key(mode.value, text, user_id)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[ASSIST] Cache hit for user={user_id!r} mode={mode.value}")
            return cached.model_copy(deep=True)

        result, cacheable = self._build(text, mode)
        # Failed LLM calls are not cached so the next request can retry
        if cacheable:
            self.cache.put(key, result.model_copy(deep=True))
        return result
