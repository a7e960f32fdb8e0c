"""
LLM Service — Groq Cloud chat model behind a plain text interface.

The assistant only needs `generate(prompt) -> str`; this class supplies it
from a langchain-groq ChatGroq model built lazily from settings. Build one
per application (see api.create_app) and pass it where it is needed.
"""

from __future__ import annotations

import logging
import time

from part450_portal.config import Settings, get_settings

logger = logging.getLogger(__name__)


class LLMService:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._llm = None

    def get_llm(self):
        """Return the configured ChatGroq model, creating it on first use."""
        if self._llm is not None:
            return self._llm

        if not self.settings.groq_api_key:
            raise ValueError("GROQ_API_KEY is not set in environment / .env file")

        from langchain_groq import ChatGroq

        self._llm = ChatGroq(
            api_key=self.settings.groq_api_key,
            model=self.settings.llm_model,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
        )
        logger.info(f"Initialized Groq LLM: {self.settings.llm_model}")
        return self._llm

    def generate(self, prompt: str) -> str:
        """
        Call the LLM and return the raw text response.
        Retries up to `llm_max_retries` times on empty responses.
        """
        logger.debug(f"[LLM-TEXT] Prompt length: {len(prompt)} chars")
        logger.debug(f"[LLM-TEXT] Prompt preview:\n{prompt[:500]}{'…' if len(prompt) > 500 else ''}")

        llm = self.get_llm()
        attempts = self.settings.llm_max_retries + 1
        content = ""

        for attempt in range(1, attempts + 1):
            t0 = time.perf_counter()
            response = llm.invoke(prompt)
            elapsed = time.perf_counter() - t0
            content = response.content or ""

            meta = getattr(response, "response_metadata", {}) or {}
            finish_reason = meta.get("finish_reason", "unknown")
            usage = meta.get("token_usage") or meta.get("usage", {})
            logger.info(
                f"[LLM-TEXT] Response received in {elapsed:.2f}s | "
                f"Response length: {len(content)} chars | "
                f"finish_reason={finish_reason} | "
                f"tokens={usage}"
            )

            if content.strip():
                return content

            logger.warning(
                f"[LLM-TEXT] Empty response on attempt {attempt}/{attempts} "
                f"(finish_reason={finish_reason}). "
                f"{'Retrying…' if attempt < attempts else 'No retries left.'}"
            )

        return content
