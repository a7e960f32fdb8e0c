"""Services — AutoFillAssistant, LLMService, ResponseCache, chat commands."""

from part450_portal.services.assist_service import AutoFillAssistant
from part450_portal.services.commands import apply_command, describe_command, parse_command
from part450_portal.services.llm_service import LLMService
from part450_portal.services.response_cache import ResponseCache

__all__ = [
    "AutoFillAssistant",
    "LLMService",
    "ResponseCache",
    "apply_command",
    "describe_command",
    "parse_command",
]
