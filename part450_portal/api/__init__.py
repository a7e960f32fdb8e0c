"""
FastAPI application factory and API package.

Run with:
    uvicorn part450_portal.api:app --reload --port 8000

Or via main.py:
    python -m part450_portal.main --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from part450_portal.api.routes import (
    assist_router,
    compliance_router,
    extract_router,
    health_router,
)
from part450_portal.compliance.engine import ComplianceEngine
from part450_portal.config import Settings, get_settings
from part450_portal.extraction.response_extractor import ResponseExtractor
from part450_portal.services.assist_service import AutoFillAssistant
from part450_portal.services.llm_service import LLMService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    engine: ComplianceEngine | None = None,
    assistant: AutoFillAssistant | None = None,
) -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = settings or get_settings()

    application = FastAPI(
        title="Part 450 Licensing Portal API",
        description="Field extraction, compliance scoring and auto-fill for FAA Part 450 pre-applications",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS — allow the frontend (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    extractor = ResponseExtractor()
    if assistant is None:
        generate = LLMService(settings).generate if settings.groq_api_key else None
        if generate is None:
            logger.warning("GROQ_API_KEY not set; auto-fill will use local extraction only")
        assistant = AutoFillAssistant(generate=generate, extractor=extractor, settings=settings)

    application.state.settings = settings
    application.state.engine = engine or ComplianceEngine()
    application.state.extractor = extractor
    application.state.assistant = assistant

    application.include_router(health_router, tags=["Health"])
    application.include_router(extract_router, prefix="/api", tags=["Extraction"])
    application.include_router(compliance_router, prefix="/api/compliance", tags=["Compliance"])
    application.include_router(assist_router, prefix="/api/assist", tags=["Assistant"])

    logger.info(f"Created {settings.app_name} API ({len(application.state.engine.rules)} rules)")
    return application


# Module-level instance for `uvicorn part450_portal.api:app`
app = create_app()
