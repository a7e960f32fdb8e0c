"""
API routes — thin HTTP layer over the extractor, engine and assistant.

Routes:
  GET  /health                       → API health check
  POST /api/extract                  → Parse prose into canonical fields
  POST /api/compliance/validate      → Aggregated ComplianceResult
  POST /api/compliance/score         → 0-100 compliance score
  POST /api/compliance/summary       → Per-category pass/fail summary
  POST /api/compliance/report        → Full dashboard report
  POST /api/assist/autofill          → LLM-backed auto-fill suggestions
  POST /api/assist/command           → Parse and apply a chat command
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from part450_portal.models.enums import FIELD_CATALOG_VERSION, AssistMode, CommandKind
from part450_portal.models.schemas import (
    AutoFillResult,
    ChatCommand,
    ComplianceReport,
    ComplianceResult,
    FieldSuggestion,
)
from part450_portal.services.commands import apply_command, describe_command, parse_command

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
extract_router = APIRouter()
compliance_router = APIRouter()
assist_router = APIRouter()


# ── Request / response schemas ───────────────────────────
class ExtractRequest(BaseModel):
    text: str


class ExtractResponse(BaseModel):
    fields: dict[str, str]
    suggestions: list[FieldSuggestion]


class FieldsRequest(BaseModel):
    fields: dict[str, str | None] = {}


class ScoreResponse(BaseModel):
    score: int


class AutoFillRequest(BaseModel):
    user_input: str
    user_id: str = ""
    mode: AssistMode = AssistMode.FORM


class CommandRequest(BaseModel):
    text: str
    form_state: dict[str, str] = {}


class CommandResponse(BaseModel):
    command: ChatCommand
    form_state: dict[str, str]
    message: str


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check(request: Request):
    return {
        "status": "ok",
        "app": request.app.state.settings.app_name,
        "rules": len(request.app.state.engine.rules),
        "catalog_version": FIELD_CATALOG_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Extraction ───────────────────────────────────────────

@extract_router.post("/extract", response_model=ExtractResponse)
async def extract_fields(body: ExtractRequest, request: Request):
    extractor = request.app.state.extractor
    fields = extractor.extract(body.text)
    return ExtractResponse(fields=fields, suggestions=extractor.to_suggestions(fields))


# ── Compliance ───────────────────────────────────────────

@compliance_router.post("/validate", response_model=ComplianceResult)
async def validate(body: FieldsRequest, request: Request):
    return request.app.state.engine.validate_application(body.fields)


@compliance_router.post("/score", response_model=ScoreResponse)
async def score(body: FieldsRequest, request: Request):
    return ScoreResponse(score=request.app.state.engine.get_compliance_score(body.fields))


@compliance_router.post("/summary")
async def summary(body: FieldsRequest, request: Request):
    result = request.app.state.engine.get_compliance_summary(body.fields)
    return {category.value: bucket.model_dump(mode="json") for category, bucket in result.items()}


@compliance_router.post("/report", response_model=ComplianceReport)
async def report(body: FieldsRequest, request: Request):
    return request.app.state.engine.generate_compliance_report(body.fields)


# ── Assistant ────────────────────────────────────────────

@assist_router.post("/autofill", response_model=AutoFillResult)
def autofill(body: AutoFillRequest, request: Request):
    # Sync handler: the LLM call blocks, FastAPI runs it in the threadpool
    if not body.user_input.strip():
        raise HTTPException(status_code=400, detail="user_input must not be empty")
    return request.app.state.assistant.autofill(body.user_input, body.user_id, body.mode)


@assist_router.post("/command", response_model=CommandResponse)
async def command(body: CommandRequest):
    parsed = parse_command(body.text)
    if parsed.kind == CommandKind.NONE:
        logger.debug(f"[COMMAND] No command in: {body.text[:80]!r}")
    return CommandResponse(
        command=parsed,
        form_state=apply_command(parsed, body.form_state),
        message=describe_command(parsed),
    )
