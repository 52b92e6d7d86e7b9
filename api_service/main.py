"""FastAPI application exposing the AccessiCinema command engine."""

from __future__ import annotations

import hashlib
import hmac
import logging
import os
import time
from dataclasses import dataclass
from typing import Final

from fastapi import FastAPI, HTTPException, Request
from starlette import status

from accessicinema.braille import encode as encode_braille
from accessicinema.const import (
    DEFAULT_AI_PROVIDER,
    DEFAULT_CELLS_PER_LINE,
    DEFAULT_TELEMETRY_MAX_EVENTS,
)
from accessicinema.content_store import (
    ContentNotFoundError,
    ContentStore,
    ContentStoreError,
    HttpContentStore,
    InMemoryContentStore,
)
from accessicinema.engine import CommandInterpreter
from accessicinema.providers import AssistantService
from accessicinema.router import InvalidArgumentError
from accessicinema.scoring import analyze_accessibility, score_content
from accessicinema.telemetry import TelemetryRecorder

from .schema import (
    AccessibilityReport,
    AccessibilityScore,
    AssistantRequest,
    BrailleDocument,
    BrailleRequest,
    CommandRequest,
    CommandResponse,
    ContentItem,
)

SIGNATURE_HEADER = "X-AccessiCinema-Signature"

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Service configuration derived from environment variables."""

    catalog_api_url: str | None
    catalog_api_key: str | None
    catalog_timeout_s: float
    braille_cells_per_line: int
    ai_provider: str
    telemetry_max_events: int
    shared_secret: str | None


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _load_settings() -> Settings:
    """Load service configuration from environment variables."""

    return Settings(
        catalog_api_url=os.getenv("CATALOG_API_URL"),
        catalog_api_key=os.getenv("CATALOG_API_KEY"),
        catalog_timeout_s=_parse_float(os.getenv("CATALOG_TIMEOUT_S"), 2.0),
        braille_cells_per_line=_parse_int(
            os.getenv("BRAILLE_CELLS_PER_LINE"), DEFAULT_CELLS_PER_LINE
        ),
        ai_provider=os.getenv("AI_PROVIDER") or DEFAULT_AI_PROVIDER,
        telemetry_max_events=_parse_int(
            os.getenv("TELEMETRY_MAX_EVENTS"), DEFAULT_TELEMETRY_MAX_EVENTS
        ),
        shared_secret=os.getenv("API_SHARED_SECRET"),
    )


def _build_store(settings: Settings) -> ContentStore:
    if settings.catalog_api_url:
        return HttpContentStore(
            settings.catalog_api_url,
            api_key=settings.catalog_api_key,
            timeout=settings.catalog_timeout_s,
        )
    return InMemoryContentStore()


def _now() -> float:
    """Obtain a monotonic timestamp for duration measurements."""

    return time.perf_counter()


SETTINGS: Final[Settings] = _load_settings()
METRICS: dict[str, list[dict[str, float]]] = {"interpret": [], "assistant": []}
TELEMETRY = TelemetryRecorder(max_events=SETTINGS.telemetry_max_events)
_STORE: ContentStore = _build_store(SETTINGS)
_INTERPRETER = CommandInterpreter(_STORE, telemetry=TELEMETRY)
_ASSISTANT = AssistantService(default_provider=SETTINGS.ai_provider)
app = FastAPI(title="AccessiCinema")


def _record_metric(name: str, total_ms: float) -> None:
    METRICS.setdefault(name, []).append({"total_ms": total_ms})


@app.post("/commands/interpret", response_model=CommandResponse)
async def interpret(request: Request, payload: CommandRequest) -> CommandResponse:
    """Interpret a spoken or typed command for the caller's current context."""

    await _verify_request(request)

    start = _now()
    try:
        response = await _INTERPRETER.interpret(
            payload.utterance,
            payload.context,
            content_id=payload.content_id,
            user_id=payload.user_id,
        )
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ContentStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    finally:
        _record_metric("interpret", max((_now() - start) * 1000, 0.0))

    return response


@app.post("/braille/encode", response_model=BrailleDocument)
async def braille(request: Request, payload: BrailleRequest) -> BrailleDocument:
    """Render text as Braille cells."""

    await _verify_request(request)

    cells_per_line = payload.cells_per_line or SETTINGS.braille_cells_per_line
    return encode_braille(payload.text, payload.grade, cells_per_line)


@app.post("/accessibility/score", response_model=AccessibilityScore)
async def accessibility_score(request: Request, item: ContentItem) -> AccessibilityScore:
    await _verify_request(request)
    return score_content(item)


@app.get("/content/{content_id}/accessibility", response_model=AccessibilityReport)
async def accessibility_report(request: Request, content_id: int) -> AccessibilityReport:
    """Analyze the accessibility features of a stored item."""

    await _verify_request(request)

    try:
        item = await _STORE.fetch_by_id(content_id)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ContentStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return analyze_accessibility(item)


@app.post("/assistant/query", response_model=CommandResponse)
async def assistant_query(request: Request, payload: AssistantRequest) -> CommandResponse:
    """Forward an assistant question to the configured provider."""

    await _verify_request(request)

    start = _now()
    response = await _ASSISTANT.query(payload)
    _record_metric("assistant", max((_now() - start) * 1000, 0.0))
    return response


@app.get("/assistant/proactive/{user_id}", response_model=CommandResponse)
async def assistant_proactive(
    request: Request, user_id: str, context: str = "general"
) -> CommandResponse:
    """Offer unprompted help for the screen the user is on."""

    await _verify_request(request)
    _LOGGER.info("assistant_proactive user_id=%s context=%s", user_id, context)
    return _ASSISTANT.proactive(context)


async def _verify_request(request: Request) -> None:
    if not SETTINGS.shared_secret:
        return
    body = await request.body()
    _enforce_signature(body, request.headers.get(SIGNATURE_HEADER))


def _enforce_signature(body: bytes, provided: str | None) -> None:
    secret = SETTINGS.shared_secret or ""
    if not secret:
        return
    if not provided:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing signature"
        )
    expected = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    if not hmac.compare_digest(provided, expected):
        _LOGGER.warning("request_signature_rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature"
        )
