from __future__ import annotations

import logging
import os

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .exceptions import (
    AIServiceError,
    AITimeoutError,
    InvalidAnalysis,
    InvalidInput,
    RateLimitedError,
    RecommendationsNotFound,
    RoomNotFound,
)
from .recommendations.formatter import build_error_envelope, build_success_envelope
from .recommendations.models import RecommendationRequest, RecommendationResponse
from .recommendations.service import get_recommendations
from .rooms.store import get_recommendations_for_room, save_recommendations

logger = logging.getLogger(__name__)

app = FastAPI(title="Dine Genius API", version="1.0.0")

_allowed_origins = os.environ.get("ALLOWED_ORIGINS", "")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _allowed_origins.split(",") if o.strip()] or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handling ───────────────────────────────────────────────────────


def _error(message: str, status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error_envelope(message, status_code, str(exc)),
    )


@app.exception_handler(InvalidInput)
def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return _error("Invalid request data", 400, exc)


@app.exception_handler(AITimeoutError)
def ai_timeout_handler(request: Request, exc: AITimeoutError) -> JSONResponse:
    return _error("AI service timed out", 504, exc)


@app.exception_handler(RateLimitedError)
def ai_rate_limited_handler(request: Request, exc: RateLimitedError) -> JSONResponse:
    return _error("AI service temporarily unavailable", 503, exc)


@app.exception_handler(AIServiceError)
def ai_service_handler(request: Request, exc: AIServiceError) -> JSONResponse:
    return _error("AI service temporarily unavailable", 503, exc)


@app.exception_handler(InvalidAnalysis)
def invalid_analysis_handler(request: Request, exc: InvalidAnalysis) -> JSONResponse:
    logger.error("Vote analysis contract violated: %s", exc)
    return _error("Internal server error", 500, exc)


@app.exception_handler(RoomNotFound)
@app.exception_handler(RecommendationsNotFound)
def not_found_handler(request: Request, exc: LookupError) -> JSONResponse:
    return _error("Recommendations not found", 404, exc)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/")
def root() -> dict[str, str]:
    return {"status": "success", "message": "Hello World from Dine Genius API"}


@app.get("/health")
def health() -> dict:
    return build_success_envelope({"status": "ok"})


def _persist_recommendations(room_id: str, payload: dict) -> None:
    try:
        save_recommendations(room_id, payload)
    except Exception:
        logger.error("Saving recommendations for room %s failed", room_id, exc_info=True)


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    background_tasks: BackgroundTasks,
) -> RecommendationResponse:
    response = get_recommendations(body)

    # Persist after the response is sent
    if body.room_id:
        background_tasks.add_task(
            _persist_recommendations,
            body.room_id,
            response.model_dump(by_alias=True, mode="json"),
        )
    else:
        logger.info("No roomId supplied, recommendations are not stored")

    return response


@app.get("/recommendations/{room_id}")
def stored_recommendations(room_id: str) -> dict:
    return build_success_envelope(get_recommendations_for_room(room_id))
