"""
Lifestyle Score – API

FastAPI app exposing the local habit score and the two AI relays
(analysis + per-tip explanation).

File: api_main.py
"""

import logging
import os
import uuid
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_nodes import analyze_node, explain_node
from config import Settings, get_settings
from errors import ConfigurationError, ValidationError
from habits import HABITS
from schemas import (
    AnalyzeRequest,
    ErrorResponse,
    ExplainRequest,
    ExplanationResult,
    HabitDefinition,
    ScoreRequest,
    ScoreResponse,
    ScoreResult,
)
from scoring import score_selection, share_text

# --------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------

logger = logging.getLogger("lifestyle_api")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

INVALID_BODY = "Invalid body"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# --------------------------------------------------------------------
# FastAPI App
# --------------------------------------------------------------------

app = FastAPI(
    title="Lifestyle Score API",
    description=(
        "Local lifestyle habit score, AI-refined analysis, "
        "and short explanations for individual tips."
    ),
    version="1.0.0",
)

# CORS – the browser / Streamlit client may live on another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------------------------------
# Middleware
# --------------------------------------------------------------------


@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    """Attach a request ID to each request and log basic info."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    try:
        response = await call_next(request)
    except Exception as exc:  # global safety net
        logger.exception(f"[{request_id}] Unhandled error: {exc}")
        response = JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    response.headers["X-Request-ID"] = request_id
    return response


# --------------------------------------------------------------------
# Exception Handlers
# --------------------------------------------------------------------


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    request_id = getattr(request.state, "request_id", None)
    logger.warning(f"[{request_id}] HTTPException {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # malformed JSON, wrong types and out-of-bounds fields all look the same outside
    request_id = getattr(request.state, "request_id", None)
    logger.warning(f"[{request_id}] Invalid body: {len(exc.errors())} error(s)")
    return JSONResponse(status_code=400, content={"error": INVALID_BODY})


# --------------------------------------------------------------------
# Utility Helpers
# --------------------------------------------------------------------


def _error(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _relay_failure(error: str, exc: Exception, settings: Settings) -> JSONResponse:
    """Generic 500; the exception text is only exposed outside production."""
    detail = None if settings.is_production else str(exc)
    return _error(500, error, detail)


# --------------------------------------------------------------------
# Basic & Health
# --------------------------------------------------------------------


@app.get("/", tags=["meta"])
def root(settings: Settings = Depends(get_settings)):
    return {
        "message": "Lifestyle Score API is running.",
        "docs_url": "/docs",
        "environment": settings.env,
        "debug": settings.debug,
    }


@app.get("/health", tags=["meta"])
def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "openai_key_configured": bool(settings.openai_credential),
        "environment": settings.env,
    }


# --------------------------------------------------------------------
# Habits + Local Score
# --------------------------------------------------------------------


@app.get(
    "/api/habits",
    response_model=List[HabitDefinition],
    tags=["score"],
    summary="Ordered habit checklist",
)
def list_habits():
    return list(HABITS)


@app.post(
    "/api/score",
    response_model=ScoreResponse,
    responses=ERROR_RESPONSES,
    tags=["score"],
    summary="Deterministic local score (no AI)",
)
def local_score(req: ScoreRequest):
    result = score_selection(req.selected)
    return ScoreResponse(**result.model_dump(), share_text=share_text(result))


# --------------------------------------------------------------------
# AI Relays
# --------------------------------------------------------------------


@app.post(
    "/api/analyze",
    response_model=ScoreResult,
    responses=ERROR_RESPONSES,
    tags=["ai"],
    summary="AI-refined score, message and tips",
)
def analyze(req: AnalyzeRequest, settings: Settings = Depends(get_settings)):
    """
    Wraps ai_nodes.analyze_node.

    The client shows the local score first and swaps in this result
    when it arrives; on any non-200 it keeps the local one.
    """
    try:
        return analyze_node(req, settings)
    except ValidationError:
        return _error(400, INVALID_BODY)
    except ConfigurationError as e:
        return _error(500, str(e))
    except Exception as e:
        logger.exception(f"/api/analyze failed: {e}")
        return _relay_failure("Failed to analyze", e, settings)


@app.post(
    "/api/explain",
    response_model=ExplanationResult,
    responses=ERROR_RESPONSES,
    tags=["ai"],
    summary="Explain why a single tip matters",
)
def explain(req: ExplainRequest, settings: Settings = Depends(get_settings)):
    """
    Wraps ai_nodes.explain_node. Called on demand, one tip at a time.
    """
    try:
        return explain_node(req, settings)
    except ValidationError:
        return _error(400, INVALID_BODY)
    except ConfigurationError as e:
        return _error(500, str(e))
    except Exception as e:
        logger.exception(f"/api/explain failed: {e}")
        return _relay_failure("Failed to explain", e, settings)


# --------------------------------------------------------------------
# Local dev runner
# --------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api_main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=True,
    )
