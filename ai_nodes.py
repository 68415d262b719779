# ai_nodes.py
import json
import logging
from typing import Any, List, Optional, Type, TypeVar

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from config import Settings, get_settings
from errors import (
    ConfigurationError,
    MalformedUpstreamPayload,
    UpstreamError,
    ValidationError,
)
from prompts import (
    ANALYZE_SYSTEM_PROMPT,
    EXPLAIN_SYSTEM_PROMPT,
    build_analyze_user_prompt,
    build_explain_user_prompt,
)
from sanitizer import ANALYSIS_FALLBACK, sanitize_analysis, sanitize_explanation
from schemas import (
    AnalyzeRequest,
    ExplainRequest,
    ExplanationResult,
    ScoreResult,
)

logger = logging.getLogger("lifestyle_api.ai")

MISSING_KEY_MESSAGE = "OPENAI_API_KEY is not configured"

RequestModel = TypeVar("RequestModel", bound=BaseModel)


# ---------- LLM factories ----------

def _chat_llm(settings: Settings, temperature: float) -> ChatOpenAI:
    """
    Single-attempt client: no SDK retries, explicit timeout.
    """
    return ChatOpenAI(
        model=settings.openai_model,
        temperature=temperature,
        api_key=settings.openai_credential,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout_seconds,
        max_retries=0,
    )


def _json_llm(settings: Settings, temperature: float = 0.3):
    """
    JSON-mode LLM used by the analysis relay.
    """
    return _chat_llm(settings, temperature).bind(
        response_format={"type": "json_object"}
    )


def _text_llm(settings: Settings, temperature: float = 0.4):
    """
    Free-text LLM used by the explanation relay.
    """
    return _chat_llm(settings, temperature)


# ---------- Shared helpers ----------

def _validate(model: Type[RequestModel], payload: Any) -> RequestModel:
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid body") from exc


def _require_credential(settings: Settings) -> str:
    key = settings.openai_credential
    if not key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)
    return key


def _invoke(llm, messages: List[BaseMessage]) -> Any:
    """Exactly one upstream call; every failure becomes UpstreamError."""
    try:
        return llm.invoke(messages)
    except Exception as exc:
        raise UpstreamError(f"OpenAI error: {exc}") from exc


def _content_text(response: Any) -> str:
    content = getattr(response, "content", None)
    if content is None:
        return ""
    if isinstance(content, list):
        # content blocks: keep only the text parts
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return str(content)


def _parse_completion_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedUpstreamPayload(f"Completion is not valid JSON: {exc}") from exc


# ---------- Analyze ----------

def analyze_node(payload: Any, settings: Optional[Settings] = None) -> ScoreResult:
    """
    Send the checked habits (plus optional goal / free text) to the model
    and return a bounded ScoreResult.

    Raises:
    - ValidationError: body does not match AnalyzeRequest
    - ConfigurationError: no OpenAI credential (upstream is not called)
    - UpstreamError: the single upstream call failed

    A completion that is not JSON is NOT an error: the caller gets
    ANALYSIS_FALLBACK with a success status.
    """
    request = _validate(AnalyzeRequest, payload)
    settings = settings or get_settings()
    _require_credential(settings)

    messages = [
        SystemMessage(content=ANALYZE_SYSTEM_PROMPT),
        HumanMessage(
            content=build_analyze_user_prompt(
                request.selected,
                goal=request.goal,
                user_input=request.input,
            )
        ),
    ]

    response = _invoke(_json_llm(settings, temperature=0.3), messages)
    # only a missing body counts as "{}"; an empty string is a parse failure
    if getattr(response, "content", None) is None:
        raw = "{}"
    else:
        raw = _content_text(response)

    try:
        parsed = _parse_completion_json(raw)
    except MalformedUpstreamPayload as exc:
        logger.warning(f"analyze: falling back to partial analysis ({exc})")
        parsed = ANALYSIS_FALLBACK

    return sanitize_analysis(parsed)


# ---------- Explain ----------

def explain_node(payload: Any, settings: Optional[Settings] = None) -> ExplanationResult:
    """
    Explain a single tip in 1–3 sentences.

    Same error contract as analyze_node, minus the JSON fallback:
    the reply is free text, trimmed and capped at 600 characters.
    """
    request = _validate(ExplainRequest, payload)
    settings = settings or get_settings()
    _require_credential(settings)

    messages = [
        SystemMessage(content=EXPLAIN_SYSTEM_PROMPT),
        HumanMessage(
            content=build_explain_user_prompt(
                request.tip,
                request.selected,
                goal=request.goal,
            )
        ),
    ]

    response = _invoke(_text_llm(settings, temperature=0.4), messages)
    return ExplanationResult(explanation=sanitize_explanation(_content_text(response)))
