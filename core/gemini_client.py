# core/gemini_client.py
import json
import logging
from typing import Any, Dict, Optional
import httpx
from pydantic import ValidationError
from config.settings import settings
from core.entities import ExtractedContent
from core.prompts import build_prompt
from model.claim import Analysis
from util.errors import ApiError, MalformedResponse
from util.functions import strip_code_fences
from util.timing import timed

logger = logging.getLogger(__name__)


def _endpoint(api_url: str, model: str) -> str:
    return f"{api_url.rstrip('/')}/{model}:generateContent"


def _payload(prompt: str) -> Dict[str, Any]:
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}


def _candidate_text(data: Any) -> str:
    """
    Dig `candidates[0].content.parts[0].text` out of the envelope.
    Any missing level is a MalformedResponse.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse("invalid response structure") from e
    if not isinstance(text, str):
        raise MalformedResponse("invalid response structure")
    return text


def parse_model_output(raw: str) -> Analysis:
    """
    Strip code fences, parse JSON, require string `verdict` + `explanation`.
    Unknown verdict strings are kept; they render as unclassified.
    """
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponse("response was not valid JSON") from e

    if not isinstance(parsed, dict):
        raise MalformedResponse("expected a JSON object")
    missing = [k for k in ("verdict", "explanation") if k not in parsed]
    if missing:
        raise MalformedResponse(f"missing keys: {', '.join(missing)}")
    if not isinstance(parsed["verdict"], str) or not isinstance(parsed["explanation"], str):
        raise MalformedResponse("verdict and explanation must be strings")

    try:
        analysis = Analysis(
            verdict=parsed["verdict"].strip(), explanation=parsed["explanation"].strip()
        )
    except ValidationError as e:
        raise MalformedResponse("empty verdict") from e

    if analysis.known_verdict is None:
        logger.warning("ai.evaluate.unknown_verdict verdict=%r", analysis.verdict[:40])
    return analysis


async def evaluate_claim(
    content: ExtractedContent,
    *,
    api_key: str = settings.GEMINI_API_KEY,
    model: str = settings.GEMINI_MODEL,
    api_url: str = settings.GEMINI_API_URL,
    http_timeout: float = settings.MODEL_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Analysis:
    """
    One POST to Gemini generateContent, no retries, no streaming.
    Raises ApiError (transport failure / non-2xx) or MalformedResponse.
    """
    prompt = build_prompt(content)
    if not api_key:
        # still sent; the endpoint rejects it and we surface ApiError
        logger.warning("ai.evaluate.no_api_key")

    with timed(logger, "ai.evaluate", model=model, mode=content.mode.value):
        try:
            async with httpx.AsyncClient(timeout=http_timeout, transport=transport) as client:
                resp = await client.post(
                    _endpoint(api_url, model),
                    params={"key": api_key},
                    headers={"content-type": "application/json"},
                    json=_payload(prompt),
                )
        except httpx.RequestError as e:
            logger.error("ai.evaluate.request_error err=%s", type(e).__name__)
            raise ApiError(type(e).__name__) from e

    if not resp.is_success:
        logger.error("ai.evaluate.bad_status status=%d", resp.status_code)
        raise ApiError(f"{resp.status_code} {resp.reason_phrase}".strip())

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponse("response body was not JSON") from e

    analysis = parse_model_output(_candidate_text(data))
    logger.info("ai.evaluate.result verdict=%s", analysis.category.value)
    return analysis
