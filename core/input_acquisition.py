# core/input_acquisition.py
import logging
from typing import Optional
import httpx
from starlette.concurrency import run_in_threadpool
from config.settings import settings
from core.document_text import extract_document_text, is_supported
from core.entities import (
    ClaimSource,
    DocumentSource,
    ExtractedContent,
    TextSource,
    UrlSource,
)
from util.enums import InputMode
from util.errors import EmptyInput, FetchFailed, NoReadableText, UnsupportedFileType
from util.functions import normalize_media_type, truncate
from util.timing import timed

logger = logging.getLogger(__name__)


def acquire_text(text: str) -> str:
    """Typed claims pass through unchanged once they are known to be non-blank."""
    if not (text or "").strip():
        raise EmptyInput()
    return text


async def fetch_url(
    url: str,
    *,
    proxy_url: str = settings.CONTENT_PROXY_URL,
    timeout: float = settings.FETCH_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    GET the page through the pass-through proxy (target percent-encoded in
    `?url=`). The raw body is returned as-is; boilerplate removal is left to
    the prompt.
    """
    if not (url or "").strip():
        raise EmptyInput()
    target = url.strip()
    try:
        with timed(logger, "proxy.fetch"):
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                res = await client.get(proxy_url, params={"url": target})
    except httpx.RequestError as e:
        logger.error("proxy.request_error err=%s", type(e).__name__)
        raise FetchFailed(type(e).__name__) from e

    if not res.is_success:
        logger.warning("proxy.bad_status status=%d", res.status_code)
        raise FetchFailed(f"status {res.status_code}")

    logger.info("proxy.fetch.ok chars=%d", len(res.text))
    return res.text


async def acquire(
    source: ClaimSource,
    *,
    max_chars: int = settings.MAX_CONTENT_CHARS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ExtractedContent:
    """
    Turn any ClaimSource into prompt-ready ExtractedContent:
      - text:     identity (after the blank check)
      - url:      raw proxied markup
      - document: PDF/DOCX text, decoded in the threadpool
    Result is a prefix cut to `max_chars` and must be non-blank.
    """
    if isinstance(source, TextSource):
        raw = acquire_text(source.text)
    elif isinstance(source, UrlSource):
        raw = await fetch_url(source.url, transport=transport)
    elif isinstance(source, DocumentSource):
        if not is_supported(source.mime_type):
            raise UnsupportedFileType(normalize_media_type(source.mime_type) or None)
        raw = await run_in_threadpool(
            extract_document_text, source.data, source.mime_type
        )
    else:
        raise TypeError(f"Unknown claim source: {type(source).__name__}")

    text = truncate(raw, max_chars)
    if not text.strip():
        logger.info("acquire.blank mode=%s", source.mode.value)
        raise NoReadableText()

    if len(text) < len(raw):
        logger.info(
            "acquire.truncated mode=%s from=%d to=%d", source.mode.value, len(raw), len(text)
        )
    return ExtractedContent(text=text, mode=InputMode(source.mode))
