import asyncio
import logging
from typing import Awaitable, Optional, Tuple
import httpx
from fastapi import UploadFile
from config.settings import settings
from core.document_text import is_supported
from core.entities import ClaimSource, DocumentSource, TextSource, UrlSource
from core.gemini_client import evaluate_claim
from core.input_acquisition import acquire
from core.session import EvaluationSession
from model.state import EvaluationState
from util.enums import ErrorMessage, InputMode
from util.errors import (
    EmptyInput,
    EvaluationError,
    FileTooLarge,
    UnsupportedFileType,
)
from util.functions import normalize_media_type

logger = logging.getLogger(__name__)

Outcome = Tuple[EvaluationState, Optional[ErrorMessage]]


class ClaimEvaluationService:
    """
    Evaluation boundary: acquire -> evaluate -> publish.
    Pipeline errors never escape; they end up as `failed` in the session.
    """

    def __init__(
        self,
        session: EvaluationSession,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._session = session
        self._transport = transport

    @property
    def session(self) -> EvaluationSession:
        return self._session

    async def evaluate_text(self, text: str) -> Outcome:
        return await self.evaluate(TextSource(text=text))

    async def evaluate_url(self, url: str) -> Outcome:
        return await self.evaluate(UrlSource(url=url))

    async def evaluate_upload(self, file: Optional[UploadFile]) -> Outcome:
        """
        Media type is checked before the upload is read, so unsupported files
        are never pulled into memory.
        """
        self._session.begin(InputMode.DOCUMENT)
        return await self._settle(self._read_and_run(file), InputMode.DOCUMENT)

    async def evaluate(self, source: ClaimSource) -> Outcome:
        self._session.begin(source.mode)
        return await self._settle(self._run(source), source.mode)

    async def _settle(self, pending: Awaitable[Outcome], mode: InputMode) -> Outcome:
        # Everything after begin() runs here so no exit path leaves `loading`.
        try:
            return await pending
        except asyncio.CancelledError:
            logger.warning("claim.evaluate.cancelled mode=%s", mode.value)
            if self._session.is_loading:
                self._session.fail(ErrorMessage.INTERNAL_ERROR.value.message)
            raise

    async def _read_and_run(self, file: Optional[UploadFile]) -> Outcome:
        if file is None or not file.filename:
            return self._publish_error(EmptyInput("no file selected"))
        if not is_supported(file.content_type):
            media_type = normalize_media_type(file.content_type) or None
            return self._publish_error(UnsupportedFileType(media_type))
        max_bytes = settings.MAX_FILE_MB * 1024 * 1024
        try:
            # Hard cap while reading (Content-Length may be absent or wrong)
            data = await file.read(max_bytes + 1)
        except Exception:
            logger.exception("upload.read.error")
            return self._publish_unexpected()
        if len(data) > max_bytes:
            return self._publish_error(FileTooLarge(f"max {settings.MAX_FILE_MB} MB"))
        logger.info("upload.ok bytes=%d", len(data))
        source = DocumentSource(data=data, mime_type=file.content_type or "")
        return await self._run(source)

    async def _run(self, source: ClaimSource) -> Outcome:
        try:
            content = await acquire(
                source, max_chars=settings.MAX_CONTENT_CHARS, transport=self._transport
            )
            analysis = await evaluate_claim(
                content,
                api_key=settings.GEMINI_API_KEY,
                model=settings.GEMINI_MODEL,
                api_url=settings.GEMINI_API_URL,
                http_timeout=settings.MODEL_TIMEOUT_SECONDS,
                transport=self._transport,
            )
        except EvaluationError as e:
            return self._publish_error(e)
        except Exception:
            logger.exception("claim.evaluate.unexpected mode=%s", source.mode.value)
            return self._publish_unexpected()

        self._session.succeed(analysis)
        logger.info(
            "claim.evaluate.ok mode=%s verdict=%s",
            source.mode.value,
            analysis.category.value,
        )
        return self._session.snapshot(), None

    def _publish_error(self, error: EvaluationError) -> Outcome:
        logger.warning(
            "claim.evaluate.failed kind=%s detail=%s",
            error.kind.name,
            error.detail or "-",
        )
        self._session.fail(error.message)
        return self._session.snapshot(), error.kind

    def _publish_unexpected(self) -> Outcome:
        self._session.fail(ErrorMessage.INTERNAL_ERROR.value.message)
        return self._session.snapshot(), ErrorMessage.INTERNAL_ERROR
