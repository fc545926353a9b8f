import io
import json
import os
from typing import Callable, List

# Settings are read at import time; pin them before any app module loads.
os.environ["APP_ENV"] = "test"
os.environ["GEMINI_API_KEY"] = "test-key"

import httpx
import pytest
from fastapi.testclient import TestClient

from controller.controller_dependencies import get_claim_evaluation_service
from core.session import EvaluationSession, get_session
from main import app
from service.claim_evaluation_service import ClaimEvaluationService

GEMINI_HOST = "generativelanguage.googleapis.com"


def gemini_envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def gemini_json(verdict: str, explanation: str = "Brain scans show activity everywhere.") -> dict:
    return gemini_envelope(json.dumps({"verdict": verdict, "explanation": explanation}))


class FakeUpstream:
    """Routes MockTransport traffic: Gemini host -> model_response, anything else -> proxy_response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.model_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, json=gemini_json("Myth")
        )
        self.proxy_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, text="<html><body><article>Vitamin C cures colds.</article></body></html>"
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEMINI_HOST:
            return self.model_response()
        return self.proxy_response()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def model_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == GEMINI_HOST]

    @property
    def proxy_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host != GEMINI_HOST]

    def model_prompt(self, index: int = -1) -> str:
        body = json.loads(self.model_calls[index].content)
        return body["contents"][0]["parts"][0]["text"]


class StubUpload:
    """Minimal UploadFile stand-in that records reads."""

    def __init__(self, filename: str, content_type: str, data: bytes = b"") -> None:
        self.filename = filename
        self.content_type = content_type
        self._buf = io.BytesIO(data)
        self.reads = 0

    async def read(self, size: int = -1) -> bytes:
        self.reads += 1
        return self._buf.read(size)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def session() -> EvaluationSession:
    return EvaluationSession()


@pytest.fixture
def service(session, upstream) -> ClaimEvaluationService:
    return ClaimEvaluationService(session, transport=upstream.transport)


@pytest.fixture
def client(session, service):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_claim_evaluation_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    import fitz

    def _make(*pages: str) -> bytes:
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text)
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    import docx

    def _make(*paragraphs: str) -> bytes:
        document = docx.Document()
        for p in paragraphs:
            document.add_paragraph(p)
        buf = io.BytesIO()
        document.save(buf)
        return buf.getvalue()

    return _make
