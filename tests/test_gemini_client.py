import json
import httpx
import pytest
from conftest import gemini_envelope, gemini_json
from core.entities import ExtractedContent
from core.gemini_client import evaluate_claim, parse_model_output
from core.prompts import build_prompt
from model.claim import Verdict, VerdictCategory
from util.enums import InputMode
from util.errors import ApiError, MalformedResponse

BARE = '{"verdict": "Myth", "explanation": "You use virtually all of your brain."}'


def test_fenced_and_bare_output_parse_identically():
    fenced = f"```json\n{BARE}\n```"
    assert parse_model_output(fenced) == parse_model_output(BARE)


def test_known_verdicts_map_to_categories():
    a = parse_model_output('{"verdict": "Partially True", "explanation": "Depends."}')
    assert a.known_verdict == Verdict.partially_true
    assert a.category == VerdictCategory.partially_true


def test_unknown_verdict_is_kept_as_unclassified():
    a = parse_model_output('{"verdict": "Unproven", "explanation": "Not enough data."}')
    assert a.verdict == "Unproven"
    assert a.known_verdict is None
    assert a.category == VerdictCategory.unclassified


@pytest.mark.parametrize(
    "raw",
    [
        '{"verdict": "Myth", "explanation": "unterminated',
        "not json at all",
        '["Myth", "list"]',
        '{"verdict": "Myth"}',
        '{"explanation": "no verdict"}',
        '{"verdict": 1, "explanation": "number"}',
        '{"verdict": "  ", "explanation": "blank verdict"}',
    ],
)
def test_bad_model_output_is_malformed(raw):
    with pytest.raises(MalformedResponse):
        parse_model_output(raw)


def test_unterminated_json_message_mentions_parse():
    with pytest.raises(MalformedResponse) as exc:
        parse_model_output('{"verdict": "Myth"')
    assert "parse" in exc.value.message.lower()


def test_url_prompt_asks_to_skip_page_chrome():
    prompt = build_prompt(ExtractedContent(text="<nav>menu</nav>", mode=InputMode.URL))
    assert "navigation" in prompt and "footers" in prompt
    assert "<nav>menu</nav>" in prompt


@pytest.mark.parametrize("mode", [InputMode.TEXT, InputMode.DOCUMENT])
def test_direct_prompt_has_format_contract(mode):
    prompt = build_prompt(ExtractedContent(text="Carrots improve night vision.", mode=mode))
    assert "navigation" not in prompt
    assert '"verdict"' in prompt and '"explanation"' in prompt
    assert '"Fact", "Myth", or "Partially True"' in prompt
    assert "Carrots improve night vision." in prompt


@pytest.mark.asyncio
async def test_request_shape(upstream):
    content = ExtractedContent(text="Eating carrots improves eyesight.", mode=InputMode.TEXT)
    analysis = await evaluate_claim(
        content, api_key="k-123", model="gemini-test", transport=upstream.transport
    )
    assert analysis.verdict == "Myth"

    (req,) = upstream.model_calls
    assert req.method == "POST"
    assert req.url.path.endswith("/models/gemini-test:generateContent")
    assert req.url.params["key"] == "k-123"
    body = json.loads(req.content)
    assert len(body["contents"]) == 1
    assert body["contents"][0]["role"] == "user"
    assert body["contents"][0]["parts"] == [{"text": build_prompt(content)}]


@pytest.mark.asyncio
async def test_fenced_envelope_text(upstream):
    upstream.model_response = lambda: httpx.Response(
        200, json=gemini_envelope(f"```json\n{BARE}\n```\n")
    )
    content = ExtractedContent(text="claim", mode=InputMode.TEXT)
    analysis = await evaluate_claim(content, transport=upstream.transport)
    assert analysis.category == VerdictCategory.myth


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [400, 403, 429, 500, 503])
async def test_non_success_status_is_api_error(upstream, code):
    upstream.model_response = lambda: httpx.Response(code, json={"error": {"code": code}})
    with pytest.raises(ApiError) as exc:
        await evaluate_claim(
            ExtractedContent(text="claim", mode=InputMode.TEXT), transport=upstream.transport
        )
    assert str(code) in exc.value.message
    assert len(upstream.model_calls) == 1


@pytest.mark.asyncio
async def test_timeout_is_api_error():
    def hang(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ApiError):
        await evaluate_claim(
            ExtractedContent(text="claim", mode=InputMode.TEXT),
            transport=httpx.MockTransport(hang),
        )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "envelope",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
    ],
)
async def test_envelope_without_text_is_malformed(upstream, envelope):
    upstream.model_response = lambda: httpx.Response(200, json=envelope)
    with pytest.raises(MalformedResponse):
        await evaluate_claim(
            ExtractedContent(text="claim", mode=InputMode.TEXT), transport=upstream.transport
        )


@pytest.mark.asyncio
async def test_non_json_body_is_malformed(upstream):
    upstream.model_response = lambda: httpx.Response(200, text="<html>gateway</html>")
    with pytest.raises(MalformedResponse):
        await evaluate_claim(
            ExtractedContent(text="claim", mode=InputMode.TEXT), transport=upstream.transport
        )


@pytest.mark.asyncio
async def test_verdict_and_explanation_are_trimmed(upstream):
    upstream.model_response = lambda: httpx.Response(
        200, json=gemini_json(" Fact ", "  Water is essential.  ")
    )
    analysis = await evaluate_claim(
        ExtractedContent(text="claim", mode=InputMode.TEXT), transport=upstream.transport
    )
    assert analysis.verdict == "Fact"
    assert analysis.explanation == "Water is essential."
