# core/page_renderer.py
from html import escape
from typing import Dict, NamedTuple, Optional
from model.claim import VerdictCategory
from model.state import EvaluationState
from util.constants import InternalURIs
from util.enums import InputMode


class VerdictStyle(NamedTuple):
    icon: str
    css_class: str


VERDICT_STYLES: Dict[VerdictCategory, VerdictStyle] = {
    VerdictCategory.fact: VerdictStyle("&#10004;", "verdict-fact"),
    VerdictCategory.myth: VerdictStyle("&#10008;", "verdict-myth"),
    VerdictCategory.partially_true: VerdictStyle("&#9888;", "verdict-partial"),
    VerdictCategory.unclassified: VerdictStyle("?", "verdict-unclassified"),
}


class FormValues(NamedTuple):
    claim_text: str = ""
    url: str = ""


_MODE_LABELS = {
    InputMode.TEXT: "Text",
    InputMode.URL: "URL",
    InputMode.DOCUMENT: "Document",
}

_STYLE = """
body{font-family:system-ui,sans-serif;background:#f8fafc;color:#1e293b;margin:0}
main{max-width:48rem;margin:0 auto;padding:2rem 1rem}
header,footer{text-align:center}footer{margin-top:3rem;font-size:.85rem;color:#64748b}
.card{background:#fff;border:1px solid #e2e8f0;border-radius:1rem;padding:1.5rem;margin-top:1.5rem}
.modes label{margin-right:1rem}.field{margin-top:1rem}
input[type=text],input[type=url]{width:100%;padding:.75rem;font-size:1rem;box-sizing:border-box}
button{margin-top:1rem;padding:.75rem 1.5rem;background:#10b981;color:#fff;border:0;border-radius:.5rem}
button:disabled{background:#94a3b8}
.error{background:#fee2e2;color:#b91c1c;padding:1rem;border-radius:.5rem;margin-top:1.5rem}
.verdict{display:flex;gap:1rem;align-items:center;padding:1rem;border-radius:.5rem;border:1px solid}
.verdict-fact{background:#dcfce7;color:#166534;border-color:#86efac}
.verdict-myth{background:#fee2e2;color:#991b1b;border-color:#fca5a5}
.verdict-partial{background:#fef9c3;color:#854d0e;border-color:#fde047}
.verdict-unclassified{background:#f1f5f9;color:#334155;border-color:#cbd5e1}
"""

# Disable the submit control while the request is in flight.
_SCRIPT = """
document.getElementById('claim-form').addEventListener('submit', function () {
  var b = document.getElementById('submit');
  b.disabled = true; b.textContent = 'Analyzing...';
});
"""


def _mode_selector(active: InputMode) -> str:
    radios = []
    for mode, label in _MODE_LABELS.items():
        checked = " checked" if mode == active else ""
        radios.append(
            f'<label><input type="radio" name="mode" value="{mode.value}"{checked}> {label}</label>'
        )
    return f'<div class="modes">{"".join(radios)}</div>'


def _form(state: EvaluationState, values: FormValues) -> str:
    disabled = " disabled" if state.status == "loading" else ""
    label = "Analyzing..." if state.status == "loading" else "Check Claim"
    return (
        f'<form id="claim-form" class="card" method="post" action="{InternalURIs.ROOT}" '
        'enctype="multipart/form-data">'
        f"{_mode_selector(state.mode)}"
        '<div class="field"><input type="text" name="claim_text" '
        f'value="{escape(values.claim_text, quote=True)}" '
        "placeholder=\"e.g., 'You only use 10% of your brain.'\"></div>"
        '<div class="field"><input type="url" name="url" '
        f'value="{escape(values.url, quote=True)}" '
        'placeholder="https://example.com/health-article"></div>'
        '<div class="field"><input type="file" name="file" '
        'accept=".pdf,.docx,application/pdf,'
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document"></div>'
        f'<button id="submit" type="submit"{disabled}>{label}</button>'
        "</form>"
    )


def _body(state: EvaluationState) -> str:
    if state.status == "idle":
        return (
            '<section class="card idle"><h3>Ready to bust some myths?</h3>'
            "<p>Enter a health claim, paste a link or upload a document to get started.</p>"
            "</section>"
        )
    if state.status == "loading":
        return '<section class="card loading"><p>Analyzing...</p></section>'
    if state.status == "failed":
        return f'<section class="error" role="alert"><p>{escape(state.error or "")}</p></section>'

    analysis = state.analysis
    if analysis is None:
        return ""
    style = VERDICT_STYLES[analysis.category]
    return (
        '<section class="card result">'
        f'<div class="verdict {style.css_class}"><span>{style.icon}</span>'
        f"<h2>{escape(analysis.verdict)}</h2></div>"
        "<h3>Explanation</h3>"
        f"<p>{escape(analysis.explanation)}</p>"
        "</section>"
    )


def render_page(
    state: EvaluationState,
    values: FormValues = FormValues(),
    notice: Optional[str] = None,
) -> str:
    """
    `values` refills the inputs after a round trip; `notice` is a banner for
    requests refused before any evaluation started (409, 413).
    """
    banner = (
        f'<section class="error notice" role="alert"><p>{escape(notice)}</p></section>'
        if notice
        else ""
    )
    return (
        "<!doctype html><html lang=\"en\"><head><meta charset=\"utf-8\">"
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>Health Myth Debunker</title><style>{_STYLE}</style></head><body><main>"
        "<header><h1>Health Myth Debunker</h1>"
        "<p>Cutting through the noise with science-backed facts.</p></header>"
        f"{_form(state, values)}{banner}{_body(state)}"
        "<footer><p>Disclaimer: This tool provides information based on AI and should not "
        "be considered medical advice. Always consult a healthcare professional.</p>"
        "<p>Powered by Google Gemini</p></footer>"
        f"</main><script>{_SCRIPT}</script></body></html>"
    )
