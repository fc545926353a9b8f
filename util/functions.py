# util/functions.py
import re

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def truncate(text: str, max_chars: int) -> str:
    """
    - Keep the first `max_chars` characters of `text`.
    - No ellipsis, no summarization: a plain prefix cut.
    """
    if max_chars < 0:
        raise ValueError("max_chars must be >= 0")
    return text[:max_chars]


def strip_code_fences(raw: str) -> str:
    """Remove ```json / ``` markers anywhere in `raw` and trim surrounding whitespace."""
    return _FENCE.sub("", raw or "").strip()


def normalize_media_type(content_type: str | None) -> str:
    # "Application/PDF; charset=binary" -> "application/pdf"
    return (content_type or "").split(";", 1)[0].strip().lower()
