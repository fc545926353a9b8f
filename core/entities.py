# core/entities.py
from dataclasses import dataclass
from typing import Union
from util.enums import InputMode


@dataclass(frozen=True)
class TextSource:
    text: str
    mode = InputMode.TEXT


@dataclass(frozen=True)
class UrlSource:
    url: str
    mode = InputMode.URL


@dataclass(frozen=True)
class DocumentSource:
    data: bytes
    mime_type: str  # as declared by the uploader
    mode = InputMode.DOCUMENT

    def __repr__(self) -> str:
        # never dump the payload into logs / tracebacks
        return f"DocumentSource(mime_type={self.mime_type!r}, bytes={len(self.data)})"


ClaimSource = Union[TextSource, UrlSource, DocumentSource]


@dataclass(frozen=True)
class ExtractedContent:
    """
    Normalized, already-truncated text ready to embed in a prompt, tagged with
    the input mode it was derived from (prompt wording depends on it).
    """

    text: str
    mode: InputMode
