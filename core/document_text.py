# core/document_text.py
import importlib
import io
import logging
import threading
from types import ModuleType
from typing import Callable, Dict, List
from util.constants import MediaTypes
from util.errors import ExtractionFailed, UnsupportedFileType
from util.functions import normalize_media_type
from util.timing import timed

logger = logging.getLogger(__name__)

# Decoder modules are imported on first use only; the lock keeps concurrent
# first uses (threadpool workers) from initializing the same module twice.
_decoders: Dict[str, ModuleType] = {}
_decoders_lock = threading.Lock()


def _load_decoder(module_name: str) -> ModuleType:
    mod = _decoders.get(module_name)
    if mod is not None:
        return mod
    with _decoders_lock:
        mod = _decoders.get(module_name)
        if mod is None:
            with timed(logger, "decoder.load", module=module_name):
                mod = importlib.import_module(module_name)
            _decoders[module_name] = mod
    return mod


def extract_pdf_text(file_bytes: bytes) -> str:
    """
    Text of every page in page order, joined with newlines.
    Raises ExtractionFailed when PyMuPDF cannot open or parse the stream.
    """
    fitz = _load_decoder("fitz")
    try:
        pages: List[str] = []
        with timed(logger, "pdf.parse"):
            with fitz.open(stream=file_bytes, filetype="pdf") as doc:
                for i in range(doc.page_count):
                    page = doc.load_page(i)
                    pages.append((page.get_text("text") or "").strip())
        logger.info("pdf.pages count=%d", len(pages))
        return "\n".join(pages)
    except Exception as e:
        # do not log payloads
        logger.error("pdf.parse.error err=%s", type(e).__name__)
        raise ExtractionFailed(str(e) or type(e).__name__) from e


def extract_docx_text(file_bytes: bytes) -> str:
    """Raw text of a DOCX body: paragraph texts joined with newlines."""
    docx = _load_decoder("docx")
    try:
        with timed(logger, "docx.parse"):
            document = docx.Document(io.BytesIO(file_bytes))
            paragraphs = [p.text for p in document.paragraphs]
        logger.info("docx.paragraphs count=%d", len(paragraphs))
        return "\n".join(paragraphs)
    except Exception as e:
        logger.error("docx.parse.error err=%s", type(e).__name__)
        raise ExtractionFailed(str(e) or type(e).__name__) from e


_EXTRACTORS: Dict[str, Callable[[bytes], str]] = {
    MediaTypes.PDF: extract_pdf_text,
    MediaTypes.DOCX: extract_docx_text,
}


def is_supported(mime_type: str | None) -> bool:
    return normalize_media_type(mime_type) in _EXTRACTORS


def extract_document_text(file_bytes: bytes, mime_type: str | None) -> str:
    """
    Dispatch on the declared media type. Unsupported types fail before any
    decoder is loaded.
    """
    media_type = normalize_media_type(mime_type)
    extractor = _EXTRACTORS.get(media_type)
    if extractor is None:
        logger.warning("document.unsupported type=%s", media_type or "-")
        raise UnsupportedFileType(media_type or None)
    return extractor(file_bytes)
