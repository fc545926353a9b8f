import threading
import time
import types
import pytest
from core import document_text
from util.constants import MediaTypes
from util.errors import ExtractionFailed, UnsupportedFileType


def test_pdf_pages_joined_in_order(make_pdf):
    text = document_text.extract_document_text(
        make_pdf("First page", "Second page", "Third page"), MediaTypes.PDF
    )
    assert text == "First page\nSecond page\nThird page"


def test_docx_raw_text(make_docx):
    text = document_text.extract_document_text(
        make_docx("Sugar makes kids hyperactive.", "Studies disagree."),
        f"{MediaTypes.DOCX}; charset=binary",
    )
    assert "Sugar makes kids hyperactive.\nStudies disagree." in text


def test_corrupt_pdf_raises_extraction_failed():
    with pytest.raises(ExtractionFailed) as exc:
        document_text.extract_document_text(b"garbage bytes, definitely not a pdf", MediaTypes.PDF)
    assert exc.value.detail


def test_corrupt_docx_raises_extraction_failed():
    with pytest.raises(ExtractionFailed):
        document_text.extract_document_text(b"PK\x03\x04garbage", MediaTypes.DOCX)


def test_unsupported_type_loads_no_decoder(monkeypatch):
    def _boom(name):
        raise AssertionError(f"decoder {name} should not load")

    monkeypatch.setattr(document_text, "_load_decoder", _boom)
    with pytest.raises(UnsupportedFileType):
        document_text.extract_document_text(b"hello", "text/plain")
    assert not document_text.is_supported("text/plain")
    assert document_text.is_supported(MediaTypes.PDF)


def test_decoder_is_imported_once_under_concurrent_first_use(monkeypatch):
    calls = []
    fake = types.ModuleType("fake_decoder")

    def slow_import(name):
        calls.append(name)
        time.sleep(0.05)
        return fake

    monkeypatch.setattr(document_text, "_decoders", {})
    monkeypatch.setattr(document_text.importlib, "import_module", slow_import)

    results = []
    threads = [
        threading.Thread(target=lambda: results.append(document_text._load_decoder("fake_decoder")))
        for _ in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == ["fake_decoder"]
    assert len(results) == 8
    assert all(r is fake for r in results)
