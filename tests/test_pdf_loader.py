from __future__ import annotations

import pytest

from ghostwriter.errors import ConverterNotFoundError
from ghostwriter.ingest import SplitOptions
from ghostwriter.ingest.pdf_loader import PANDOC_WARNING, TEXT_LAYER_WARNING, PdfLoader

PAGES = [
    "Book Title\nChapter 1\nAlpha text\n1",
    "Book Title\nmore alpha\n2",
    "Book Title\nChapter 2\nBeta text\n3",
]


def _converter(text):
    calls = []

    def convert(path, pandoc_path):
        calls.append((path, pandoc_path))
        return text

    convert.calls = calls
    return convert


def test_text_layer_is_segmented_without_running_headers(tmp_path):
    path = tmp_path / "book.pdf"
    converter = _converter("unused")
    loader = PdfLoader(converter=converter, extractor=lambda p: list(PAGES))

    result = loader.split(path, SplitOptions())

    assert [c.title for c in result.chapters] == ["Chapter 1", "Chapter 2"]
    assert all("Book Title" not in c.content for c in result.chapters)
    assert "more alpha" in result.chapters[0].content
    assert result.warnings == [TEXT_LAYER_WARNING]
    assert converter.calls == []


def test_single_page_keeps_its_first_and_last_lines(tmp_path):
    loader = PdfLoader(extractor=lambda p: ["Title line\nBody\nLast line"])

    assert loader.load_text(str(tmp_path / "one.pdf")) == "Title line\nBody\nLast line"


def test_extractor_failure_falls_back_to_pandoc(tmp_path):
    def explode(path):
        raise RuntimeError("boom")

    converter = _converter("Chapter 1\nA\nChapter 2\nB")
    loader = PdfLoader(converter=converter, extractor=explode)

    result = loader.split(tmp_path / "book.pdf", SplitOptions(pandoc_path="/opt/pandoc"))

    assert [c.title for c in result.chapters] == ["Chapter 1", "Chapter 2"]
    assert result.warnings[0].startswith("pypdf failed (boom)")
    assert result.warnings[-1] == PANDOC_WARNING
    assert converter.calls == [(str(tmp_path / "book.pdf"), "/opt/pandoc")]


def test_empty_text_layer_falls_back_to_pandoc(tmp_path):
    converter = _converter("Just a few words.")
    loader = PdfLoader(converter=converter, extractor=lambda p: ["", "  \n "])

    result = loader.split(tmp_path / "scan.pdf", SplitOptions())

    assert [c.content for c in result.chapters] == ["Just a few words."]
    assert result.warnings[0].startswith("PDF text layer is empty")
    assert PANDOC_WARNING in result.warnings


def test_unreadable_pdf_uses_pandoc(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")
    converter = _converter("Chapter 1\nA\nChapter 2\nB")

    result = PdfLoader(converter=converter).split(path, SplitOptions())

    assert len(result.chapters) == 2
    assert PANDOC_WARNING in result.warnings
    assert len(converter.calls) == 1


def test_converter_errors_propagate(tmp_path):
    def missing(path, pandoc_path):
        raise ConverterNotFoundError("Pandoc not found.")

    loader = PdfLoader(converter=missing, extractor=lambda p: [""])

    with pytest.raises(ConverterNotFoundError):
        loader.split(tmp_path / "scan.pdf", SplitOptions())


def test_repeated_line_is_kept_inside_page_body(tmp_path):
    pages = [
        "Alpha\n* * *",
        "Beta\n* * *",
        "Gamma\n* * *\nDelta",
    ]
    loader = PdfLoader(extractor=lambda p: pages)

    text = loader.load_text(str(tmp_path / "short.pdf"))

    assert text == "Alpha\n\nBeta\n\nGamma\n* * *\nDelta"
