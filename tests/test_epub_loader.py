from __future__ import annotations

from ebooklib import epub

from ghostwriter.ingest import SplitOptions
from ghostwriter.ingest.epub_loader import PANDOC_FALLBACK_WARNING, EpubLoader


def _write_epub(path, sections):
    book = epub.EpubBook()
    book.set_identifier("ghostwriter-test")
    book.set_title("Sample")
    book.set_language("en")
    items = []
    for number, (title, body) in enumerate(sections, start=1):
        item = epub.EpubHtml(title=title, file_name=f"chap_{number:02d}.xhtml", lang="en")
        heading = f"<h1>{title}</h1>" if body.strip() else ""
        item.content = (
            f"<html><head><title>{title}</title></head>"
            f"<body>{heading}<p>{body}</p></body></html>"
        )
        book.add_item(item)
        items.append(item)
    book.toc = tuple(items)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = items
    epub.write_epub(str(path), book)


class _FakeConverter:
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls = []

    def __call__(self, path, pandoc_path):
        self.calls.append((path, pandoc_path))
        return self.text


def test_native_extraction_follows_spine(tmp_path):
    path = tmp_path / "book.epub"
    _write_epub(
        path,
        [
            ("Chapter One", "It was a <em>dark</em> night."),
            ("Chapter Two", "Morning came."),
        ],
    )
    converter = _FakeConverter("unused")

    result = EpubLoader(converter=converter).split(path, SplitOptions())

    assert [c.title for c in result.chapters] == ["Chapter One", "Chapter Two"]
    assert "It was a dark night." in result.chapters[0].content
    assert "Morning came." in result.chapters[1].content
    assert "<" not in result.chapters[0].content
    assert result.warnings == []
    assert converter.calls == []


def test_epub_without_text_falls_back_to_pandoc(tmp_path):
    path = tmp_path / "book.epub"
    _write_epub(path, [("Blank", " ")])
    converter = _FakeConverter("Chapter 1\nA\nChapter 2\nB")

    result = EpubLoader(converter=converter).split(path, SplitOptions(pandoc_path="/opt/pandoc"))

    assert [c.title for c in result.chapters] == ["Chapter 1", "Chapter 2"]
    assert result.warnings == ["No chapters found in EPUB", PANDOC_FALLBACK_WARNING]
    assert converter.calls == [(str(path), "/opt/pandoc")]


def test_broken_epub_falls_back_to_pandoc(tmp_path):
    path = tmp_path / "broken.epub"
    path.write_bytes(b"definitely not a zip archive")
    converter = _FakeConverter("Some plain text without structure.")

    result = EpubLoader(converter=converter).split(path, SplitOptions())

    assert [c.title for c in result.chapters] == ["Part 1"]
    assert result.warnings[0].startswith("EPUB extraction failed")
    assert PANDOC_FALLBACK_WARNING in result.warnings
    assert len(converter.calls) == 1


def test_html_to_text_drops_markup_and_scripts():
    loader = EpubLoader()

    text = loader._html_to_text(
        "<html><head><title>T</title><style>p {}</style></head>"
        "<body><header>Top</header><p>One\n  two</p><script>x()</script></body></html>"
    )

    assert text == "Top One two"
