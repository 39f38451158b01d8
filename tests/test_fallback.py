from __future__ import annotations

from ghostwriter.ingest import SplitOptions
from ghostwriter.ingest.fallback import NO_HEADINGS_WARNING, split_with_fallback


def test_two_headings_split_into_chapters():
    result = split_with_fallback("Chapter 1\nFirst.\n\nChapter 2\nSecond.")

    assert [(c.title, c.content) for c in result.chapters] == [
        ("Chapter 1", "First."),
        ("Chapter 2", "Second."),
    ]
    assert result.warnings == []


def test_heading_variants_and_titles_are_trimmed():
    text = (
        "  Chapter IV: The Storm  \nRain.\n"
        "Section 2\nWind.\n"
        "CH. 3\nThunder.\n"
        "chap. x\nCalm.\n"
    )

    result = split_with_fallback(text)

    assert [c.title for c in result.chapters] == [
        "Chapter IV: The Storm",
        "Section 2",
        "CH. 3",
        "chap. x",
    ]
    assert [c.index for c in result.chapters] == [0, 1, 2, 3]
    assert result.warnings == []


def test_content_before_first_heading_is_introduction():
    result = split_with_fallback("Preface text\nChapter 1\nA\nChapter 2\nB")

    assert [c.title for c in result.chapters] == ["Introduction", "Chapter 1", "Chapter 2"]
    assert result.chapters[0].content == "Preface text"


def test_crlf_is_normalized():
    result = split_with_fallback("Chapter 1\r\nOne\r\nChapter 2\r\nTwo\r\n")

    assert [c.content for c in result.chapters] == ["One", "Two"]


def test_single_heading_falls_back_to_size_chunks():
    text = "Chapter 1\n" + "x" * 2500

    result = split_with_fallback(text, SplitOptions(max_chars_per_chapter=1000))

    assert [c.title for c in result.chapters] == ["Part 1", "Part 2", "Part 3"]
    assert all(len(c.content) <= 1000 for c in result.chapters)
    assert result.warnings == [NO_HEADINGS_WARNING]


def test_single_heading_trusted_when_configured():
    text = "Chapter 1\n" + "x" * 2500

    result = split_with_fallback(text, SplitOptions(trust_single_heading=True))

    assert len(result.chapters) == 1
    assert result.chapters[0].title == "Chapter 1"
    assert result.warnings == []


def test_spelled_out_numbers_are_not_headings():
    result = split_with_fallback("Chapter one\nfoo\nChapter two\nbar")

    assert [c.title for c in result.chapters] == ["Part 1"]
    assert result.warnings == [NO_HEADINGS_WARNING]


def test_size_chunks_use_default_and_floor():
    text = "word " * 5000

    default = split_with_fallback(text)
    floored = split_with_fallback(text, SplitOptions(max_chars_per_chapter=10))

    assert len(default.chapters) == 3
    assert all(len(c.content) <= 10_000 for c in default.chapters)
    assert all(len(c.content) <= 1000 for c in floored.chapters)
    assert len(floored.chapters) == 25
    assert [c.index for c in floored.chapters] == list(range(25))


def test_whitespace_only_input_yields_no_chapters():
    result = split_with_fallback(" \n\r\n\t ")

    assert result.chapters == []
    assert result.warnings == []
