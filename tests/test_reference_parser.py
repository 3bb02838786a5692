import time

import pytest

from backend.visual_bible.utils.reference_parser import ParsedSpan, SpanForm, match_candidate


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Genesis 1:30-2:2", ParsedSpan(SpanForm.CROSS_CHAPTER, "Genesis", 1, 30, 2, 2)),
        ("Genesis 1:30 - 2:2", ParsedSpan(SpanForm.CROSS_CHAPTER, "Genesis", 1, 30, 2, 2)),
        ("Gen 1-3", ParsedSpan(SpanForm.CHAPTER_RANGE, "Gen", 1, None, 3, None)),
        ("Gen1-3", ParsedSpan(SpanForm.CHAPTER_RANGE, "Gen", 1, None, 3, None)),
        ("Romans 8:28-39", ParsedSpan(SpanForm.VERSE_RANGE, "Romans", 8, 28, 8, 39)),
        ("John 3:16", ParsedSpan(SpanForm.VERSE_RANGE, "John", 3, 16, 3, 16)),
        ("jn3:16", ParsedSpan(SpanForm.VERSE_RANGE, "jn", 3, 16, 3, 16)),
        ("1 Samuel 3", ParsedSpan(SpanForm.CHAPTER, "1 Samuel", 3, None, 3, None)),
        ("1 Cor 13", ParsedSpan(SpanForm.CHAPTER, "1 Cor", 13, None, 13, None)),
    ],
)
def test_spaced_forms(text, expected):
    assert match_candidate(text) == expected


class TestCompactFallback:
    def test_compact_chapter(self):
        assert match_candidate("1Cor13") == ParsedSpan(SpanForm.CHAPTER, "1Cor", 13, None, 13, None)

    def test_spaces_around_verse_dash(self):
        # The spaced verse form does not allow blanks around the dash, the compact one does.
        span = match_candidate("John 3:16 - 18")
        assert span == ParsedSpan(SpanForm.VERSE_RANGE, "John", 3, 16, 3, 18)

    def test_compact_cross_chapter(self):
        span = match_candidate("Gen1:30-2 : 2")
        assert span == ParsedSpan(SpanForm.CROSS_CHAPTER, "Gen", 1, 30, 2, 2)


@pytest.mark.parametrize("text", ["", "Romans", "3:16", "hello world", "John 3:16:1", "John three"])
def test_unmatched_candidates(text):
    assert match_candidate(text) is None


@pytest.mark.parametrize("size", [20000, 80000])
def test_long_blank_run_fails_fast(size):
    started = time.perf_counter()
    assert match_candidate("a" + " " * size + "a!") is None
    assert match_candidate("John" + " " * size + "3:x") is None
    assert time.perf_counter() - started < 1.0


def test_multi_word_book_tokens():
    assert match_candidate("Song of Solomon 2:1").book == "Song of Solomon"
    assert match_candidate("1 Cor. 13:4-7").book == "1 Cor."
    assert match_candidate("I  Samuel 3").book == "I  Samuel"
