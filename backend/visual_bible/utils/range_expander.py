from typing import List

from .reference_parser import ParsedSpan, SpanForm
from .verse_index import VerseCountIndex


def format_reference(book: str, chapter: int, verse: int) -> str:
    return f"{book} {chapter}:{verse}"


def chapters_between(index: VerseCountIndex, book: str, chapter_start: int, chapter_end: int) -> List[int]:
    """Known chapters of a book inside [chapter_start, chapter_end], ascending."""
    return sorted(chapter for chapter in index.chapters(book) if chapter_start <= chapter <= chapter_end)


def expand(
    index: VerseCountIndex,
    book: str,
    chapter_start: int,
    verse_start: int,
    chapter_end: int,
    verse_end: int,
) -> List[str]:
    """Enumerate every verse from (chapter_start, verse_start) to (chapter_end, verse_end).

    Reversed endpoints are swapped. Unknown chapters are skipped and verse bounds
    are clamped to the chapter, so overshooting input yields fewer verses instead
    of an error.
    """
    if (chapter_end, verse_end) < (chapter_start, verse_start):
        chapter_start, verse_start, chapter_end, verse_end = chapter_end, verse_end, chapter_start, verse_start

    refs: List[str] = []
    for chapter in chapters_between(index, book, chapter_start, chapter_end):
        max_verse = index.max_verse(book, chapter)
        if max_verse <= 0:
            continue
        low = verse_start if chapter == chapter_start else 1
        high = verse_end if chapter == chapter_end else max_verse
        low = max(1, low)
        high = min(max_verse, high)
        refs.extend(format_reference(book, chapter, verse) for verse in range(low, high + 1))
    return refs


def expand_chapter(index: VerseCountIndex, book: str, chapter: int) -> List[str]:
    max_verse = index.max_verse(book, chapter)
    return [format_reference(book, chapter, verse) for verse in range(1, max_verse + 1)]


def expand_chapter_range(index: VerseCountIndex, book: str, chapter_start: int, chapter_end: int) -> List[str]:
    if chapter_end < chapter_start:
        chapter_start, chapter_end = chapter_end, chapter_start
    refs: List[str] = []
    for chapter in chapters_between(index, book, chapter_start, chapter_end):
        refs.extend(expand_chapter(index, book, chapter))
    return refs


def expand_span(index: VerseCountIndex, book: str, span: ParsedSpan) -> List[str]:
    chapter_end = span.chapter_end if span.chapter_end is not None else span.chapter_start

    if span.form is SpanForm.CHAPTER:
        return expand_chapter(index, book, span.chapter_start)
    if span.form is SpanForm.CHAPTER_RANGE:
        return expand_chapter_range(index, book, span.chapter_start, chapter_end)

    verse_start = span.verse_start if span.verse_start is not None else 1
    verse_end = span.verse_end if span.verse_end is not None else verse_start
    return expand(index, book, span.chapter_start, verse_start, chapter_end, verse_end)
