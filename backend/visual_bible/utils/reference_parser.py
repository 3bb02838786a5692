import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class SpanForm(str, Enum):
    CROSS_CHAPTER = "cross_chapter"
    CHAPTER_RANGE = "chapter_range"
    VERSE_RANGE = "verse_range"
    CHAPTER = "chapter"


@dataclass(frozen=True)
class ParsedSpan:
    form: SpanForm
    book: str
    chapter_start: int
    verse_start: Optional[int] = None
    chapter_end: Optional[int] = None
    verse_end: Optional[int] = None


_BOOK = r"(?P<book>(?:[1-3]\s*)?[A-Za-z.]+(?:\s+[A-Za-z.]+)*)"
_COMPACT_BOOK = r"(?P<book>[1-3]?[A-Za-z]{2,})"

# Order matters: first match wins.
SPACED_FORMS: List[Tuple[SpanForm, "re.Pattern[str]"]] = [
    (SpanForm.CROSS_CHAPTER, re.compile(_BOOK + r"\s*(?P<c1>\d+):(?P<v1>\d+)\s*-\s*(?P<c2>\d+):(?P<v2>\d+)")),
    (SpanForm.CHAPTER_RANGE, re.compile(_BOOK + r"\s*(?P<c1>\d+)\s*-\s*(?P<c2>\d+)")),
    (SpanForm.VERSE_RANGE, re.compile(_BOOK + r"\s*(?P<c1>\d+):(?P<v1>\d+)(?:-(?P<v2>\d+))?")),
    (SpanForm.CHAPTER, re.compile(_BOOK + r"\s+(?P<c1>\d+)")),
]

# Tried against the candidate with all whitespace removed.
COMPACT_FORMS: List[Tuple[SpanForm, "re.Pattern[str]"]] = [
    (SpanForm.CROSS_CHAPTER, re.compile(_COMPACT_BOOK + r"(?P<c1>\d+):(?P<v1>\d+)-(?P<c2>\d+):(?P<v2>\d+)")),
    (SpanForm.CHAPTER_RANGE, re.compile(_COMPACT_BOOK + r"(?P<c1>\d+)-(?P<c2>\d+)")),
    (SpanForm.VERSE_RANGE, re.compile(_COMPACT_BOOK + r"(?P<c1>\d+):(?P<v1>\d+)(?:-(?P<v2>\d+))?")),
    (SpanForm.CHAPTER, re.compile(_COMPACT_BOOK + r"(?P<c1>\d+)")),
]

_WHITESPACE = re.compile(r"\s+")


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _build_span(form: SpanForm, match: "re.Match[str]") -> ParsedSpan:
    groups = match.groupdict()
    chapter_start = int(groups["c1"])
    verse_start = _optional_int(groups.get("v1"))
    chapter_end = _optional_int(groups.get("c2"))
    verse_end = _optional_int(groups.get("v2"))

    if form is SpanForm.VERSE_RANGE:
        chapter_end = chapter_start
        if verse_end is None:
            verse_end = verse_start
    elif form is SpanForm.CHAPTER:
        chapter_end = chapter_start

    return ParsedSpan(
        form=form,
        book=groups["book"].strip(),
        chapter_start=chapter_start,
        verse_start=verse_start,
        chapter_end=chapter_end,
        verse_end=verse_end,
    )


def match_candidate(text: str) -> Optional[ParsedSpan]:
    """Match one trimmed reference candidate against the known reference forms.

    Spaced forms are tried first, then the compact (no whitespace) forms.
    Returns None when nothing matches.
    """
    if not text:
        return None

    for form, pattern in SPACED_FORMS:
        match = pattern.fullmatch(text)
        if match:
            return _build_span(form, match)

    stripped = _WHITESPACE.sub("", text)
    for form, pattern in COMPACT_FORMS:
        match = pattern.fullmatch(stripped)
        if match:
            return _build_span(form, match)

    return None
