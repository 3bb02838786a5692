import logging
import re
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from .book_aliases import canonicalize
from .range_expander import expand_span
from .reference_parser import match_candidate
from .verse_index import VerseCountIndex

logger = logging.getLogger(__name__)

CANDIDATE_SEPARATORS = re.compile(r"[\n,;]")
_WHITESPACE_RUN = re.compile(r"\s+")


class ReferenceInputError(ValueError):
    """Raised when an uploaded reference source cannot be read."""


class BulkMode(str, Enum):
    TEXT = "text"
    LIST = "list"


def decode_upload(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ReferenceInputError("Uploaded passages file is not valid UTF-8 text") from exc


def split_candidates(text: str) -> List[str]:
    return [chunk.strip() for chunk in CANDIDATE_SEPARATORS.split(text) if chunk.strip()]


class ReferenceResolver:
    def __init__(self, index: VerseCountIndex, canonicalize_book: Callable[[str], Optional[str]] = canonicalize):
        self.index = index
        self.canonicalize_book = canonicalize_book

    def resolve_candidate(self, candidate: str) -> List[str]:
        span = match_candidate(candidate)
        if span is None:
            logger.debug("Dropping unrecognised reference %r", candidate)
            return []
        book = self.canonicalize_book(span.book)
        if book is None:
            logger.debug("Dropping reference %r with unknown book %r", candidate, span.book)
            return []
        return expand_span(self.index, book, span)

    def resolve_text(self, text: Optional[str]) -> List[str]:
        """Split free text on newlines, commas and semicolons and resolve each piece."""
        unique: Dict[str, None] = {}
        if not text or not text.strip():
            return []
        for candidate in split_candidates(text):
            for ref in self.resolve_candidate(candidate):
                unique.setdefault(ref, None)
        return list(unique)

    def resolve_list(self, text: Optional[str]) -> List[str]:
        """Treat each non-empty line as one already-formed reference, whitespace collapsed."""
        unique: Dict[str, None] = {}
        if not text:
            return []
        for line in text.splitlines():
            normalized = _WHITESPACE_RUN.sub(" ", line.strip())
            if normalized:
                unique.setdefault(normalized, None)
        return list(unique)

    def resolve(
        self,
        bulk_text: Optional[str] = None,
        typed_text: Optional[str] = None,
        *,
        bulk_mode: BulkMode = BulkMode.TEXT,
        bulk_first: bool = True,
    ) -> List[str]:
        bulk_refs = self.resolve_list(bulk_text) if bulk_mode == BulkMode.LIST else self.resolve_text(bulk_text)
        typed_refs = self.resolve_text(typed_text)
        ordered: Iterable[List[str]] = (bulk_refs, typed_refs) if bulk_first else (typed_refs, bulk_refs)

        unique: Dict[str, None] = {}
        for refs in ordered:
            for ref in refs:
                unique.setdefault(ref, None)
        return list(unique)
