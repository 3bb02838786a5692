import csv
import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional

from ..config import get_settings
from .verse_index import VerseCountIndex

logger = logging.getLogger(__name__)


class CorpusError(RuntimeError):
    """The verse corpus is missing or cannot be parsed."""


class VerseRow(NamedTuple):
    book: str
    chapter: int
    verse: int
    text: str

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"


class BibleLoader:
    def __init__(self, corpus_path: Optional[Path] = None):
        self.corpus_path = corpus_path or get_settings().bible_corpus_path

    def iter_verses(self) -> Iterable[VerseRow]:
        if not self.corpus_path.exists():
            raise CorpusError(f"Bible corpus not found at {self.corpus_path}")
        with self.corpus_path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)
            for row in reader:
                if len(row) < 3:
                    continue
                book = row[0].strip()
                text = row[3] if len(row) > 3 else ""
                try:
                    chapter = int(row[1])
                    verse = int(row[2])
                except ValueError as exc:
                    raise CorpusError(f"Malformed corpus row at line {reader.line_num}: {row!r}") from exc
                yield VerseRow(book, chapter, verse, text)

    def load_verses(self) -> List[VerseRow]:
        verses = list(self.iter_verses())
        logger.info("Loaded %s verse rows from %s", len(verses), self.corpus_path)
        return verses

    def build_verse_index(self, verses: Optional[Iterable[VerseRow]] = None) -> VerseCountIndex:
        rows = verses if verses is not None else self.iter_verses()
        return VerseCountIndex.from_rows((row.book, row.chapter, row.verse) for row in rows)
