"""Shared fixtures: a miniature corpus and temporary storage for the app settings.

Environment variables are set before any application module is imported so the
cached settings, the database engine and the startup hook all point at the
temporary files.
"""

import csv
import os
import tempfile
from pathlib import Path

import pytest

CHAPTER_SIZES = {
    "Genesis": {1: 31, 2: 25, 3: 24},
    "1 Samuel": {3: 21},
    "Psalms": {23: 6},
    "Matthew": {1: 25},
    "John": {3: 36},
    "Romans": {8: 39},
    "1 Corinthians": {13: 13},
}

_WORK_DIR = Path(tempfile.mkdtemp(prefix="visual-bible-tests-"))
CORPUS_PATH = _WORK_DIR / "kjv_mini.csv"


def write_corpus(path: Path) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["book", "chapter", "verse", "text"])
        for book, chapters in CHAPTER_SIZES.items():
            for chapter, size in chapters.items():
                for verse in range(1, size + 1):
                    writer.writerow([book, chapter, verse, f"Text of {book} {chapter}:{verse}, with a comma"])


write_corpus(CORPUS_PATH)

os.environ["BIBLE_CORPUS_PATH"] = str(CORPUS_PATH)
os.environ["BASE_IMAGE_PATH"] = str(_WORK_DIR / "base-bible.png")
os.environ["DATABASE_URL"] = f"sqlite:///{_WORK_DIR / 'visual_bible.db'}"


@pytest.fixture(scope="session")
def corpus_path() -> Path:
    return CORPUS_PATH


@pytest.fixture(scope="session")
def verses(corpus_path):
    from backend.visual_bible.utils.bible_loader import BibleLoader

    return BibleLoader(corpus_path).load_verses()


@pytest.fixture(scope="session")
def verse_index(verses):
    from backend.visual_bible.utils.verse_index import VerseCountIndex

    return VerseCountIndex.from_rows((row.book, row.chapter, row.verse) for row in verses)


@pytest.fixture
def resolver(verse_index):
    from backend.visual_bible.utils.resolver import ReferenceResolver

    return ReferenceResolver(verse_index)
