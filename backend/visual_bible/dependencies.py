from functools import lru_cache
from typing import Iterator, List

from fastapi import Depends
from sqlmodel import Session

from .database import get_session
from .utils.bible_loader import BibleLoader, VerseRow
from .utils.image_generator import BibleImageGenerator
from .utils.resolver import ReferenceResolver
from .utils.verse_index import VerseCountIndex


def get_db() -> Iterator[Session]:
    with get_session() as session:
        yield session


@lru_cache()
def get_corpus() -> List[VerseRow]:
    return BibleLoader().load_verses()


@lru_cache()
def get_verse_index() -> VerseCountIndex:
    return BibleLoader().build_verse_index(get_corpus())


@lru_cache()
def get_image_generator() -> BibleImageGenerator:
    return BibleImageGenerator(get_corpus())


def get_resolver(index: VerseCountIndex = Depends(get_verse_index)) -> ReferenceResolver:
    return ReferenceResolver(index)
