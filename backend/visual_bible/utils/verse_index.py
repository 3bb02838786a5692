from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple


class VerseCountIndex:
    """Read-only book -> chapter -> max verse lookup built from the corpus."""

    def __init__(self, counts: Mapping[str, Mapping[int, int]]):
        self._counts: Mapping[str, Mapping[int, int]] = MappingProxyType(
            {book: MappingProxyType(dict(chapters)) for book, chapters in counts.items()}
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[str, int, int]]) -> "VerseCountIndex":
        counts: Dict[str, Dict[int, int]] = {}
        for book, chapter, verse in rows:
            chapters = counts.setdefault(book, {})
            chapters[chapter] = max(chapters.get(chapter, 0), verse)
        return cls(counts)

    def max_verse(self, book: str, chapter: int) -> int:
        """Return the last verse number of a chapter, or 0 when the chapter is unknown."""
        return self._counts.get(book, {}).get(chapter, 0)

    def chapters(self, book: str) -> Mapping[int, int]:
        return self._counts.get(book, MappingProxyType({}))

    def books(self) -> Iterator[str]:
        return iter(self._counts)

    def __contains__(self, book: object) -> bool:
        return book in self._counts

    def __len__(self) -> int:
        return len(self._counts)
