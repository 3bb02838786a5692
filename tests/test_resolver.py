"""Tests for the reference resolver entry points.

Covers alias equivalence, range expansion and normalisation, clamping,
silent dropping of unknown candidates, order-preserving de-duplication and
the two bulk input modes.
"""

import time

import pytest

from backend.visual_bible.utils.resolver import (
    BulkMode,
    ReferenceInputError,
    decode_upload,
    split_candidates,
)


class TestResolveText:
    @pytest.mark.parametrize("text", ["John 3:16", "Jn 3:16", "jn3:16", "  JOHN 3:16  "])
    def test_alias_equivalence(self, resolver, text):
        assert resolver.resolve_text(text) == ["John 3:16"]

    def test_verse_range(self, resolver):
        assert resolver.resolve_text("Romans 8:1-3") == ["Romans 8:1", "Romans 8:2", "Romans 8:3"]

    def test_reversed_range(self, resolver):
        assert resolver.resolve_text("Romans 8:3-1") == resolver.resolve_text("Romans 8:1-3")

    def test_cross_chapter_range(self, resolver):
        assert resolver.resolve_text("Genesis 1:30-2:2") == [
            "Genesis 1:30",
            "Genesis 1:31",
            "Genesis 2:1",
            "Genesis 2:2",
        ]

    def test_clamping(self, resolver):
        assert resolver.resolve_text("John 3:35-40") == ["John 3:35", "John 3:36"]

    @pytest.mark.parametrize("text", ["Gen 1-99999999999", "Gen 1:1-99999999999:1"])
    def test_huge_chapter_numbers_are_clamped(self, resolver, text):
        started = time.perf_counter()
        refs = resolver.resolve_text(text)
        assert time.perf_counter() - started < 1.0
        assert refs == resolver.resolve_text("Gen 1-3")

    def test_full_chapter_range(self, resolver):
        refs = resolver.resolve_text("Gen 1-3")
        assert len(refs) == 31 + 25 + 24
        assert refs[0] == "Genesis 1:1"
        assert refs[-1] == "Genesis 3:24"

    def test_compact_chapter(self, resolver):
        refs = resolver.resolve_text("1Cor13")
        assert refs == [f"1 Corinthians 13:{v}" for v in range(1, 14)]

    def test_roman_numbered_book(self, resolver):
        assert resolver.resolve_text("I Samuel 3:1-2") == ["1 Samuel 3:1", "1 Samuel 3:2"]

    def test_unknown_book_is_dropped(self, resolver):
        assert resolver.resolve_text("Frobnicate 1:1") == []
        assert resolver.resolve_text("Frobnicate 1:1; John 3:16") == ["John 3:16"]

    def test_garbage_mixed_with_valid(self, resolver):
        assert resolver.resolve_text("see below\nPs 23:1,, nonsense;John 3:99") == ["Psalms 23:1"]

    def test_deduplication_keeps_first_position(self, resolver):
        assert resolver.resolve_text("John 3:16, John 3:16, John 3:17") == ["John 3:16", "John 3:17"]
        assert resolver.resolve_text("John 3:17; John 3:16-17") == ["John 3:17", "John 3:16"]

    def test_idempotent(self, resolver):
        text = "Gen 1:30-2:2; Rom 8:3-1\nJohn 3"
        assert resolver.resolve_text(text) == resolver.resolve_text(text)

    @pytest.mark.parametrize("text", [None, "", "   \n ; ,"])
    def test_empty_input(self, resolver, text):
        assert resolver.resolve_text(text) == []


class TestResolveList:
    def test_lines_are_collapsed_and_kept_verbatim(self, resolver):
        text = "  John   3:16 \n\nRomans\t8:1\nJohn 3:16\n"
        assert resolver.resolve_list(text) == ["John 3:16", "Romans 8:1"]

    def test_no_grammar_matching(self, resolver):
        assert resolver.resolve_list("Jn 3:16-17") == ["Jn 3:16-17"]


class TestResolve:
    def test_bulk_before_typed(self, resolver):
        assert resolver.resolve("John 3:16", "John 3:17") == ["John 3:16", "John 3:17"]

    def test_typed_before_bulk(self, resolver):
        assert resolver.resolve("John 3:16", "John 3:17", bulk_first=False) == ["John 3:17", "John 3:16"]

    def test_duplicates_across_sources(self, resolver):
        assert resolver.resolve("John 3:16\nJohn 3:17", "John 3:16-18") == ["John 3:16", "John 3:17", "John 3:18"]

    def test_list_mode_for_bulk_only(self, resolver):
        refs = resolver.resolve("not a reference\nJohn  3:16", "Jn 3:16", bulk_mode=BulkMode.LIST)
        assert refs == ["not a reference", "John 3:16"]

    def test_mode_accepts_plain_string(self, resolver):
        assert resolver.resolve("Jn 3:16", None, bulk_mode="list") == ["Jn 3:16"]

    def test_no_sources(self, resolver):
        assert resolver.resolve() == []
        assert resolver.resolve(None, None) == []


def test_split_candidates():
    assert split_candidates(" a ,b;\n\n c ;") == ["a", "b", "c"]


class TestDecodeUpload:
    def test_utf8_with_bom(self):
        assert decode_upload("\ufeffJohn 3:16\n".encode("utf-8")) == "John 3:16\n"

    def test_invalid_bytes(self):
        with pytest.raises(ReferenceInputError):
            decode_upload(b"John \xff\xfe 3:16")
