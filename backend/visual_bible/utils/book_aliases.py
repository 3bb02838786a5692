import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

CANONICAL_BOOKS: Tuple[str, ...] = (
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy", "Joshua", "Judges", "Ruth",
    "1 Samuel", "2 Samuel", "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah", "Esther",
    "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi", "Matthew", "Mark", "Luke", "John", "Acts", "Romans",
    "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians", "Philippians", "Colossians", "1 Thessalonians",
    "2 Thessalonians", "1 Timothy", "2 Timothy", "Titus", "Philemon", "Hebrews", "James", "1 Peter", "2 Peter",
    "1 John", "2 John", "3 John", "Jude", "Revelation",
)

# Abbreviations keyed by canonical name. Numbered books list Arabic and Roman forms.
BOOK_ABBREVIATIONS: Dict[str, Tuple[str, ...]] = {
    "Genesis": ("gen", "ge", "gn"),
    "Exodus": ("exo", "ex", "exod"),
    "Leviticus": ("lev", "le", "lv"),
    "Numbers": ("num", "nu", "nm", "nb"),
    "Deuteronomy": ("deut", "deu", "dt"),
    "Joshua": ("jos", "josh"),
    "Judges": ("jdg", "judg", "jg"),
    "Ruth": ("rth", "ru"),
    "1 Samuel": ("1samuel", "1sam", "1sa", "i samuel", "isam"),
    "2 Samuel": ("2samuel", "2sam", "2sa", "ii samuel", "iisam"),
    "1 Kings": ("1kings", "1ki", "1kgs", "i kings", "ikgs"),
    "2 Kings": ("2kings", "2ki", "2kgs", "ii kings", "iikgs"),
    "1 Chronicles": ("1chronicles", "1ch", "1chr", "i chronicles", "ichr"),
    "2 Chronicles": ("2chronicles", "2ch", "2chr", "ii chronicles", "iichr"),
    "Ezra": ("ezr",),
    "Nehemiah": ("neh", "ne"),
    "Esther": ("est", "esth"),
    "Job": ("jb",),
    "Psalms": ("ps", "psa", "psalm", "pss", "psm"),
    "Proverbs": ("pro", "prov", "prv", "pr"),
    "Ecclesiastes": ("ecc", "ec", "eccl"),
    "Song of Solomon": ("song", "sos", "song of songs", "canticles"),
    "Isaiah": ("isa", "is"),
    "Jeremiah": ("jer", "je"),
    "Lamentations": ("lam", "la"),
    "Ezekiel": ("ezk", "eze", "ezek"),
    "Daniel": ("dan", "da"),
    "Hosea": ("hos", "ho"),
    "Joel": ("joe", "jl"),
    "Amos": ("amo", "am"),
    "Obadiah": ("oba", "ob", "obad"),
    "Jonah": ("jon", "jnh"),
    "Micah": ("mic", "mc"),
    "Nahum": ("nah", "na"),
    "Habakkuk": ("hab", "hb"),
    "Zephaniah": ("zep", "zp", "zeph"),
    "Haggai": ("hag", "hg"),
    "Zechariah": ("zec", "zc", "zech"),
    "Malachi": ("mal", "ml"),
    "Matthew": ("mat", "matt", "mt"),
    "Mark": ("mrk", "mk", "mr"),
    "Luke": ("luk", "lk", "lu"),
    "John": ("jhn", "jn", "joh"),
    "Acts": ("act", "ac"),
    "Romans": ("rom", "ro", "rm"),
    "1 Corinthians": ("1corinthians", "1cor", "1co", "i corinthians", "icor"),
    "2 Corinthians": ("2corinthians", "2cor", "2co", "ii corinthians", "iicor"),
    "Galatians": ("gal", "ga"),
    "Ephesians": ("eph", "ep"),
    "Philippians": ("php", "phil", "ph"),
    "Colossians": ("col", "co"),
    "1 Thessalonians": ("1thessalonians", "1th", "1thes", "i thessalonians", "ithes"),
    "2 Thessalonians": ("2thessalonians", "2th", "2thes", "ii thessalonians", "iithes"),
    "1 Timothy": ("1timothy", "1tim", "1ti", "i timothy", "itim"),
    "2 Timothy": ("2timothy", "2tim", "2ti", "ii timothy", "iitim"),
    "Titus": ("tit", "ti"),
    "Philemon": ("phm", "phile", "philem"),
    "Hebrews": ("heb", "he"),
    "James": ("jas", "jm"),
    "1 Peter": ("1peter", "1pet", "1pe", "i peter", "ipet"),
    "2 Peter": ("2peter", "2pet", "2pe", "ii peter", "iipet"),
    "1 John": ("1john", "1jn", "1joh", "1jo", "i john", "ijn"),
    "2 John": ("2john", "2jn", "2joh", "2jo", "ii john", "iijn"),
    "3 John": ("3john", "3jn", "3joh", "3jo", "iii john", "iiijn"),
    "Jude": ("jud", "jd"),
    "Revelation": ("rev", "re", "rv", "revelations"),
}

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_book_token(raw: str) -> str:
    """Lowercase and drop everything but ASCII letters and digits."""
    return _NON_ALNUM.sub("", raw.lower())


def build_alias_table(abbreviations: Mapping[str, Tuple[str, ...]]) -> Mapping[str, str]:
    table: Dict[str, str] = {}
    for canonical, forms in abbreviations.items():
        for form in (canonical, *forms):
            key = normalize_book_token(form)
            existing = table.get(key)
            if existing is not None and existing != canonical:
                raise ValueError(f"Alias '{form}' maps to both {existing} and {canonical}")
            table[key] = canonical
    return MappingProxyType(table)


BOOK_ALIASES: Mapping[str, str] = build_alias_table(BOOK_ABBREVIATIONS)


def canonicalize(raw_token: str) -> Optional[str]:
    return BOOK_ALIASES.get(normalize_book_token(raw_token))
