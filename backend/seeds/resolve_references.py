import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from backend.visual_bible.utils.bible_loader import BibleLoader, CorpusError
from backend.visual_bible.utils.resolver import BulkMode, ReferenceInputError, ReferenceResolver, decode_upload

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve Bible references into canonical verse identifiers")
    parser.add_argument("references", nargs="*", help="Reference text, e.g. 'John 3:16-18; Ps 23'")
    parser.add_argument("--file", type=Path, help="File of references, processed before the inline text")
    parser.add_argument("--list", action="store_true", help="Treat --file as one ready-made reference per line")
    parser.add_argument("--corpus", type=Path, help="Override the default CSV corpus path")
    parser.add_argument("--verbose", action="store_true", help="Log dropped candidates")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        index = BibleLoader(args.corpus).build_verse_index()
    except CorpusError as exc:
        logger.error("%s", exc)
        return 1

    bulk_text: Optional[str] = None
    if args.file:
        try:
            bulk_text = decode_upload(args.file.read_bytes())
        except (OSError, ReferenceInputError) as exc:
            logger.error("Cannot read %s: %s", args.file, exc)
            return 1

    resolver = ReferenceResolver(index)
    mode = BulkMode.LIST if args.list else BulkMode.TEXT
    for reference in resolver.resolve(bulk_text, "\n".join(args.references), bulk_mode=mode):
        sys.stdout.write(reference + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
