import argparse
import logging
from pathlib import Path

from backend.visual_bible.config import get_settings
from backend.visual_bible.utils.bible_loader import BibleLoader, CorpusError
from backend.visual_bible.utils.image_generator import BibleImageGenerator

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render the base Bible layout image from the verse corpus")
    parser.add_argument("--corpus", type=Path, default=settings.bible_corpus_path, help="Path to the CSV corpus")
    parser.add_argument("--output", type=Path, default=settings.base_image_path, help="Where to write the PNG")
    parser.add_argument("--force", action="store_true", help="Re-render even if the image already exists")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.verbose)

    try:
        verses = BibleLoader(args.corpus.resolve()).load_verses()
    except CorpusError as exc:
        raise SystemExit(str(exc))

    generator = BibleImageGenerator(verses, base_image_path=args.output.resolve())
    if args.force:
        generator.render_base_image(generator.base_image_path)
    elif not generator.generate_base_image_if_missing():
        logger.info("Skipping render - image already exists (use --force to overwrite)")
        return
    logger.info("Completed. Base image is %sx%s pixels.", *generator.size)


if __name__ == "__main__":
    main()
