import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..config import get_settings
from ..schemas import HighlightRegion
from .bible_loader import VerseRow

logger = logging.getLogger(__name__)

LEFT_MARGIN = 12
TOP_MARGIN = 28
LINE_HEIGHT = 6
BOOK_GAP = 20
TESTAMENT_GAP = 30
COLUMN_WIDTH = 42
COLUMN_LIMIT = 7800
NEW_TESTAMENT_START = "Matthew"

BACKGROUND_COLOR = (250, 248, 242)
TITLE_COLOR = (30, 30, 30)
LABEL_COLOR = (90, 90, 90)
DIVIDER_COLOR = (120, 120, 120)
HIGHLIGHT_TEXT_COLOR = (235, 0, 0, 255)
HIGHLIGHT_FILL_COLOR = (255, 0, 0, 70)

MISSING_TEXT = "Reference not found in loaded Bible dataset."


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class PlacedVerse:
    row: VerseRow
    x: int
    y: int


@dataclass(frozen=True)
class GeneratedImage:
    output_file: Path
    highlights: List[HighlightRegion]


@dataclass(frozen=True)
class Layout:
    verses: List[PlacedVerse]
    rectangles: Dict[str, Rect]
    width: int
    height: int


def build_layout(rows: Sequence[VerseRow]) -> Layout:
    """Place every verse label in book columns; y is the label baseline."""
    x = LEFT_MARGIN
    y = TOP_MARGIN
    max_y = 0
    previous_book = ""
    placed: List[PlacedVerse] = []
    rectangles: Dict[str, Rect] = {}

    for row in rows:
        if row.book != previous_book:
            if previous_book:
                x += BOOK_GAP
            if row.book == NEW_TESTAMENT_START:
                x += TESTAMENT_GAP
            y = TOP_MARGIN
            previous_book = row.book

        placed.append(PlacedVerse(row, x, y))
        rectangles[row.reference] = Rect(x, y, max(10, len(row.reference) * 3), LINE_HEIGHT)

        y += LINE_HEIGHT
        max_y = max(max_y, y)
        if y > COLUMN_LIMIT:
            x += COLUMN_WIDTH
            y = TOP_MARGIN

    return Layout(placed, rectangles, x + 80, max_y + 40)


def _load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    candidates = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Bold.ttf" if bold else "/usr/share/fonts/truetype/dejavu/DejaVuSerif.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf" if bold else "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for path in candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default()


class BibleImageGenerator:
    def __init__(self, verses: Sequence[VerseRow], base_image_path: Optional[Path] = None):
        self.base_image_path = base_image_path or get_settings().base_image_path
        self.layout = build_layout(verses)
        self.texts: Dict[str, str] = {row.reference: row.text for row in verses}
        self.title_font = _load_font(11, bold=True)
        self.label_font = _load_font(5)
        self.highlight_font = _load_font(5, bold=True)
        logger.info("Prepared layout for %s verses (%sx%s)", len(verses), self.layout.width, self.layout.height)

    @property
    def size(self) -> Tuple[int, int]:
        return self.layout.width, self.layout.height

    def generate_base_image_if_missing(self) -> bool:
        if self.base_image_path.exists():
            logger.info("Base Bible image already exists at %s", self.base_image_path.resolve())
            return False
        self.render_base_image(self.base_image_path)
        return True

    def render_base_image(self, output_file: Path) -> Path:
        logger.info("Generating base Bible image at %s", output_file.resolve())
        output_file.parent.mkdir(parents=True, exist_ok=True)

        image = Image.new("RGB", self.size, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(image)

        current_book = ""
        for count, placed in enumerate(self.layout.verses, start=1):
            if placed.row.book != current_book:
                current_book = placed.row.book
                draw.text((placed.x, 2), current_book, fill=TITLE_COLOR, font=self.title_font)
                if current_book == NEW_TESTAMENT_START:
                    divider_x = placed.x - 8
                    draw.line([divider_x, 18, divider_x, self.layout.height - 5], fill=DIVIDER_COLOR)
            draw.text((placed.x, placed.y - LINE_HEIGHT), placed.row.reference, fill=LABEL_COLOR, font=self.label_font)
            if count % 5000 == 0:
                logger.info("Rendered %s verse labels into base image...", count)

        image.save(output_file, format="PNG")
        logger.info("Base Bible image generated successfully.")
        return output_file

    def generate(self, output_file: Path, references: Sequence[str]) -> GeneratedImage:
        logger.info("Generating highlighted Bible image with %s requested references", len(references))
        self.generate_base_image_if_missing()

        with Image.open(self.base_image_path) as base:
            image = base.convert("RGBA")
        overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)

        regions: List[HighlightRegion] = []
        for reference in references:
            rect = self.layout.rectangles.get(reference)
            if rect is None:
                continue
            region = HighlightRegion(
                verse=reference,
                text=self.texts.get(reference, MISSING_TEXT),
                x=rect.x - 1,
                y=rect.y - rect.height + 2,
                width=rect.width + 3,
                height=rect.height + 1,
            )
            draw.rectangle(
                [region.x, region.y, region.x + region.width, region.y + region.height],
                fill=HIGHLIGHT_FILL_COLOR,
            )
            draw.text((rect.x, rect.y - rect.height), reference, fill=HIGHLIGHT_TEXT_COLOR, font=self.highlight_font)
            regions.append(region)

        output_file.parent.mkdir(parents=True, exist_ok=True)
        Image.alpha_composite(image, overlay).convert("RGB").save(output_file, format="PNG")
        logger.info("Generated highlighted image at %s", output_file.resolve())
        return GeneratedImage(output_file, regions)
