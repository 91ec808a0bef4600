import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import settings

logger = logging.getLogger(__name__)

FONT_FAMILY = "DejaVu"
FALLBACK_FAMILY = "Helvetica"

# fpdf style key -> candidate files, first existing one wins.
FONT_FILES = {
    "": ("DejaVuSans.ttf",),
    "B": ("DejaVuSans-Bold.ttf",),
    "I": ("DejaVuSans-Oblique.ttf", "DejaVuSans.ttf"),
    "BI": ("DejaVuSans-BoldOblique.ttf", "DejaVuSans-Bold.ttf"),
}


@dataclass(frozen=True)
class FontSet:
    family: str
    files: tuple[tuple[str, Path], ...]


@lru_cache(maxsize=None)
def load_font_set(font_dir: Path) -> FontSet | None:
    """Locate the Unicode TTF faces under ``font_dir``; ``None`` when a required face is missing."""
    resolved: list[tuple[str, Path]] = []
    for style, candidates in FONT_FILES.items():
        path = next((font_dir / name for name in candidates if (font_dir / name).is_file()), None)
        if path is None:
            logger.warning("Unicode font face missing style=%r dir=%s; using %s", style, font_dir, FALLBACK_FAMILY)
            return None
        resolved.append((style, path))
    logger.info("Unicode fonts located dir=%s faces=%d", font_dir, len(resolved))
    return FontSet(family=FONT_FAMILY, files=tuple(resolved))


def embedded_fonts() -> FontSet | None:
    return load_font_set(settings.FONT_DIR)
