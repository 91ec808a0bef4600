import os
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()

DEFAULT_FONT_DIR = Path(__file__).with_name("assets") / "fonts"

FONT_DIR = Path(os.getenv("CV_EXPORT_FONT_DIR", "").strip() or DEFAULT_FONT_DIR)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGIN_REGEX = os.getenv("CORS_ORIGIN_REGEX", ".*")
