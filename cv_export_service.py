"""
Entry points of the export engine.

Callers hand in an already-authorised ``CV`` record and get back the finished file bytes with
a media type and a suggested filename. Nothing here touches storage or the network.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from cv_docx_service import generate_docx
from cv_models import CV, CVExport, CVVersion
from cv_pdf_service import generate_pdf

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
JSON_MEDIA_TYPE = "application/json"

EXPORT_FORMATS = ("pdf", "docx", "json")


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    media_type: str
    filename: str


def sanitize_filename(value: str) -> str:
    value = re.sub(r'[\\/:*?"<>|]+', "-", value)
    value = re.sub(r"[\x00-\x1f\x7f]+", "", value)
    value = re.sub(r"\s+", " ", value).strip(" .")
    return value or "cv"


def ascii_filename(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    return normalized.encode("ascii", "ignore").decode("ascii").strip() or "cv"


def suggested_filename(cv: CV, extension: str) -> str:
    return f"{sanitize_filename(cv.title)}.{extension}"


def generate_json(
    cv: CV,
    versions: Iterable[CVVersion] = (),
    exported_at: datetime | None = None,
) -> bytes:
    payload = CVExport(
        title=cv.title,
        data=cv.data,
        exported_at=exported_at or datetime.now(timezone.utc),
        versions=list(versions),
    )
    exclude = None if payload.versions else {"versions"}
    return payload.model_dump_json(by_alias=True, indent=2, exclude_none=True, exclude=exclude).encode("utf-8")


def export_cv(
    cv: CV,
    output_format: str,
    *,
    versions: Iterable[CVVersion] = (),
    exported_at: datetime | None = None,
) -> ExportResult:
    fmt = output_format.strip().lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {output_format!r}. Use one of {', '.join(EXPORT_FORMATS)}.")

    logger.info("export_cv called title=%s format=%s", cv.title, fmt)

    if fmt == "pdf":
        return ExportResult(generate_pdf(cv), PDF_MEDIA_TYPE, suggested_filename(cv, "pdf"))
    if fmt == "docx":
        return ExportResult(generate_docx(cv), DOCX_MEDIA_TYPE, suggested_filename(cv, "docx"))
    content = generate_json(cv, versions=versions, exported_at=exported_at)
    return ExportResult(content, JSON_MEDIA_TYPE, suggested_filename(cv, "json"))
