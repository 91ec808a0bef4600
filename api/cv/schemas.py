from enum import Enum

from pydantic import Field

from cv_models import CV, CVVersion


class ExportFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    JSON = "json"


class CvExportRequest(CV):
    versions: list[CVVersion] = Field(
        default_factory=list,
        description="Optional version history, embedded only in the JSON export",
    )
