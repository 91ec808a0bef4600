from fastapi import APIRouter, HTTPException

from api.cv.schemas import CvExportRequest, ExportFormat
from export_errors import ExportError
from .service import export_cv_file

router = APIRouter(prefix="/api/cv")


@router.post("/export/{output_format}")
def export_route(output_format: ExportFormat, request: CvExportRequest):
    try:
        return export_cv_file(request, output_format)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ExportError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to export CV ({exc.stage}): {exc}") from exc
