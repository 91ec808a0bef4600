import logging

from fastapi.responses import Response

from api.cv.schemas import CvExportRequest, ExportFormat
from cv_export_service import export_cv
from cv_models import CV
from utils import export_response

logger = logging.getLogger(__name__)


def export_cv_file(request: CvExportRequest, output_format: ExportFormat) -> Response:
    cv = CV.model_validate(request.model_dump(exclude={"versions"}))
    logger.info("export requested title=%s format=%s versions=%d", cv.title, output_format.value, len(request.versions))
    result = export_cv(cv, output_format.value, versions=request.versions)
    return export_response(result)
