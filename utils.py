from urllib.parse import quote

from fastapi.responses import Response

from cv_export_service import ExportResult, ascii_filename


def content_disposition(filename: str) -> str:
    fallback = ascii_filename(filename).replace('"', "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def export_response(result: ExportResult) -> Response:
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": content_disposition(result.filename)},
    )
