from fastapi import HTTPException
from fastapi.responses import Response

from nyaymitra.core.errors import PipelineError
from nyaymitra.core.models import RenderedArtifact

_STATUS = {
    "unsupported_format": 415,
    "transcription_failed": 502,
    "recognition_failed": 502,
    "insufficient_text": 422,
    "malformed_metadata": 502,
    "upstream_failure": 503,
    "io_failure": 500,
    "font_unavailable": 500,
}


def http_error(e: PipelineError) -> HTTPException:
    return HTTPException(
        status_code=_STATUS.get(e.error_code, 500),
        detail={"error": e.message, "code": e.error_code, "stage": e.stage},
    )


def attachment(artifact: RenderedArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
