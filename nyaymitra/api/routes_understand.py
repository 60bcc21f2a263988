from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from nyaymitra.api.errors import attachment, http_error
from nyaymitra.api.uploads import DOCUMENT_EXTS, read_upload
from nyaymitra.core.config import settings
from nyaymitra.core.errors import PipelineError
from nyaymitra.core.models import ExportFormat, RenderOptions
from nyaymitra.services.llm_factory import get_pipeline
from nyaymitra.services.pipeline_service import PipelineOrchestrator

router = APIRouter(prefix="/understand", tags=["understand"])

EXPLANATION_TITLE = "Document Explanation - NyayMitra"
# Only a preview of the extracted text goes back to the client.
PREVIEW_CHARS = 500


class ExplainTextRequest(BaseModel):
    text: str
    language: str = "english"


class ExportExplanationRequest(BaseModel):
    explanation: str
    format: ExportFormat = ExportFormat.PDF
    language: str = "english"


@router.post("/upload")
async def upload(
    document: UploadFile = File(...),
    language: str = Form("english"),
    source_language: str = Form("hi"),
    pipeline: PipelineOrchestrator = Depends(get_pipeline),
):
    artifact = await read_upload(
        document, allowed=DOCUMENT_EXTS, max_bytes=settings.MAX_DOCUMENT_BYTES, language=source_language
    )
    try:
        outcome = await pipeline.understand(artifact, language)
    except PipelineError as e:
        raise http_error(e)

    text = outcome.extraction.text
    return {
        "extracted_text": text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else ""),
        "extraction_method": outcome.extraction.method.value,
        "ocr_confidence": outcome.extraction.confidence,
        "pages": outcome.extraction.page_count,
        "explanation": outcome.explanation.full_text,
        "sections": outcome.explanation.sections.model_dump(),
        "tokens_used": outcome.total_tokens,
    }


@router.post("/explain-text")
async def explain_text(req: ExplainTextRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if len(req.text.strip()) < settings.MIN_EXTRACTED_CHARS:
        raise HTTPException(
            status_code=400,
            detail=f"Please provide at least {settings.MIN_EXTRACTED_CHARS} characters of document text",
        )
    try:
        outcome = await pipeline.explain_text(req.text, req.language)
    except PipelineError as e:
        raise http_error(e)
    return {
        "explanation": outcome.explanation.full_text,
        "sections": outcome.explanation.sections.model_dump(),
        "tokens_used": outcome.total_tokens,
    }


@router.post("/export")
def export(req: ExportExplanationRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if not req.explanation.strip():
        raise HTTPException(status_code=400, detail="explanation text is required")
    options = RenderOptions(title=EXPLANATION_TITLE, document_type="explanation", language=req.language)
    try:
        artifact = pipeline.export(req.explanation, req.format, options)
    except PipelineError as e:
        raise http_error(e)
    return attachment(artifact)
