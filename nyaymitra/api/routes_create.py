from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from nyaymitra.api.errors import attachment, http_error
from nyaymitra.api.uploads import read_upload
from nyaymitra.core.config import settings
from nyaymitra.core.errors import PipelineError
from nyaymitra.core.models import ExportFormat, RenderOptions, StructuredMetadata
from nyaymitra.services.extract_service import AUDIO_EXTS
from nyaymitra.services.llm_factory import get_pipeline
from nyaymitra.services.pipeline_service import PipelineOrchestrator

router = APIRouter(prefix="/create", tags=["create"])


class DraftRequest(BaseModel):
    transcript: str
    document_type: str
    metadata: StructuredMetadata | None = None
    output_language: str = "english"


class FromTextRequest(BaseModel):
    text: str
    document_type: str
    output_language: str = "english"


class RefineRequest(BaseModel):
    current_draft: str
    instructions: str


class ExportRequest(BaseModel):
    draft: str
    format: ExportFormat = ExportFormat.DOCX
    title: str | None = None
    document_type: str | None = None
    output_language: str = "english"


@router.post("/transcribe")
async def transcribe(
    audio: UploadFile = File(...),
    language: str = Form("hi"),
    pipeline: PipelineOrchestrator = Depends(get_pipeline),
):
    artifact = await read_upload(audio, allowed=AUDIO_EXTS, max_bytes=settings.MAX_AUDIO_BYTES, language=language)
    try:
        outcome = await pipeline.transcribe(artifact)
    except PipelineError as e:
        raise http_error(e)
    return {
        "transcript": outcome.extraction.text,
        "language": outcome.extraction.language,
        "audio_duration": outcome.extraction.duration_seconds,
        "metadata": outcome.metadata.model_dump(mode="json"),
        "tokens_used": outcome.total_tokens,
        "latency_ms": outcome.total_latency_ms,
    }


@router.post("/draft")
async def draft(req: DraftRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if not req.transcript.strip() or not req.document_type.strip():
        raise HTTPException(status_code=400, detail="transcript and document_type are required")
    try:
        outcome = await pipeline.compose(req.transcript, req.metadata, req.document_type, req.output_language)
    except PipelineError as e:
        raise http_error(e)
    return {
        "draft": outcome.draft.text,
        "document_type": outcome.draft.document_type,
        "tokens_used": outcome.total_tokens,
    }


@router.post("/from-text")
async def from_text(req: FromTextRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if not req.text.strip() or not req.document_type.strip():
        raise HTTPException(status_code=400, detail="text and document_type are required")
    try:
        outcome = await pipeline.draft_from_text(req.text, req.document_type, req.output_language)
    except PipelineError as e:
        raise http_error(e)
    return {
        "draft": outcome.draft.text,
        "document_type": outcome.draft.document_type,
        "metadata": outcome.metadata.model_dump(mode="json") if outcome.metadata else None,
        "tokens_used": outcome.total_tokens,
    }


@router.post("/refine")
async def refine(req: RefineRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if not req.current_draft.strip() or not req.instructions.strip():
        raise HTTPException(status_code=400, detail="current_draft and instructions are required")
    try:
        result = await pipeline.refine(req.current_draft, req.instructions)
    except PipelineError as e:
        raise http_error(e)
    return {"draft": result.text}


@router.post("/export")
def export(req: ExportRequest, pipeline: PipelineOrchestrator = Depends(get_pipeline)):
    if not req.draft.strip():
        raise HTTPException(status_code=400, detail="draft text is required")
    options = RenderOptions(title=req.title, document_type=req.document_type, language=req.output_language)
    try:
        artifact = pipeline.export(req.draft, req.format, options)
    except PipelineError as e:
        raise http_error(e)
    return attachment(artifact)
