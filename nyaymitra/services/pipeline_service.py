"""Sequences extraction, interpretation, composition and rendering.

Stages run strictly one after another. A stage failure is tagged with the
stage name and re-raised as is: no retries, no partial results. Token usage
and latency are collected per stage on the returned outcome.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from nyaymitra.core.errors import PipelineError, Stage
from nyaymitra.core.models import (
    DocumentType,
    Draft,
    DraftOutcome,
    ExportFormat,
    RenderedArtifact,
    RenderOptions,
    SourceArtifact,
    StageMetrics,
    StructuredMetadata,
    TranscribeOutcome,
    UnderstandOutcome,
)
from nyaymitra.services.draft_service import DraftComposer
from nyaymitra.services.extract_service import TextExtractor, ensure_sufficient_text
from nyaymitra.services.interpret_service import StructuredInterpreter
from nyaymitra.services.render_service import DocumentRenderer

logger = logging.getLogger(__name__)


@contextmanager
def stage(name: Stage):
    try:
        yield
    except PipelineError as e:
        e.stage = name.value
        logger.warning("Pipeline stage %s failed: %s", name.value, e)
        raise


class PipelineOrchestrator:
    def __init__(
        self,
        extractor: TextExtractor,
        interpreter: StructuredInterpreter,
        composer: DraftComposer,
        renderer: DocumentRenderer,
    ):
        self.extractor = extractor
        self.interpreter = interpreter
        self.composer = composer
        self.renderer = renderer

    async def transcribe(self, artifact: SourceArtifact) -> TranscribeOutcome:
        """Dictation -> transcript -> structured metadata."""
        with stage(Stage.EXTRACT):
            extraction = ensure_sufficient_text(await self.extractor.extract(artifact))
        with stage(Stage.INTERPRET):
            meta = await self.interpreter.extract_metadata(extraction.text)
        return TranscribeOutcome(
            extraction=extraction,
            metadata=meta.metadata,
            metrics=[
                StageMetrics(stage=Stage.EXTRACT.value, latency_ms=extraction.latency_ms),
                StageMetrics(stage=Stage.INTERPRET.value, tokens_used=meta.tokens_used, latency_ms=meta.latency_ms),
            ],
        )

    async def understand(self, artifact: SourceArtifact, output_language: str = "english") -> UnderstandOutcome:
        """Uploaded document -> text -> six-section explanation."""
        with stage(Stage.EXTRACT):
            extraction = ensure_sufficient_text(await self.extractor.extract(artifact))
        outcome = await self.explain_text(extraction.text, output_language)
        outcome.extraction = extraction
        outcome.metrics.insert(0, StageMetrics(stage=Stage.EXTRACT.value, latency_ms=extraction.latency_ms))
        return outcome

    async def explain_text(self, text: str, output_language: str = "english") -> UnderstandOutcome:
        with stage(Stage.INTERPRET):
            explanation = await self.interpreter.explain(text, output_language)
        return UnderstandOutcome(
            explanation=explanation,
            metrics=[StageMetrics(stage=Stage.INTERPRET.value, tokens_used=explanation.tokens_used,
                                  latency_ms=explanation.latency_ms)],
        )

    async def draft_from_text(
        self, text: str, document_type: DocumentType | str, output_language: str = "english"
    ) -> DraftOutcome:
        """Typed text -> metadata (document type forced by the caller) -> draft."""
        with stage(Stage.INTERPRET):
            meta = await self.interpreter.extract_metadata(text)
        metadata = meta.metadata
        try:
            metadata.document_type = DocumentType(document_type)
        except ValueError:
            metadata.document_type = DocumentType.OTHER
        outcome = await self.compose(text, metadata, document_type, output_language)
        outcome.metrics.insert(0, StageMetrics(stage=Stage.INTERPRET.value, tokens_used=meta.tokens_used,
                                               latency_ms=meta.latency_ms))
        return outcome

    async def compose(
        self,
        transcript: str,
        metadata: StructuredMetadata | dict | None,
        document_type: DocumentType | str,
        output_language: str = "english",
    ) -> DraftOutcome:
        with stage(Stage.COMPOSE):
            draft = await self.composer.compose(transcript, metadata, document_type, output_language)
        return DraftOutcome(
            draft=draft,
            metadata=metadata if isinstance(metadata, StructuredMetadata) else None,
            metrics=[StageMetrics(stage=Stage.COMPOSE.value, tokens_used=draft.tokens_used, latency_ms=draft.latency_ms)],
        )

    async def refine(self, current_draft: str, instructions: str) -> Draft:
        with stage(Stage.COMPOSE):
            return await self.composer.refine(current_draft, instructions)

    def export(
        self,
        text: str,
        fmt: ExportFormat | str,
        options: RenderOptions | None = None,
        output_dir: str | None = None,
    ) -> RenderedArtifact:
        with stage(Stage.RENDER):
            return self.renderer.render(text, fmt, options, output_dir)
