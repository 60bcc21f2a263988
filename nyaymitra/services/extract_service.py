"""Plain-text extraction from uploaded sources.

PDFs try their text layer first and fall back to OCR whenever it is too thin
(scanned documents); images always go through OCR; audio is transcribed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from io import BytesIO
from pathlib import Path
from typing import Callable

from nyaymitra.adapters.ocr.base import OpticalRecognizer
from nyaymitra.adapters.speech.base import SpeechToText
from nyaymitra.core.config import settings
from nyaymitra.core.errors import ExtractionError, ExtractionErrorKind
from nyaymitra.core.models import ExtractionMethod, ExtractionResult, MediaKind, SourceArtifact
from nyaymitra.legal.prompts import vocabulary_hint

logger = logging.getLogger(__name__)

AUDIO_EXTS = (".wav", ".mp3", ".m4a", ".ogg", ".webm")
IMAGE_EXTS = (".png", ".jpg", ".jpeg", ".tiff")

# Tesseract traineddata names for the scripts we expect besides English.
OCR_SCRIPTS = {
    "hi": "hin",
    "mr": "mar",
    "bn": "ben",
    "gu": "guj",
    "pa": "pan",
    "ta": "tam",
    "te": "tel",
    "kn": "kan",
    "ml": "mal",
}


def detect_media_kind(filename: str | None) -> MediaKind:
    ext = Path(filename or "").suffix.lower()
    if ext in AUDIO_EXTS:
        return MediaKind.AUDIO
    if ext == ".pdf":
        return MediaKind.PDF
    if ext in IMAGE_EXTS:
        return MediaKind.IMAGE
    if ext == ".txt":
        return MediaKind.TEXT
    raise ExtractionError(
        ExtractionErrorKind.UNSUPPORTED_FORMAT,
        f"Unsupported file format: {ext or 'unknown'}",
    )


def ocr_languages(language: str | None) -> str:
    script = OCR_SCRIPTS.get((language or "").lower())
    if script:
        return f"eng+{script}"
    return settings.OCR_LANGUAGES


def read_pdf_text_layer(data: bytes) -> tuple[str, int]:
    """Return (text, page_count) from a PDF's embedded text layer."""
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(data))
    parts = []
    for page in reader.pages:
        t = page.extract_text() or ""
        if t.strip():
            parts.append(t)
    return "\n\n".join(parts), len(reader.pages)


def ensure_sufficient_text(result: ExtractionResult, min_chars: int | None = None) -> ExtractionResult:
    min_chars = settings.MIN_EXTRACTED_CHARS if min_chars is None else min_chars
    if len(result.text.strip()) < min_chars:
        raise ExtractionError(ExtractionErrorKind.INSUFFICIENT_TEXT)
    return result


class TextExtractor:
    def __init__(
        self,
        speech: SpeechToText,
        ocr: OpticalRecognizer,
        *,
        text_layer_reader: Callable[[bytes], tuple[str, int]] = read_pdf_text_layer,
        transcribe_timeout_s: float | None = None,
        ocr_timeout_s: float | None = None,
        min_text_layer_chars: int | None = None,
    ):
        self.speech = speech
        self.ocr = ocr
        self.text_layer_reader = text_layer_reader
        self.transcribe_timeout_s = transcribe_timeout_s or settings.TRANSCRIBE_TIMEOUT_S
        self.ocr_timeout_s = ocr_timeout_s or settings.OCR_TIMEOUT_S
        self.min_text_layer_chars = (
            settings.MIN_TEXT_LAYER_CHARS if min_text_layer_chars is None else min_text_layer_chars
        )

    async def extract(self, artifact: SourceArtifact) -> ExtractionResult:
        logger.info("Extracting text kind=%s filename=%s bytes=%d",
                    artifact.media_kind.value, artifact.filename, len(artifact.data))
        if artifact.media_kind == MediaKind.AUDIO:
            return await self._transcribe(artifact)
        if artifact.media_kind == MediaKind.PDF:
            return await self._extract_pdf(artifact)
        if artifact.media_kind == MediaKind.IMAGE:
            return await self._recognize(artifact)
        if artifact.media_kind == MediaKind.TEXT:
            return ExtractionResult(
                text=artifact.data.decode("utf-8", errors="ignore"),
                method=ExtractionMethod.TEXT_LAYER,
                page_count=1,
            )
        raise ExtractionError(ExtractionErrorKind.UNSUPPORTED_FORMAT)

    async def _transcribe(self, artifact: SourceArtifact) -> ExtractionResult:
        start = time.monotonic()
        try:
            tr = await asyncio.wait_for(
                self.speech.transcribe(
                    artifact.data,
                    filename=artifact.filename or "audio.webm",
                    language=artifact.language,
                    prompt=vocabulary_hint(artifact.language),
                ),
                timeout=self.transcribe_timeout_s,
            )
        except asyncio.TimeoutError as e:
            logger.error("Transcription timed out after %ss", self.transcribe_timeout_s)
            raise ExtractionError(
                ExtractionErrorKind.TRANSCRIPTION_FAILED,
                f"Transcription timed out after {self.transcribe_timeout_s}s",
            ) from e
        except Exception as e:
            logger.error("Transcription failed: %s", e)
            raise ExtractionError(
                ExtractionErrorKind.TRANSCRIPTION_FAILED, f"Transcription failed: {e}"
            ) from e

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.info("Transcription completed latency_ms=%d chars=%d", latency_ms, len(tr.text))
        return ExtractionResult(
            text=tr.text,
            method=ExtractionMethod.SPEECH_TO_TEXT,
            duration_seconds=tr.duration_seconds,
            language=tr.language,
            segments=tr.segments,
            latency_ms=latency_ms,
        )

    async def _extract_pdf(self, artifact: SourceArtifact) -> ExtractionResult:
        start = time.monotonic()
        try:
            text, pages = await asyncio.to_thread(self.text_layer_reader, artifact.data)
        except Exception as e:
            # Damaged or image-only PDFs still get their OCR attempt.
            logger.warning("PDF text layer unreadable, falling back to OCR: %s", e)
            text, pages = "", None

        if len(text.strip()) > self.min_text_layer_chars:
            return ExtractionResult(
                text=text,
                method=ExtractionMethod.TEXT_LAYER,
                page_count=pages,
                latency_ms=int((time.monotonic() - start) * 1000),
            )

        logger.info("PDF text layer yielded %d chars, attempting OCR", len(text.strip()))
        result = await self._recognize(artifact)
        result.page_count = pages
        return result

    async def _recognize(self, artifact: SourceArtifact) -> ExtractionResult:
        languages = ocr_languages(artifact.language)
        start = time.monotonic()
        try:
            ocr = await asyncio.wait_for(
                self.ocr.recognize(artifact.data, media_kind=artifact.media_kind, languages=languages),
                timeout=self.ocr_timeout_s,
            )
        except asyncio.TimeoutError as e:
            logger.error("OCR timed out after %ss", self.ocr_timeout_s)
            raise ExtractionError(
                ExtractionErrorKind.RECOGNITION_FAILED, f"OCR timed out after {self.ocr_timeout_s}s"
            ) from e
        except Exception as e:
            logger.error("OCR failed: %s", e)
            raise ExtractionError(ExtractionErrorKind.RECOGNITION_FAILED, f"OCR failed: {e}") from e

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.info("OCR completed latency_ms=%d confidence=%.1f chars=%d languages=%s",
                    latency_ms, ocr.confidence, len(ocr.text), languages)
        return ExtractionResult(
            text=ocr.text,
            method=ExtractionMethod.OCR,
            confidence=ocr.confidence,
            latency_ms=latency_ms,
        )
