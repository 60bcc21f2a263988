"""Typed failures raised by the document pipeline.

Each stage raises one family: extraction, interpretation (completion calls)
or rendering. Every error carries a stable ``error_code`` taken from its kind
and, once it has passed through the orchestrator, the ``stage`` that failed.
The API layer maps them to HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Stage(str, Enum):
    EXTRACT = "extract"
    INTERPRET = "interpret"
    COMPOSE = "compose"
    RENDER = "render"


@dataclass(eq=False)
class PipelineError(Exception):
    """Base class for pipeline domain errors."""

    message: str
    error_code: str
    stage: str | None = None

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class ExtractionErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    TRANSCRIPTION_FAILED = "transcription_failed"
    RECOGNITION_FAILED = "recognition_failed"
    INSUFFICIENT_TEXT = "insufficient_text"


class InterpretationErrorKind(str, Enum):
    MALFORMED_METADATA = "malformed_metadata"
    UPSTREAM_FAILURE = "upstream_failure"


class RenderErrorKind(str, Enum):
    IO_FAILURE = "io_failure"
    FONT_UNAVAILABLE = "font_unavailable"


_EXTRACTION_MESSAGES = {
    ExtractionErrorKind.UNSUPPORTED_FORMAT: "Unsupported file format",
    ExtractionErrorKind.TRANSCRIPTION_FAILED: "Transcription failed",
    ExtractionErrorKind.RECOGNITION_FAILED: "Text recognition failed",
    ExtractionErrorKind.INSUFFICIENT_TEXT: (
        "Could not extract sufficient text from the document. Please upload a clearer copy."
    ),
}

_INTERPRETATION_MESSAGES = {
    InterpretationErrorKind.MALFORMED_METADATA: "Completion returned malformed metadata",
    InterpretationErrorKind.UPSTREAM_FAILURE: "Text completion service failed",
}


class ExtractionError(PipelineError):
    def __init__(self, kind: ExtractionErrorKind, message: str | None = None) -> None:
        super().__init__(message=message or _EXTRACTION_MESSAGES[kind], error_code=kind.value)
        self.kind = kind


class InterpretationError(PipelineError):
    def __init__(self, kind: InterpretationErrorKind, message: str | None = None) -> None:
        super().__init__(message=message or _INTERPRETATION_MESSAGES[kind], error_code=kind.value)
        self.kind = kind


class RenderError(PipelineError):
    def __init__(
        self,
        message: str = "Failed to write rendered document",
        kind: RenderErrorKind = RenderErrorKind.IO_FAILURE,
    ) -> None:
        super().__init__(message=message, error_code=kind.value)
        self.kind = kind
