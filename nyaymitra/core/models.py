from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaKind(str, Enum):
    AUDIO = "audio"
    IMAGE = "image"
    PDF = "pdf"
    TEXT = "text"


class ExtractionMethod(str, Enum):
    TEXT_LAYER = "text_layer"
    OCR = "ocr"
    SPEECH_TO_TEXT = "speech_to_text"


class DocumentType(str, Enum):
    POLICE_COMPLAINT = "police_complaint"
    COURT_PETITION = "court_petition"
    AFFIDAVIT = "affidavit"
    ADJOURNMENT_APPLICATION = "adjournment_application"
    GOVERNMENT_REQUEST = "government_request"
    BAIL_APPLICATION = "bail_application"
    WRITTEN_STATEMENT = "written_statement"
    OTHER = "other"


class ExportFormat(str, Enum):
    DOCX = "docx"
    PDF = "pdf"


class SourceArtifact(BaseModel):
    data: bytes
    media_kind: MediaKind
    # dictation / document language tag, e.g. "hi", "en"
    language: str = "hi"
    filename: str | None = None


class ExtractionResult(BaseModel):
    text: str
    method: ExtractionMethod
    confidence: float | None = None
    page_count: int | None = None
    duration_seconds: float | None = None
    language: str | None = None
    segments: list[dict[str, Any]] = Field(default_factory=list)
    latency_ms: int = 0


# Capability return records

class Completion(BaseModel):
    text: str
    tokens_used: int = 0


class Transcription(BaseModel):
    text: str
    language: str | None = None
    duration_seconds: float | None = None
    segments: list[dict[str, Any]] = Field(default_factory=list)


class OcrResult(BaseModel):
    text: str
    confidence: float = 0.0


class StructuredMetadata(BaseModel):
    """Legal-fact fields pulled out of free-form dictation.

    Every field is optional; the completion service is told to answer null for
    anything it cannot find, so absence is never an error here.
    """

    model_config = ConfigDict(extra="ignore")

    document_type: DocumentType | None = None
    applicant_name: str | None = None
    applicant_father_name: str | None = None
    applicant_address: str | None = None
    respondent_name: str | None = None
    authority: str | None = None
    subject: str | None = None
    key_facts: list[str] | None = None
    sections_cited: list[str] | None = None
    dates_mentioned: list[str] | None = None
    relief_sought: str | None = None
    district: str | None = None
    state: str | None = None

    @field_validator("key_facts", "sections_cited", "dates_mentioned", mode="before")
    @classmethod
    def _flatten_entries(cls, v: Any) -> Any:
        # Models often answer {"date": ..., "context": ...} for dates; keep it as one line of text.
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            out = []
            for item in v:
                if isinstance(item, dict):
                    out.append(" - ".join(str(x) for x in item.values() if x is not None))
                else:
                    out.append(item)
            return out
        return v


class MetadataResult(BaseModel):
    metadata: StructuredMetadata
    tokens_used: int = 0
    latency_ms: int = 0


class ExplanationSections(BaseModel):
    about: str = ""
    important_points: str = ""
    directions: str = ""
    deadlines: str = ""
    next_steps: str = ""
    disclaimer: str = ""


class Explanation(BaseModel):
    full_text: str
    sections: ExplanationSections
    tokens_used: int = 0
    latency_ms: int = 0


class Draft(BaseModel):
    text: str
    document_type: str | None = None
    tokens_used: int = 0
    latency_ms: int = 0


# Paragraph model: format-independent layout of draft / explanation text

class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["heading"] = "heading"
    text: str


class NumberedItem(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["numbered"] = "numbered"
    index: int
    text: str


class Body(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["body"] = "body"
    text: str


class Spacer(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["spacer"] = "spacer"


Node = Heading | NumberedItem | Body | Spacer


class RenderOptions(BaseModel):
    title: str | None = None
    document_type: str | None = None
    language: str = "english"


class RenderedArtifact(BaseModel):
    content: bytes
    format: ExportFormat
    filename: str
    size: int
    path: str | None = None

    @property
    def media_type(self) -> str:
        if self.format == ExportFormat.PDF:
            return "application/pdf"
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# Pipeline outcomes

class StageMetrics(BaseModel):
    stage: str
    tokens_used: int = 0
    latency_ms: int = 0


class _Outcome(BaseModel):
    metrics: list[StageMetrics] = Field(default_factory=list)

    @property
    def total_tokens(self) -> int:
        return sum(m.tokens_used for m in self.metrics)

    @property
    def total_latency_ms(self) -> int:
        return sum(m.latency_ms for m in self.metrics)


class TranscribeOutcome(_Outcome):
    extraction: ExtractionResult
    metadata: StructuredMetadata


class UnderstandOutcome(_Outcome):
    extraction: ExtractionResult | None = None
    explanation: Explanation


class DraftOutcome(_Outcome):
    draft: Draft
    metadata: StructuredMetadata | None = None
