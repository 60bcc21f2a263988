"""Structured interpretation of legal text through the completion service.

Two modes share one primitive: metadata extraction returns a validated
``StructuredMetadata`` record; explanation returns the generated text plus its
six parsed sections.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from nyaymitra.adapters.llm.base import LLM
from nyaymitra.core.config import settings
from nyaymitra.core.errors import InterpretationError, InterpretationErrorKind
from nyaymitra.core.models import Explanation, MetadataResult, StructuredMetadata
from nyaymitra.legal.prompts import METADATA_PROMPT, explanation_prompt, explanation_user_prompt
from nyaymitra.legal.sections import parse_sections
from nyaymitra.services.completion_service import timed_completion

logger = logging.getLogger(__name__)


def parse_metadata(payload: str) -> StructuredMetadata:
    """Parse the JSON record returned by the completion service.

    Anything that is not a single JSON object matching the schema is rejected
    as a whole rather than partially accepted.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise InterpretationError(
            InterpretationErrorKind.MALFORMED_METADATA, f"Metadata is not valid JSON: {e}"
        ) from e
    if not isinstance(data, dict):
        raise InterpretationError(
            InterpretationErrorKind.MALFORMED_METADATA,
            f"Metadata must be a JSON object, got {type(data).__name__}",
        )
    try:
        return StructuredMetadata.model_validate(data)
    except ValidationError as e:
        raise InterpretationError(
            InterpretationErrorKind.MALFORMED_METADATA, f"Metadata does not match schema: {e}"
        ) from e


class StructuredInterpreter:
    def __init__(self, llm: LLM, *, metadata_timeout_s: float | None = None, explain_timeout_s: float | None = None):
        self.llm = llm
        self.metadata_timeout_s = metadata_timeout_s or settings.METADATA_TIMEOUT_S
        self.explain_timeout_s = explain_timeout_s or settings.EXPLAIN_TIMEOUT_S

    async def extract_metadata(self, transcript: str) -> MetadataResult:
        completion, latency_ms = await timed_completion(
            self.llm.complete_json(
                METADATA_PROMPT,
                transcript,
                temperature=settings.METADATA_TEMPERATURE,
                max_tokens=settings.METADATA_MAX_TOKENS,
            ),
            timeout_s=self.metadata_timeout_s,
            purpose="Metadata extraction",
        )
        metadata = parse_metadata(completion.text)
        logger.info("Metadata extracted document_type=%s",
                    metadata.document_type.value if metadata.document_type else None)
        return MetadataResult(metadata=metadata, tokens_used=completion.tokens_used, latency_ms=latency_ms)

    async def explain(self, text: str, output_language: str = "english") -> Explanation:
        logger.info("Starting document explanation chars=%d language=%s", len(text), output_language)
        completion, latency_ms = await timed_completion(
            self.llm.complete(
                explanation_prompt(output_language),
                explanation_user_prompt(text),
                temperature=settings.EXPLAIN_TEMPERATURE,
                max_tokens=settings.EXPLAIN_MAX_TOKENS,
            ),
            timeout_s=self.explain_timeout_s,
            purpose="Explanation",
        )
        return Explanation(
            full_text=completion.text,
            sections=parse_sections(completion.text),
            tokens_used=completion.tokens_used,
            latency_ms=latency_ms,
        )
