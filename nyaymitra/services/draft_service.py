import json
import logging

from nyaymitra.adapters.llm.base import LLM
from nyaymitra.core.config import settings
from nyaymitra.core.models import DocumentType, Draft, StructuredMetadata
from nyaymitra.legal.prompts import REFINE_PROMPT, draft_user_prompt, refine_user_prompt, template_for
from nyaymitra.services.completion_service import timed_completion

logger = logging.getLogger(__name__)


def _metadata_json(metadata: StructuredMetadata | dict | None) -> str:
    if isinstance(metadata, StructuredMetadata):
        data = metadata.model_dump(mode="json")
    else:
        data = dict(metadata or {})
    return json.dumps(data, indent=2, ensure_ascii=False)


class DraftComposer:
    def __init__(self, llm: LLM, *, timeout_s: float | None = None):
        self.llm = llm
        self.timeout_s = timeout_s or settings.DRAFT_TIMEOUT_S

    async def compose(
        self,
        transcript: str,
        metadata: StructuredMetadata | dict | None,
        document_type: DocumentType | str,
        language: str = "english",
    ) -> Draft:
        doc_type = document_type.value if isinstance(document_type, DocumentType) else document_type
        logger.info("Starting draft generation document_type=%s language=%s", doc_type, language)
        completion, latency_ms = await timed_completion(
            self.llm.complete(
                template_for(document_type),
                draft_user_prompt(transcript, _metadata_json(metadata), language),
                temperature=settings.DRAFT_TEMPERATURE,
                max_tokens=settings.DRAFT_MAX_TOKENS,
            ),
            timeout_s=self.timeout_s,
            purpose="Draft generation",
        )
        return Draft(
            text=completion.text,
            document_type=doc_type,
            tokens_used=completion.tokens_used,
            latency_ms=latency_ms,
        )

    async def refine(self, current_draft: str, instructions: str) -> Draft:
        completion, latency_ms = await timed_completion(
            self.llm.complete(
                REFINE_PROMPT,
                refine_user_prompt(current_draft, instructions),
                temperature=settings.REFINE_TEMPERATURE,
                max_tokens=settings.REFINE_MAX_TOKENS,
            ),
            timeout_s=self.timeout_s,
            purpose="Draft refinement",
        )
        return Draft(text=completion.text, tokens_used=completion.tokens_used, latency_ms=latency_ms)
