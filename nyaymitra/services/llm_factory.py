from functools import lru_cache

from nyaymitra.core.config import settings
from nyaymitra.adapters.llm.ollama import OllamaLLM
from nyaymitra.adapters.llm.openai import OpenAILLM
from nyaymitra.adapters.ocr.tesseract import TesseractRecognizer
from nyaymitra.adapters.speech.openai import WhisperSpeechToText
from nyaymitra.services.draft_service import DraftComposer
from nyaymitra.services.extract_service import TextExtractor
from nyaymitra.services.interpret_service import StructuredInterpreter
from nyaymitra.services.pipeline_service import PipelineOrchestrator
from nyaymitra.services.render_service import DocumentRenderer

def get_llm():
    if settings.LLM_PROVIDER == "ollama":
        return OllamaLLM()
    return OpenAILLM()

def get_speech():
    return WhisperSpeechToText()

def get_ocr():
    return TesseractRecognizer()

@lru_cache
def get_pipeline() -> PipelineOrchestrator:
    # Services hold no per-request state, so one instance serves every request.
    llm = get_llm()
    return PipelineOrchestrator(
        extractor=TextExtractor(get_speech(), get_ocr()),
        interpreter=StructuredInterpreter(llm),
        composer=DraftComposer(llm),
        renderer=DocumentRenderer(),
    )
