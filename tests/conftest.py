"""Shared fixtures: in-process fakes for every external capability."""

import asyncio

import pytest

from nyaymitra.adapters.llm.base import LLM
from nyaymitra.adapters.ocr.base import OpticalRecognizer
from nyaymitra.adapters.speech.base import SpeechToText
from nyaymitra.core.models import Completion, OcrResult, Transcription
from nyaymitra.services.draft_service import DraftComposer
from nyaymitra.services.extract_service import TextExtractor
from nyaymitra.services.interpret_service import StructuredInterpreter
from nyaymitra.services.pipeline_service import PipelineOrchestrator
from nyaymitra.services.render_service import DocumentRenderer


SAMPLE_EXPLANATION = """## 1. WHAT THIS DOCUMENT IS ABOUT
This is an order passed by the Civil Judge, Senior Division, Lucknow in Civil Suit No. 123/2024 between Ram Prasad (Plaintiff) and Shyam Lal (Defendant) regarding a property dispute.

## 2. IMPORTANT POINTS
1. The plaintiff claims ownership over property bearing Khasra No. 456 in Village Aminabad
2. The defendant has allegedly encroached upon 500 sq. ft. of the plaintiff's land
3. Revenue records support the plaintiff's claim of ownership since 1985

## 3. DIRECTIONS / ORDERS
1. The defendant is directed to remove the encroachment within 30 days
2. The defendant shall pay compensation of Rs. 50,000 to the plaintiff
3. Status quo to be maintained regarding the remaining property

## 4. DEADLINES AND DATES
- 15 January 2025: Deadline for removal of encroachment
- 28 February 2025: Next date of hearing for compliance verification
- 15 March 2025: Final date for payment of compensation

## 5. NEXT PROCEDURAL STEPS
1. File an execution petition if the defendant fails to comply by 15 January 2025
2. Prepare an affidavit of compliance if encroachment is removed
3. Appear on 28 February 2025 with photographic evidence of current state
4. If compensation is not paid, file application under Order XXI CPC

## 6. DISCLAIMER
This explanation is AI-generated and is meant to assist in understanding the document. It does not constitute legal advice. Always consult a qualified advocate before taking any legal action."""


class FakeLLM(LLM):
    """Scripted completion backend.

    ``text`` / ``json_text`` may be strings or callables taking
    ``(system, user)``; ``error`` is raised instead of answering; ``delay``
    makes the call slow enough to trip a timeout.
    """

    def __init__(self, text="", json_text="{}", tokens=42, error=None, delay=0.0):
        self.text = text
        self.json_text = json_text
        self.tokens = tokens
        self.error = error
        self.delay = delay
        self.calls = []

    async def _answer(self, kind, reply, system, user, temperature, max_tokens):
        self.calls.append({
            "kind": kind,
            "system": system,
            "user": user,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        text = reply(system, user) if callable(reply) else reply
        return Completion(text=text, tokens_used=self.tokens)

    async def complete(self, system, user, *, temperature, max_tokens=None):
        return await self._answer("text", self.text, system, user, temperature, max_tokens)

    async def complete_json(self, system, user, *, temperature, max_tokens=None):
        return await self._answer("json", self.json_text, system, user, temperature, max_tokens)


class FakeSpeech(SpeechToText):
    def __init__(self, text="", language="hindi", duration=12.5, error=None, delay=0.0):
        self.text = text
        self.language = language
        self.duration = duration
        self.error = error
        self.delay = delay
        self.calls = []

    async def transcribe(self, audio, *, filename, language, prompt=None):
        self.calls.append({"audio": audio, "filename": filename, "language": language, "prompt": prompt})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return Transcription(
            text=self.text,
            language=self.language,
            duration_seconds=self.duration,
            segments=[{"start": 0.0, "end": self.duration, "text": self.text}],
        )


class FakeOcr(OpticalRecognizer):
    def __init__(self, text="", confidence=87.5, error=None, delay=0.0):
        self.text = text
        self.confidence = confidence
        self.error = error
        self.delay = delay
        self.calls = []

    async def recognize(self, data, *, media_kind, languages):
        self.calls.append({"data": data, "media_kind": media_kind, "languages": languages})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return OcrResult(text=self.text, confidence=self.confidence)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_speech():
    return FakeSpeech()


@pytest.fixture
def fake_ocr():
    return FakeOcr()


@pytest.fixture
def make_pipeline():
    def _make(llm=None, speech=None, ocr=None, text_layer=None):
        kwargs = {}
        if text_layer is not None:
            kwargs["text_layer_reader"] = lambda data: text_layer
        llm = llm or FakeLLM()
        return PipelineOrchestrator(
            extractor=TextExtractor(speech or FakeSpeech(), ocr or FakeOcr(), **kwargs),
            interpreter=StructuredInterpreter(llm),
            composer=DraftComposer(llm),
            renderer=DocumentRenderer(),
        )
    return _make
