from abc import ABC, abstractmethod

from nyaymitra.core.models import Transcription

class SpeechToText(ABC):
    @abstractmethod
    async def transcribe(
        self, audio: bytes, *, filename: str, language: str, prompt: str | None = None
    ) -> Transcription:
        ...
