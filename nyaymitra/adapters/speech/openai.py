from nyaymitra.core.config import settings
from nyaymitra.core.models import Transcription
from nyaymitra.adapters.speech.base import SpeechToText


def _segment_dict(seg) -> dict:
    if isinstance(seg, dict):
        return seg
    if hasattr(seg, "model_dump"):
        return seg.model_dump()
    return {"start": getattr(seg, "start", None), "end": getattr(seg, "end", None), "text": getattr(seg, "text", "")}


class WhisperSpeechToText(SpeechToText):
    def __init__(self, model: str | None = None):
        self.model = model or settings.OPENAI_TRANSCRIBE_MODEL

    async def transcribe(self, audio, *, filename, language, prompt=None) -> Transcription:
        from openai import AsyncOpenAI
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        kwargs = {}
        if prompt:
            kwargs["prompt"] = prompt
        resp = await client.audio.transcriptions.create(
            model=self.model,
            file=(filename, audio),
            language=language,
            response_format="verbose_json",
            **kwargs,
        )
        return Transcription(
            text=resp.text or "",
            language=getattr(resp, "language", None),
            duration_seconds=getattr(resp, "duration", None),
            segments=[_segment_dict(s) for s in (getattr(resp, "segments", None) or [])],
        )
