from abc import ABC, abstractmethod

from nyaymitra.core.models import MediaKind, OcrResult

class OpticalRecognizer(ABC):
    @abstractmethod
    async def recognize(self, data: bytes, *, media_kind: MediaKind, languages: str) -> OcrResult:
        ...
