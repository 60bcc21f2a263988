from abc import ABC, abstractmethod

from nyaymitra.core.models import Completion

class LLM(ABC):
    @abstractmethod
    async def complete(
        self, system: str, user: str, *, temperature: float, max_tokens: int | None = None
    ) -> Completion:
        ...

    # Structured variant: the backend is asked to answer with a single JSON object.
    # Callers still parse and validate the text themselves.
    @abstractmethod
    async def complete_json(
        self, system: str, user: str, *, temperature: float, max_tokens: int | None = None
    ) -> Completion:
        ...
