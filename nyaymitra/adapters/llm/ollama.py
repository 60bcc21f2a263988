import httpx

from nyaymitra.core.config import settings
from nyaymitra.core.models import Completion
from nyaymitra.adapters.llm.base import LLM

class OllamaLLM(LLM):
    def __init__(self, model: str | None = None, base_url: str | None = None):
        self.model = model or settings.OLLAMA_MODEL
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")

    async def _chat(self, system: str, user: str, options: dict, fmt: str | None = None) -> Completion:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "stream": False,
            "keep_alive": settings.OLLAMA_KEEP_ALIVE,
            "options": options,
        }
        if fmt:
            payload["format"] = fmt
        # Stage timeouts are enforced by the calling service.
        async with httpx.AsyncClient(timeout=None) as client:
            r = await client.post(f"{self.base_url}/api/chat", json=payload)
            r.raise_for_status()
            data = r.json()
        text = (data.get("message") or {}).get("content", "")
        tokens = int(data.get("prompt_eval_count") or 0) + int(data.get("eval_count") or 0)
        return Completion(text=text, tokens_used=tokens)

    @staticmethod
    def _options(temperature: float, max_tokens: int | None) -> dict:
        options = {"temperature": temperature}
        if max_tokens:
            options["num_predict"] = max_tokens
        return options

    async def complete(self, system, user, *, temperature, max_tokens=None) -> Completion:
        return await self._chat(system, user, self._options(temperature, max_tokens))

    async def complete_json(self, system, user, *, temperature, max_tokens=None) -> Completion:
        return await self._chat(system, user, self._options(temperature, max_tokens), fmt="json")
