from nyaymitra.core.config import settings
from nyaymitra.core.models import Completion
from nyaymitra.adapters.llm.base import LLM

class OpenAILLM(LLM):
    def __init__(self, model: str | None = None):
        self.model = model or settings.OPENAI_MODEL

    async def _create(self, system: str, user: str, **kwargs) -> Completion:
        from openai import AsyncOpenAI
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        resp = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            **kwargs,
        )
        tokens = resp.usage.total_tokens if resp.usage else 0
        return Completion(text=resp.choices[0].message.content or "", tokens_used=tokens)

    async def complete(self, system, user, *, temperature, max_tokens=None) -> Completion:
        kwargs = {"temperature": temperature}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        return await self._create(system, user, **kwargs)

    async def complete_json(self, system, user, *, temperature, max_tokens=None) -> Completion:
        kwargs = {"temperature": temperature, "response_format": {"type": "json_object"}}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        return await self._create(system, user, **kwargs)
