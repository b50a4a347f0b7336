from __future__ import annotations

from typing import Optional, Sequence

from openai import AsyncOpenAI

from ats_analyzer.ai.types import AIClientNotConfigured, ChatCompletion, ChatMessage


class OpenAIProvider:
    """Chat completions against any OpenAI-compatible endpoint (DeepSeek included)."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 45.0,
    ):
        self._model = model
        self._api_key = (api_key or "").strip()
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise AIClientNotConfigured("DEEPSEEK_API_KEY is missing")
        if self._client is None:
            # No automatic retries; a failed submission is terminal.
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_s,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        client = self._get_client()
        payload = [{"role": m.role, "content": m.content} for m in messages]

        response = await client.chat.completions.create(
            model=self._model,
            messages=payload,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "text"},
        )
        content = response.choices[0].message.content if response.choices else ""
        return ChatCompletion(content=content or "", model=response.model or self._model)
