from __future__ import annotations

from typing import Protocol

from google import genai

from app.ai.errors import ModelCallError


class TextModelClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


class GeminiTextModelClient:
    def __init__(self, *, api_key: str, model: str) -> None:
        self._api_key = api_key
        self._model = model
        self._client: genai.Client | None = None

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            raise ModelCallError("GEMINI_API_KEY is not configured")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        client = self._get_client()
        response = await client.aio.models.generate_content(model=self._model, contents=prompt)
        text = response.text
        if not text:
            raise ModelCallError("model returned an empty response")
        return text
