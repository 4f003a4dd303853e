"""Chat client for the Gemini generateContent API."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from promptline.language_model import (
    AgentMessage,
    LanguageModel,
    ModelError,
    ModelInfo,
    ModelReply,
    TokenUsage,
    ToolDefinition,
)

API_BASE = "https://generativelanguage.googleapis.com/v1/models"


def _dig(value: Any, *path: Any) -> Any:
    for key in path:
        if isinstance(key, int):
            if isinstance(value, list) and 0 <= key < len(value):
                value = value[key]
            else:
                return None
        elif isinstance(value, dict):
            value = value.get(key)
        else:
            return None
    return value


def _count(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return 0


class GeminiProvider(LanguageModel):
    """Talks to the Gemini generateContent endpoint."""

    def __init__(self, api_key: str, model: Optional[str] = None) -> None:
        self.api_key = api_key
        self.model = model if model is not None else "gemini-pro"
        self.temperature = 0.2
        self.max_tokens = 4096

    def with_params(self, temperature: float, max_tokens: int) -> "GeminiProvider":
        self.temperature = temperature
        self.max_tokens = max_tokens
        return self

    def convert_messages(self, messages: Sequence[AgentMessage]) -> list[dict[str, Any]]:
        """Map messages to Gemini contents; system messages become user turns."""
        return [
            {
                "role": "model" if msg.role == "assistant" else "user",
                "parts": [{"text": msg.content}],
            }
            for msg in messages
        ]

    async def chat(self, messages: Sequence[AgentMessage]) -> ModelReply:
        url = f"{API_BASE}/{self.model}:generateContent"
        body = {
            "contents": self.convert_messages(messages),
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.post(url, params={"key": self.api_key}, json=body)
        except httpx.HTTPError as exc:
            raise ModelError(f"Request failed: {exc}") from exc

        if not response.is_success:
            raise ModelError(f"API error: {response.text or 'Unknown error'}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelError(f"Failed to parse response: {exc}") from exc

        text = _dig(data, "candidates", 0, "content", "parts", 0, "text")
        content = text if isinstance(text, str) else ""

        if isinstance(data, dict) and "usageMetadata" in data:
            meta = data["usageMetadata"]
            usage = TokenUsage(
                prompt_tokens=_count(_dig(meta, "promptTokenCount")),
                completion_tokens=_count(_dig(meta, "candidatesTokenCount")),
                total_tokens=_count(_dig(meta, "totalTokenCount")),
            )
        else:
            usage = TokenUsage()

        finish = _dig(data, "candidates", 0, "finishReason")
        return ModelReply(
            content=content,
            model=self.model,
            usage=usage,
            tool_calls=None,
            finish_reason=finish if isinstance(finish, str) else None,
        )

    async def chat_with_tools(
        self, messages: Sequence[AgentMessage], tools: Sequence[ToolDefinition]
    ) -> ModelReply:
        """Tools are not sent yet; this is a plain chat."""
        return await self.chat(messages)

    def model_info(self) -> ModelInfo:
        return ModelInfo(
            provider="gemini",
            model=self.model,
            max_tokens=self.max_tokens,
            supports_tools=True,
            supports_streaming=False,
        )

    def supports_tools(self) -> bool:
        return True

    def supports_streaming(self) -> bool:
        return False