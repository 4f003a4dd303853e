"""Chat client for an Ollama server."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

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

logger = logging.getLogger(__name__)


def _mask(key: str) -> str:
    return f"{key[:4]}..." if len(key) > 4 else "***"


class OllamaProvider(LanguageModel):
    """Talks to an Ollama server's chat endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        default_model: Optional[str] = None,
    ) -> None:
        self.base_url = base_url if base_url is not None else "http://localhost:11434"
        self.api_key = api_key
        self.default_model = default_model if default_model is not None else "llama2"

    async def chat(self, messages: Sequence[AgentMessage]) -> ModelReply:
        url = f"{self.base_url}/api/chat"
        shown_key = _mask(self.api_key) if self.api_key is not None else "None"
        logger.info("Ollama Chat: URL=%s, Key=%s, Model=%s", url, shown_key, self.default_model)

        body = {
            "model": self.default_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "stream": False,
        }
        headers = {}
        if self.api_key is not None:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise ModelError(f"Request failed: {exc}") from exc

        if not response.is_success:
            raise ModelError(f"Ollama API error: {response.text or 'Unknown error'}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelError(f"Failed to parse response: {exc}") from exc

        message = data.get("message") if isinstance(data, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not isinstance(data.get("done"), bool):
            raise ModelError("Failed to parse response: missing message content or done flag")

        return ModelReply(
            content=content,
            model=self.default_model,
            usage=TokenUsage(),
            tool_calls=None,
            finish_reason="stop",
        )

    async def chat_with_tools(
        self, messages: Sequence[AgentMessage], tools: Sequence[ToolDefinition]
    ) -> ModelReply:
        """Tools are ignored; this is a plain chat."""
        return await self.chat(messages)

    def model_info(self) -> ModelInfo:
        return ModelInfo(
            provider="ollama",
            model=self.default_model,
            max_tokens=4096,
            supports_tools=False,
            supports_streaming=False,
        )