"""OpenAI chat completions provider."""

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

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _count(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return 0


def _finish_name(reason: str) -> str:
    return "".join(part.capitalize() for part in reason.split("_"))


class OpenAIProvider(LanguageModel):
    """Talks to the OpenAI chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.api_key = api_key
        self.model = model if model is not None else "gpt-4"
        self.base_url = base_url.rstrip("/")
        self.temperature = 0.2
        self.max_tokens = 4096

    def with_params(self, temperature: float, max_tokens: int) -> "OpenAIProvider":
        self.temperature = temperature
        self.max_tokens = max_tokens
        return self

    def convert_message(self, msg: AgentMessage) -> dict[str, str]:
        """Map a message to the wire form; unknown roles are sent as user."""
        role = msg.role if msg.role in ("system", "user", "assistant") else "user"
        return {"role": role, "content": msg.content}

    async def chat(self, messages: Sequence[AgentMessage]) -> ModelReply:
        body = {
            "model": self.model,
            "messages": [self.convert_message(m) for m in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions", json=body, headers=headers
                )
        except httpx.HTTPError as exc:
            raise ModelError(f"API request failed: {exc}") from exc

        if not response.is_success:
            raise ModelError(f"API request failed: {response.text}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelError(f"API request failed: {exc}") from exc
        if not isinstance(data, dict):
            raise ModelError("API request failed: unexpected response body")

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ModelError("No choices in response")
        choice = choices[0] if isinstance(choices[0], dict) else {}

        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None

        raw_usage = data.get("usage")
        if isinstance(raw_usage, dict):
            usage = TokenUsage(
                prompt_tokens=_count(raw_usage.get("prompt_tokens")),
                completion_tokens=_count(raw_usage.get("completion_tokens")),
                total_tokens=_count(raw_usage.get("total_tokens")),
            )
        else:
            usage = TokenUsage()

        finish = choice.get("finish_reason")
        model = data.get("model")
        return ModelReply(
            content=content if isinstance(content, str) else "",
            model=model if isinstance(model, str) else self.model,
            usage=usage,
            tool_calls=None,
            finish_reason=_finish_name(finish) if isinstance(finish, str) else None,
        )

    async def chat_with_tools(
        self, messages: Sequence[AgentMessage], tools: Sequence[ToolDefinition]
    ) -> ModelReply:
        """Tools are not sent yet; this is a plain chat."""
        return await self.chat(messages)

    def model_info(self) -> ModelInfo:
        return ModelInfo(
            provider="openai",
            model=self.model,
            max_tokens=self.max_tokens,
            supports_tools=True,
            supports_streaming=True,
        )

    def supports_tools(self) -> bool:
        return self.model.startswith("gpt-4") or self.model.startswith("gpt-3.5")

    def supports_streaming(self) -> bool:
        return True