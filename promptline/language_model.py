"""Messages, replies and the abstract interface shared by chat backends."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence


class ModelError(Exception):
    """Raised when a model request fails or its reply cannot be used."""


@dataclass
class AgentMessage:
    """One message in a conversation."""

    role: str
    content: str

    @classmethod
    def system(cls, content: str) -> "AgentMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "AgentMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "AgentMessage":
        return cls(role="assistant", content=content)


@dataclass
class TokenUsage:
    """Token counts reported by a backend."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    name: str
    arguments: Any


@dataclass
class ModelReply:
    """A model's answer to a request."""

    content: str
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    tool_calls: Optional[list[ToolCall]] = None
    finish_reason: Optional[str] = None


@dataclass
class ToolDefinition:
    """A tool offered to the model for function calling."""

    name: str
    description: str
    parameters: Any


@dataclass
class ModelInfo:
    """Static description of a configured model."""

    provider: str
    model: str
    max_tokens: int
    supports_tools: bool
    supports_streaming: bool


class LanguageModel(abc.ABC):
    """Base class for chat backends."""

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> ModelReply:
        """Answer a single prompt, optionally preceded by a system prompt."""
        messages = []
        if system_prompt is not None:
            messages.append(AgentMessage.system(system_prompt))
        messages.append(AgentMessage.user(prompt))
        return await self.chat(messages)

    @abc.abstractmethod
    async def chat(self, messages: Sequence[AgentMessage]) -> ModelReply:
        """Generate a reply to a conversation."""

    async def chat_with_tools(
        self, messages: Sequence[AgentMessage], tools: Sequence[ToolDefinition]
    ) -> ModelReply:
        """Generate a reply with tools available; plain chat unless overridden."""
        return await self.chat(messages)

    @abc.abstractmethod
    def model_info(self) -> ModelInfo:
        """Describe the configured model."""

    def estimate_tokens(self, text: str) -> int:
        """Rough token estimate: about four bytes per token."""
        return (len(text.encode("utf-8")) + 3) // 4

    def supports_tools(self) -> bool:
        return False

    def supports_streaming(self) -> bool:
        return False