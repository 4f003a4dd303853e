"""Tool interface, results, execution context and the registry of tools."""

from __future__ import annotations

import abc
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Optional


class ToolError(Exception):
    """Base class for errors raised while running a tool."""


class ToolNotFoundError(ToolError):
    """Raised when no tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool not found: {name}")
        self.name = name


class InvalidArgsError(ToolError):
    """Raised when a tool receives missing or malformed arguments."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid arguments: {detail}")
        self.detail = detail


class ExecutionFailedError(ToolError):
    """Raised when a tool cannot complete its work."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Tool execution failed: {detail}")
        self.detail = detail


class ToolTimeoutError(ToolError):
    """Raised when a tool runs longer than it is allowed to."""

    def __init__(self) -> None:
        super().__init__("Tool execution timed out")


@dataclass
class ToolResult:
    """Outcome of a tool run."""

    success: bool
    output: str = ""
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, output: str) -> "ToolResult":
        return cls(success=True, output=output)

    @classmethod
    def failure(cls, error: str) -> "ToolResult":
        return cls(success=False, output="", error=error)

    def with_metadata(self, key: str, value: Any) -> "ToolResult":
        """Return a copy of this result carrying one more metadata entry."""
        return dataclasses.replace(self, metadata={**self.metadata, key: value})


@dataclass
class ToolContext:
    """Environment a tool runs in."""

    working_dir: Path = field(default_factory=Path.cwd)
    env_vars: dict[str, str] = field(default_factory=dict)
    current_working_dir: Path = field(default_factory=Path.cwd)
    git_branch: Optional[str] = None


class Tool(abc.ABC):
    """An action the agent can take, described by a JSON schema of its arguments."""

    name: ClassVar[str]
    description: ClassVar[str]
    parameters: ClassVar[dict[str, Any]]
    read_only: ClassVar[bool] = False

    @abc.abstractmethod
    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        """Run the tool with the given arguments."""

    def validate_args(self, args: Any) -> None:
        """Raise InvalidArgsError if a field the schema requires is absent."""
        for field_name in self.parameters.get("required", []):
            if not isinstance(field_name, str):
                continue
            if not isinstance(args, dict) or field_name not in args:
                raise InvalidArgsError(f"Missing required field: {field_name}")

    def to_definition(self) -> dict[str, Any]:
        """Describe the tool for a model."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


class ToolRegistry:
    """Tools available to the agent, by name."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    async def execute(self, name: str, args: Any, ctx: ToolContext) -> ToolResult:
        """Validate the arguments and run the named tool."""
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        tool.validate_args(args)
        return await tool.execute(args, ctx)

    def list(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[dict[str, Any]]:
        return [tool.to_definition() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)