"""Tools that read, write and list files."""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Any, Callable, Optional

from promptline.diff import display_diff
from promptline.tools.base import (
    ExecutionFailedError,
    InvalidArgsError,
    Tool,
    ToolContext,
    ToolResult,
)

MAX_READ_BYTES = 1_000_000


def _resolve(path_str: str, ctx: ToolContext) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else ctx.working_dir / path


def _string_arg(args: Any, key: str) -> Optional[str]:
    if isinstance(args, dict) and isinstance(args.get(key), str):
        return args[key]
    return None


def _ask_yes_no(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


class FileReadTool(Tool):
    name = "file_read"
    description = (
        "Read the contents of a file. Use this to examine source code, "
        "configuration files, or any text file."
    )
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Path to the file to read"},
        },
        "required": ["path"],
    }
    read_only = True

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        path_str = _string_arg(args, "path")
        if path_str is None:
            raise InvalidArgsError("Missing path")
        path = _resolve(path_str, ctx)

        if not path.exists():
            return ToolResult.failure(f"File not found: {path}")

        size = path.stat().st_size
        if size > MAX_READ_BYTES:
            return ToolResult.failure(f"File too large: {size} bytes (max 1MB)")

        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExecutionFailedError(f"Failed to read file: {exc}") from exc

        return (
            ToolResult.ok(content)
            .with_metadata("path", str(path))
            .with_metadata("size", size)
        )


class FileWriteTool(Tool):
    name = "file_write"
    description = (
        "Write content to a file. Creates the file if it doesn't exist, or "
        "overwrites if it does. Parent directories must exist."
    )
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Path to the file to write"},
            "content": {"type": "string", "description": "Content to write to the file"},
        },
        "required": ["path", "content"],
    }

    def __init__(
        self,
        require_diff_preview: bool = True,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.require_diff_preview = require_diff_preview
        self._confirm = confirm if confirm is not None else _ask_yes_no

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        path_str = _string_arg(args, "path")
        if path_str is None:
            raise InvalidArgsError("Missing path")
        content = _string_arg(args, "content")
        if content is None:
            raise InvalidArgsError("Missing content")
        path = _resolve(path_str, ctx)

        parent = path.parent
        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ExecutionFailedError(
                    f"Failed to create parent directory {parent}: {exc}"
                ) from exc

        if path.exists():
            try:
                original = path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError):
                original = ""
            display_diff(path_str, original, content)
            if self.require_diff_preview and not self._confirm("Apply these changes?"):
                return ToolResult.failure("User denied file write.")

        data = content.encode("utf-8")
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise ExecutionFailedError(f"Failed to write file: {exc}") from exc

        return (
            ToolResult.ok(f"Successfully wrote {len(data)} bytes to {path}")
            .with_metadata("path", str(path))
            .with_metadata("bytes_written", len(data))
        )


def _entry_kind(mode: int) -> str:
    if stat.S_ISDIR(mode):
        return "dir"
    if stat.S_ISLNK(mode):
        return "link"
    return "file"


class FileListTool(Tool):
    name = "file_list"
    description = "List files in a directory. Useful for exploring the project structure."
    parameters = {
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Path to the directory to list (defaults to current directory)",
            },
        },
    }
    read_only = True

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        path_str = _string_arg(args, "path") or "."
        path = _resolve(path_str, ctx)

        if not path.exists():
            return ToolResult.failure(f"Directory not found: {path}")

        try:
            entries = sorted(path.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise ExecutionFailedError(f"Failed to read directory {path}: {exc}") from exc

        lines = []
        for entry in entries:
            info = entry.lstat()
            lines.append(f"{_entry_kind(info.st_mode):<10} {info.st_size:<10} {entry.name}")

        if lines:
            output = f"Found {len(lines)} items:\n" + "\n".join(lines)
        else:
            output = "Directory is empty"
        return ToolResult.ok(output).with_metadata("path", str(path))