"""Search file contents across the codebase with ripgrep, grep or PowerShell."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Any

from promptline.tools.base import (
    ExecutionFailedError,
    InvalidArgsError,
    Tool,
    ToolContext,
    ToolResult,
)


async def _run(cwd: Path, program: str, *args: str) -> tuple[int, str, str]:
    process = await asyncio.create_subprocess_exec(
        program,
        *args,
        cwd=str(cwd),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    return (
        process.returncode,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )


class CodebaseSearchTool(Tool):
    name = "codebase_search"
    description = (
        "Search for a regular expression pattern within the content of files in a "
        "specified directory (or current working directory). Uses `ripgrep` if "
        "available, otherwise falls back to `grep`. Returns the lines containing "
        "matches, along with their file paths and line numbers."
    )
    parameters = {
        "type": "object",
        "properties": {
            "pattern": {
                "type": "string",
                "description": "The regular expression pattern to search for",
            },
            "path": {
                "type": "string",
                "description": (
                    "Optional: The path to the directory to search within. "
                    "Defaults to current working directory."
                ),
            },
        },
        "required": ["pattern"],
    }
    read_only = True

    async def _search_with_powershell(
        self, pattern: str, path: Path, ctx: ToolContext
    ) -> ToolResult:
        escaped = pattern.replace("'", "''")
        command = (
            f"Get-ChildItem -Path '{path}' -Recurse -File | "
            f"Select-String -Pattern '{escaped}' | "
            'ForEach-Object { "$($_.Path):$($_.LineNumber):$($_.Line)" }'
        )
        code, stdout, stderr = await _run(
            ctx.working_dir, "powershell", "-NoProfile", "-Command", command
        )
        if code != 0:
            raise ExecutionFailedError(f"PowerShell search failed: {stderr}")
        return ToolResult.ok(stdout)

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        pattern = args.get("pattern") if isinstance(args, dict) else None
        if not isinstance(pattern, str):
            raise InvalidArgsError("Missing search pattern")

        path_arg = args.get("path")
        path = Path(path_arg) if isinstance(path_arg, str) else ctx.working_dir

        if shutil.which("rg"):
            program = "rg"
            command_args = ["--line-number", "--with-filename", "--color=never", pattern, str(path)]
        elif shutil.which("grep"):
            program = "grep"
            command_args = ["-n", "-r", pattern, str(path)]
        else:
            return await self._search_with_powershell(pattern, path, ctx)

        code, stdout, stderr = await _run(ctx.working_dir, program, *command_args)
        # Exit status 1 means the search ran and found nothing.
        if code not in (0, 1):
            raise ExecutionFailedError(f"Codebase search failed: {stderr}")
        return ToolResult.ok(stdout)