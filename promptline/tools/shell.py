"""Run shell commands with a time limit."""

from __future__ import annotations

import asyncio
import os
from typing import Any

from promptline.tools.base import (
    InvalidArgsError,
    Tool,
    ToolContext,
    ToolResult,
    ToolTimeoutError,
)


def _shell() -> tuple[str, str]:
    return ("cmd", "/C") if os.name == "nt" else ("sh", "-c")


class ShellTool(Tool):
    name = "shell_execute"
    description = (
        "Execute a shell command and return its output. Use for running system "
        "commands, listing files, searching, etc."
    )
    parameters = {
        "type": "object",
        "properties": {
            "command": {"type": "string", "description": "The shell command to execute"},
        },
        "required": ["command"],
    }
    read_only = False

    def __init__(self, timeout_secs: float = 30) -> None:
        self.timeout_secs = timeout_secs

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        command = args.get("command") if isinstance(args, dict) else None
        if not isinstance(command, str):
            raise InvalidArgsError("Missing command")

        shell, flag = _shell()
        process = await asyncio.create_subprocess_exec(
            shell,
            flag,
            command,
            cwd=str(ctx.working_dir),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            raw_out, raw_err = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout_secs
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise ToolTimeoutError() from None

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")

        if process.returncode == 0:
            return (
                ToolResult.ok(stdout)
                .with_metadata("exit_code", 0)
                .with_metadata("stderr", stderr)
            )

        exit_code = process.returncode if process.returncode > 0 else -1
        return (
            ToolResult.failure(f"Command failed with exit code {exit_code}: {stderr}")
            .with_metadata("exit_code", exit_code)
            .with_metadata("stdout", stdout)
        )