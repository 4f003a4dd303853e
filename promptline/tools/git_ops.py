"""Tools that inspect and commit to the Git repository in the working directory."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from promptline.tools.base import (
    ExecutionFailedError,
    InvalidArgsError,
    Tool,
    ToolContext,
    ToolResult,
)


async def _run_git(cwd: Path, *args: str) -> tuple[int, str, str]:
    process = await asyncio.create_subprocess_exec(
        "git",
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


class GitStatusTool(Tool):
    name = "git_status"
    description = (
        "Get the status of the Git repository (e.g., modified, untracked files). "
        "Returns output of `git status --porcelain`."
    )
    parameters = {"type": "object", "properties": {}}
    read_only = True

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        code, stdout, stderr = await _run_git(ctx.working_dir, "status", "--porcelain")
        if code != 0:
            raise ExecutionFailedError(f"git status failed: {stderr}")
        return ToolResult.ok(stdout)


class GitDiffTool(Tool):
    name = "git_diff"
    description = (
        "Get the diff of changes in the Git repository. Can specify a file path "
        "to diff a single file. Returns output of `git diff`."
    )
    parameters = {
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Optional: Path to a specific file to diff",
            },
        },
    }
    read_only = True

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        git_args = ["diff"]
        if isinstance(args, dict) and isinstance(args.get("path"), str):
            git_args.append(args["path"])
        code, stdout, stderr = await _run_git(ctx.working_dir, *git_args)
        if code != 0:
            raise ExecutionFailedError(f"git diff failed: {stderr}")
        return ToolResult.ok(stdout)


class GitCommitTool(Tool):
    name = "git_commit"
    description = "Commit changes to the Git repository. Requires a commit message."
    parameters = {
        "type": "object",
        "properties": {
            "message": {"type": "string", "description": "The commit message"},
        },
        "required": ["message"],
    }
    read_only = False

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        message = args.get("message") if isinstance(args, dict) else None
        if not isinstance(message, str):
            raise InvalidArgsError("Missing commit message")
        code, stdout, stderr = await _run_git(ctx.working_dir, "commit", "-m", message)
        if code != 0:
            raise ExecutionFailedError(f"git commit failed: {stderr}")
        return ToolResult.ok(stdout)