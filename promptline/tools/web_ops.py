"""Tools that fetch content over HTTP."""

from __future__ import annotations

from typing import Any

import httpx

from promptline.tools.base import (
    ExecutionFailedError,
    InvalidArgsError,
    Tool,
    ToolContext,
    ToolResult,
)


class WebGetTool(Tool):
    name = "web_get"
    description = (
        "Perform an HTTP GET request to a URL and return the response body. "
        "Use for fetching web content, API data, etc."
    )
    parameters = {
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "The URL to perform the GET request on",
            },
        },
        "required": ["url"],
    }
    read_only = True

    async def execute(self, args: Any, ctx: ToolContext) -> ToolResult:
        url = args.get("url") if isinstance(args, dict) else None
        if not isinstance(url, str):
            raise InvalidArgsError("Missing URL")

        try:
            async with httpx.AsyncClient(follow_redirects=True, timeout=None) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise ExecutionFailedError(f"Failed to send request: {exc}") from exc
        except ValueError as exc:
            raise ExecutionFailedError(f"Failed to send request: {exc}") from exc

        body = response.text
        if response.is_success:
            return ToolResult.ok(body).with_metadata("status", response.status_code)

        status = f"{response.status_code} {response.reason_phrase}".rstrip()
        raise ExecutionFailedError(f"Request failed with status {status}: {body}")