"""Slash-command completion and history hints for the interactive prompt."""

from __future__ import annotations

from typing import Optional, Sequence

COMMANDS = (
    "/help",
    "/settings",
    "/clear",
    "/status",
    "/model",
    "/permissions",
    "/quit",
    "/exit",
    "/version",
)

_SLASH_HINT = " (Tab for: help, settings, clear...)"


class ReplHelper:
    """Completes slash commands and suggests endings from history."""

    def complete(self, line: str) -> tuple[int, list[str]]:
        """Return the replacement start and the commands that begin with the line."""
        if line.startswith("/"):
            return 0, [cmd for cmd in COMMANDS if cmd.startswith(line)]
        return 0, []

    def hint(self, line: str, history: Sequence[str]) -> Optional[str]:
        """Suggest the rest of the newest history entry that begins with the line."""
        if line == "/":
            return _SLASH_HINT
        if not line:
            return None
        for entry in reversed(history):
            if entry.startswith(line):
                return None if entry == line else entry[len(line):]
        return None