"""Checks that gate shell commands and protect sensitive files."""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from promptline.tools.base import ExecutionFailedError

DEFAULT_DANGEROUS_COMMANDS = (
    r"rm\s+-rf\s+/",
    r"\bmkfs\b",
    r"\bdd\s+if=",
    r":\(\)\s*\{",
    r"\bshutdown\b",
    r"\breboot\b",
)

DEFAULT_PROTECTED_PATTERNS = (
    "*.env",
    "*.env.*",
    "*secret*",
    "*id_rsa*",
    "*.pem",
    "*.key",
)


@dataclass(frozen=True)
class ValidationResult:
    """Verdict on a command: allowed, needing approval, or denied with a reason."""

    verdict: Literal["allowed", "requires_approval", "denied"]
    reason: Optional[str] = None

    @classmethod
    def allowed(cls) -> "ValidationResult":
        return cls("allowed")

    @classmethod
    def requires_approval(cls) -> "ValidationResult":
        return cls("requires_approval")

    @classmethod
    def denied(cls, reason: str) -> "ValidationResult":
        return cls("denied", reason)

    @property
    def is_allowed(self) -> bool:
        return self.verdict == "allowed"

    @property
    def is_denied(self) -> bool:
        return self.verdict == "denied"


def _ask_yes_no(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


class SafetyValidator:
    """Applies command allow/deny lists, dangerous patterns and protected file globs."""

    def __init__(
        self,
        *,
        dangerous_commands: Iterable[str] = DEFAULT_DANGEROUS_COMMANDS,
        denied_commands: Optional[Iterable[str]] = None,
        allowed_commands: Optional[Iterable[str]] = None,
        protected_patterns: Iterable[str] = DEFAULT_PROTECTED_PATTERNS,
        require_approval: bool = True,
    ) -> None:
        try:
            self._dangerous = [re.compile(pattern) for pattern in dangerous_commands]
        except re.error as exc:
            raise ExecutionFailedError(f"Invalid regex pattern: {exc}") from exc
        self.denied_commands = list(denied_commands) if denied_commands is not None else None
        self.allowed_commands = list(allowed_commands) if allowed_commands is not None else None
        self.protected_patterns = list(protected_patterns)
        self.require_approval = require_approval

    def validate_command(self, command: str) -> ValidationResult:
        """Check a command against the deny list, the allow list and dangerous patterns."""
        if self.denied_commands is not None and any(
            command.startswith(prefix) for prefix in self.denied_commands
        ):
            return ValidationResult.denied(f"Command is in the denied list: {command}")

        if self.allowed_commands is not None and not any(
            command.startswith(prefix) for prefix in self.allowed_commands
        ):
            return ValidationResult.denied(f"Command is not in the allowed list: {command}")

        for pattern in self._dangerous:
            if pattern.search(command):
                return ValidationResult.denied(
                    f"Command matches dangerous pattern: {pattern.pattern}"
                )

        return ValidationResult.allowed()

    def request_approval(self, action: str, details: str) -> bool:
        """Ask the user to approve an action; always approved when approval is off."""
        if not self.require_approval:
            return True
        rule = "=" * 60
        print(f"\n{rule}")
        print("⚠️  Approval Required")
        print(rule)
        print(f"Action: {action}")
        print(f"Details:\n{details}")
        print(rule)
        return _ask_yes_no("Approve this action?")

    def is_protected_file(self, path: str) -> bool:
        return any(fnmatch.fnmatchcase(path, pattern) for pattern in self.protected_patterns)