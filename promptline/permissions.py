"""Tool execution permissions, remembered for the session or on disk."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional, Union

import yaml


class PermissionLevel(enum.Enum):
    """How a tool may be used."""

    ONCE = "once"
    ALWAYS = "always"
    NEVER = "never"
    ASK = "ask"

    @property
    def label(self) -> str:
        return self.value.capitalize()


_CHOICES = (
    ("Once     - Allow this time only", PermissionLevel.ONCE),
    ("Always   - Always allow (recommended)", PermissionLevel.ALWAYS),
    ("Never    - Block this tool", PermissionLevel.NEVER),
)


def _default_storage_path() -> Path:
    return Path.home() / ".promptline" / "permissions.yaml"


def _load(path: Path) -> dict[str, PermissionLevel]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}
    try:
        return {key: PermissionLevel(value) for key, value in data.items() if _is_str(key)}
    except ValueError:
        return {}


def _is_str(key: object) -> bool:
    if not isinstance(key, str):
        raise ValueError("permission keys must be strings")
    return True


def _parse_choice(answer: str) -> Optional[PermissionLevel]:
    if answer == "":
        return PermissionLevel.ONCE
    if answer.isdigit() and 1 <= int(answer) <= len(_CHOICES):
        return _CHOICES[int(answer) - 1][1]
    for _, level in _CHOICES:
        if answer == level.value:
            return level
    return None


class PermissionManager:
    """Keeps permanent permissions in a YAML file and one-off ones in memory."""

    def __init__(self, storage_path: Union[str, Path, None] = None) -> None:
        self.storage_path = Path(storage_path) if storage_path is not None else _default_storage_path()
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._permissions = _load(self.storage_path)
        self._session: dict[str, PermissionLevel] = {}

    def check_permission(self, tool_name: str) -> PermissionLevel:
        """Session permissions win over saved ones; unknown tools are ASK."""
        if tool_name in self._session:
            return self._session[tool_name]
        return self._permissions.get(tool_name, PermissionLevel.ASK)

    def set_permission(self, tool_name: str, level: PermissionLevel) -> None:
        if level is PermissionLevel.ONCE:
            self._session[tool_name] = level
        elif level in (PermissionLevel.ALWAYS, PermissionLevel.NEVER):
            self._permissions[tool_name] = level
            self._save()
        else:
            self._permissions.pop(tool_name, None)
            self._session.pop(tool_name, None)
            self._save()

    def _save(self) -> None:
        content = yaml.safe_dump(
            {name: level.value for name, level in self._permissions.items()},
            default_flow_style=False,
            sort_keys=False,
        )
        self.storage_path.write_text(content, encoding="utf-8")

    def all_permissions(self) -> dict[str, PermissionLevel]:
        """Return a copy of the saved permissions."""
        return dict(self._permissions)

    def prompt_for_permission(self, tool_name: str) -> bool:
        """Ask on the terminal, store the answer and report whether the tool may run."""
        print(f"\n⚠️  Permission Required: {tool_name}")
        print()
        for number, (text, _) in enumerate(_CHOICES, start=1):
            print(f"  {number}) {text}")

        while True:
            level = _parse_choice(input("Choice [1]: ").strip().lower())
            if level is not None:
                break
            print(f"Please choose a number from 1 to {len(_CHOICES)}.")

        self.set_permission(tool_name, level)
        if level is PermissionLevel.NEVER:
            print(f"\n✗ Blocked: {tool_name}\n")
            return False
        print(f"\n✓ Saved: {tool_name} = {level.label}\n")
        return True