"""System prompt and reusable prompt templates stored as YAML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import platformdirs
import yaml

from promptline.language_model import AgentMessage

TEMPLATES_DIR_NAME = "templates"

_SYSTEM_PROMPT = """You are PromptLine, an AI assistant for coding tasks.

Follow these guidelines:
- Think step-by-step before taking actions
- Use available tools when needed
- Ask for clarification if the task is unclear
- Be concise but thorough in your responses"""


def build_system_prompt() -> str:
    """Return the default system prompt."""
    return _SYSTEM_PROMPT


class TemplateError(ValueError):
    """Raised when a template file cannot be parsed."""


@dataclass
class PromptTemplate:
    """A named prompt template with default variable values."""

    name: str
    description: str
    template: str
    variables: dict[str, str]
    few_shot_examples: Optional[list[AgentMessage]] = None


def _require_str(data: dict, key: str) -> str:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _parse_example(item: Any) -> AgentMessage:
    if not isinstance(item, dict):
        raise ValueError("each few-shot example must be a mapping")
    return AgentMessage(role=_require_str(item, "role"), content=_require_str(item, "content"))


def _parse_template(data: Any) -> PromptTemplate:
    if not isinstance(data, dict):
        raise ValueError("expected a mapping")
    if "variables" not in data:
        raise ValueError("missing field `variables`")
    variables = data["variables"]
    if not isinstance(variables, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in variables.items()
    ):
        raise ValueError("field `variables` must map strings to strings")

    examples = data.get("few_shot_examples")
    if examples is not None:
        if not isinstance(examples, list):
            raise ValueError("field `few_shot_examples` must be a list")
        examples = [_parse_example(item) for item in examples]

    return PromptTemplate(
        name=_require_str(data, "name"),
        description=_require_str(data, "description"),
        template=_require_str(data, "template"),
        variables=dict(variables),
        few_shot_examples=examples,
    )


def _default_templates_dir() -> Path:
    return platformdirs.user_config_path("promptline") / TEMPLATES_DIR_NAME


class TemplateManager:
    """Loads prompt templates from a directory of YAML files."""

    def __init__(self, templates_dir: Union[str, Path, None] = None) -> None:
        self.templates_dir = Path(templates_dir) if templates_dir is not None else _default_templates_dir()
        self.templates_dir.mkdir(parents=True, exist_ok=True)
        self._templates: dict[str, PromptTemplate] = {}
        self.load_templates()

    def load_templates(self) -> None:
        """Reload every .yaml and .yml file in the templates directory."""
        self._templates.clear()
        for path in sorted(self.templates_dir.iterdir()):
            if not path.is_file() or path.suffix not in (".yaml", ".yml"):
                continue
            content = path.read_text(encoding="utf-8")
            try:
                template = _parse_template(yaml.safe_load(content))
            except (yaml.YAMLError, ValueError) as exc:
                raise TemplateError(f"Failed to parse template {path}: {exc}") from exc
            self._templates[template.name] = template

    def get_template(self, name: str) -> Optional[PromptTemplate]:
        return self._templates.get(name)

    def list_templates(self) -> list[PromptTemplate]:
        return list(self._templates.values())