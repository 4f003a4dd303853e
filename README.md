# promptline

Building blocks for an AI coding assistant that works inside your project:
tools an agent can call, a permission store, command safety checks, prompt
templates and a common interface for chat models.

## Modules

- `promptline.language_model`: the data types of a conversation.
  `AgentMessage` has the constructors `system`, `user` and `assistant`.
  The module also has `ModelReply`, `TokenUsage`, `ToolCall`,
  `ToolDefinition`, `ModelInfo` and the `ModelError` exception.
  `LanguageModel` is an abstract base class. A subclass implements `chat` and
  `model_info`. It inherits `complete`, `chat_with_tools` (plain chat by
  default), `estimate_tokens` (about four bytes per token), `supports_tools`
  and `supports_streaming`.
- `promptline.tools.base`: the `Tool` base class. A tool has `name`,
  `description`, a JSON-schema `parameters` and `read_only`. It has the
  methods `execute`, `validate_args` and `to_definition`. The module also has
  `ToolResult` (`ok`, `failure`, `with_metadata`), `ToolContext` and
  `ToolRegistry` (`register`, `get`, `execute`, `list`, `definitions`).
  Its errors are `ToolError`, `ToolNotFoundError`, `InvalidArgsError`,
  `ExecutionFailedError` and `ToolTimeoutError`.
- `promptline.tools.file_ops`: `FileReadTool` reads files up to 1 MB.
  `FileWriteTool` shows a diff before it overwrites a file and asks for
  confirmation, unless `require_diff_preview=False`. You can pass your own
  `confirm` callable. `FileListTool` lists a directory.
- `promptline.tools.git_ops`: `GitStatusTool`, `GitDiffTool` and
  `GitCommitTool` run `git` in the context's working directory.
- `promptline.tools.search_ops`: `CodebaseSearchTool` searches with `rg`,
  or with `grep` if `rg` is missing, or with PowerShell if neither is found.
- `promptline.tools.shell`: `ShellTool` runs a command through `sh -c`, or
  `cmd /C` on Windows. It has a timeout of 30 seconds by default.
- `promptline.tools.web_ops`: `WebGetTool` makes an HTTP GET request and
  returns the response body.
- `promptline.safety`: `SafetyValidator` checks commands with
  `validate_command`, which returns a `ValidationResult`. It checks the denied
  prefixes first, then the allowed prefixes, then the dangerous regular
  expressions. `is_protected_file` matches paths against glob patterns.
  `request_approval` asks on the terminal.
- `promptline.permissions`: `PermissionManager` stores a `PermissionLevel` for
  each tool: `ONCE`, `ALWAYS`, `NEVER` or `ASK`. `ONCE` lasts for the session
  only. `ALWAYS` and `NEVER` are saved to `~/.promptline/permissions.yaml`, or
  to the `storage_path` you give.
- `promptline.prompts`: `build_system_prompt` returns the default system
  prompt. `TemplateManager` loads `.yaml` and `.yml` files from a directory
  into `PromptTemplate` objects. The default directory is under the user
  config directory. A template file that cannot be parsed raises
  `TemplateError`.
- `promptline.diff`: `generate_diff` returns a coloured line diff.
  `display_diff` prints the diff with a frame around it.
- `promptline.loading`: `LoadingIndicator` rewrites one terminal line with a
  rotating status message until it is stopped. You can use it as a context
  manager.
- `promptline.repl`: `ReplHelper.complete` completes slash commands such as
  `/help` and `/quit`. `ReplHelper.hint` suggests the rest of a line from
  history.

## Example

```python
import asyncio
from pathlib import Path

from promptline.safety import SafetyValidator
from promptline.tools.base import ToolContext, ToolRegistry
from promptline.tools.file_ops import FileListTool, FileReadTool

registry = ToolRegistry()
registry.register(FileReadTool())
registry.register(FileListTool())

ctx = ToolContext(working_dir=Path.cwd())
result = asyncio.run(registry.execute("file_list", {"path": "."}, ctx))
print(result.output)

validator = SafetyValidator(dangerous_commands=["rm -rf"])
print(validator.validate_command("rm -rf /tmp/x").reason)
```

## What it does not do

- The package has no chat model backends. To talk to a model service,
  subclass `LanguageModel` and implement `chat` and `model_info`.
- There is no command-line program and no agent loop that drives the tools.
  The package gives you the parts to build one.