"""Line diffs rendered for the terminal."""

from __future__ import annotations

import difflib
import re

_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"

_LINE = re.compile(r"[^\n]*\n|[^\n]+")


def _paint(text: str, code: str) -> str:
    return f"{code}{text}{_RESET}"


def _lines(text: str) -> list[str]:
    return _LINE.findall(text)


def generate_diff(original: str, modified: str) -> str:
    """Return a line-by-line diff with removed lines red and added lines green."""
    old = _lines(original)
    new = _lines(modified)
    matcher = difflib.SequenceMatcher(a=old, b=new, autojunk=False)
    output = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            output.extend(f"  {line}" for line in old[i1:i2])
        else:
            output.extend(_paint(f"- {line}", _RED) for line in old[i1:i2])
            output.extend(_paint(f"+ {line}", _GREEN) for line in new[j1:j2])
    return "".join(output)


def display_diff(path: str, original: str, modified: str) -> None:
    """Print a framed diff of a file's old and new contents."""
    rule = "=" * 60
    print(f"\n{rule}")
    print(f"📝 File: {_BOLD}{path}{_RESET}")
    print(rule)
    print(generate_diff(original, modified))
    print(rule)