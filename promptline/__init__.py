"""Building blocks for an AI coding assistant: tools, permissions, safety checks and prompts."""

__version__ = "0.1.0"