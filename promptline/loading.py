"""Rotating status messages shown while waiting for a model."""

from __future__ import annotations

import random
import sys
import threading
from typing import Optional, TextIO

LOADING_MESSAGES = (
    "🤔 Thinking...",
    "⚙️  Processing your request...",
    "🧠 Analyzing code...",
    "✨ Brewing some wisdom...",
    "🔍 Reading between the lines...",
    "💭 Pondering the mysteries...",
    "🎯 Focusing neural pathways...",
    "⚡ Charging up the response...",
    "🚀 Launching thought rockets...",
    "🔮 Consulting the code oracle...",
    "🎪 Juggling bits and bytes...",
    "🌟 Channeling developer energy...",
)

_CLEAR_LINE = "\r" + " " * 40 + "\r"


class LoadingIndicator:
    """Rewrites one terminal line with a new message every interval until stopped."""

    def __init__(self, interval: float = 2.0, stream: Optional[TextIO] = None) -> None:
        self.interval = interval
        self.current = 0
        self._stream = stream
        self._stopping = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopping.is_set()

    def _write(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError):
            pass

    def _run(self) -> None:
        while not self._stopping.is_set():
            idx = self.current
            self._write(f"\r{LOADING_MESSAGES[idx % len(LOADING_MESSAGES)]}")
            self._stopping.wait(self.interval)
            self.current = (idx + 1) % len(LOADING_MESSAGES)
        self._write(_CLEAR_LINE)

    def start(self) -> None:
        """Begin showing messages in a background thread."""
        if self.running:
            return
        self._stopping.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the messages and clear the line."""
        self._stopping.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @staticmethod
    def get_message() -> str:
        """Return a random loading message."""
        return random.choice(LOADING_MESSAGES)

    def __enter__(self) -> "LoadingIndicator":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()