"""Narration and dictation capabilities injected into the session layer."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

TranscriptListener = Callable[[str], None]
EndListener = Callable[[], None]


class Narration(Protocol):
    """Speaks text aloud."""

    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class Dictation(Protocol):
    """Turns speech into text, reporting the running transcript to a subscriber."""

    def subscribe(self, on_transcript: TranscriptListener, on_end: EndListener) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class LoggingNarration:
    """Narration stand-in for terminals without speech synthesis."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self.spoken: list[str] = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)
        self._log.info("[narration] %s", text)

    def cancel(self) -> None:
        self._log.info("[narration] cancelled")


__all__ = [
    "Dictation",
    "EndListener",
    "LoggingNarration",
    "Narration",
    "TranscriptListener",
]
