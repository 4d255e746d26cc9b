"""Chat turns about an analyzed floorplan and the conversation that holds them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from virtual_architect.schemas import AnalysisResult
from virtual_architect.services.analysis_context import build_analysis_context
from virtual_architect.session.voice import Dictation, Narration

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I'm your Virtual Architect. I've analyzed your floorplan and found "
    "several opportunities for improvement. Feel free to ask me specific "
    "questions about the layout, lighting, or traffic flow!"
)
FALLBACK_MESSAGE = (
    "I'm sorry, I encountered an error while analyzing your question. "
    "Please try again."
)


@dataclass(frozen=True, slots=True)
class Message:
    """One turn of the transcript."""

    role: Literal["user", "assistant"]
    content: str


class TurnState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class ChatApi(Protocol):
    async def chat(self, *, message: str, analysis_context: str) -> str: ...


class ChatTurnExecutor:
    """Runs at most one chat turn at a time against the remote model."""

    def __init__(self, api: ChatApi) -> None:
        self._api = api
        self.state = TurnState.IDLE

    @property
    def busy(self) -> bool:
        return self.state is TurnState.AWAITING_RESPONSE

    async def send_turn(
        self,
        transcript: list[Message],
        user_text: str,
        context: str,
    ) -> str | None:
        """Append the user turn and exactly one assistant reply to ``transcript``.

        Only ``user_text`` and ``context`` are sent; earlier turns stay local.
        Returns ``None`` without touching the transcript when the text is
        blank or another turn is still awaiting its response. Any failure of
        the remote call, not only API errors, yields ``FALLBACK_MESSAGE``;
        cancellation still propagates.
        """
        if self.busy or not user_text.strip():
            return None

        transcript.append(Message(role="user", content=user_text))
        self.state = TurnState.AWAITING_RESPONSE
        try:
            try:
                reply = await self._api.chat(message=user_text, analysis_context=context)
            except Exception:
                logger.exception("Error generating response")
                reply = FALLBACK_MESSAGE
            transcript.append(Message(role="assistant", content=reply))
            return reply
        finally:
            self.state = TurnState.IDLE


class ConversationPage:
    """Transcript, draft input and voice state for one analyzed floorplan."""

    def __init__(
        self,
        result: AnalysisResult,
        api: ChatApi,
        *,
        narration: Narration | None = None,
        dictation: Dictation | None = None,
        voice_enabled: bool = False,
    ) -> None:
        self._result = result
        self._executor = ChatTurnExecutor(api)
        self._narration = narration
        self._dictation = dictation
        self.voice_enabled = voice_enabled
        self.transcript: list[Message] = []
        self.draft = ""
        self.recording = False

        if dictation is not None:
            dictation.subscribe(self._on_transcript, self._on_dictation_end)

        self.transcript.append(Message(role="assistant", content=WELCOME_MESSAGE))
        self._narrate(self.transcript[-1])

    @property
    def busy(self) -> bool:
        return self._executor.busy

    @property
    def state(self) -> TurnState:
        return self._executor.state

    async def submit(self, text: str | None = None) -> Message | None:
        """Send ``text`` (or the current draft) and return the assistant reply."""
        user_text = self.draft if text is None else text
        if self.busy or not user_text.strip():
            return None

        if text is None:
            self.draft = ""
        reply = await self._executor.send_turn(
            self.transcript,
            user_text,
            build_analysis_context(self._result),
        )
        if reply is None:
            return None
        message = self.transcript[-1]
        self._narrate(message)
        return message

    def toggle_recording(self) -> None:
        if self._dictation is None:
            return
        if self.recording:
            self._dictation.stop()
            self.recording = False
        else:
            self.draft = ""
            self._dictation.start()
            self.recording = True

    def _on_transcript(self, transcript: str) -> None:
        self.draft = transcript

    def _on_dictation_end(self) -> None:
        self.recording = False

    def _narrate(self, message: Message) -> None:
        if self.voice_enabled and self._narration is not None and message.role == "assistant":
            self._narration.speak(message.content)


__all__ = [
    "ChatTurnExecutor",
    "ConversationPage",
    "FALLBACK_MESSAGE",
    "Message",
    "TurnState",
    "WELCOME_MESSAGE",
]
