"""Results view: re-validates the carried analysis and hosts the conversation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from virtual_architect.schemas import AnalysisResult, DimensionAssessment
from virtual_architect.services.result_validator import validate_analysis
from virtual_architect.session.chat import ChatApi, ConversationPage
from virtual_architect.session.navigation import parse_results_location
from virtual_architect.session.voice import Dictation, Narration

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = (
    "No analysis is available for this floorplan. Go back and upload it again."
)


class ViewStatus(str, Enum):
    READY = "ready"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True, slots=True)
class DimensionRow:
    """Display data for one analysis dimension."""

    key: str
    title: str
    score: int | float
    band: str
    feedback: tuple[str, ...]


_DIMENSIONS: tuple[tuple[str, str], ...] = (
    ("layout", "Layout Efficiency"),
    ("lighting", "Natural Lighting"),
    ("flow", "Traffic Flow"),
)


def score_band(score: int | float) -> str:
    if score >= 80:
        return "default"
    if score >= 60:
        return "secondary"
    return "destructive"


def build_narration_summary(result: AnalysisResult) -> str:
    """Spoken overview: every score plus the leading feedback item."""
    sentences = [
        "I've analyzed your floorplan and found several opportunities for improvement."
    ]
    for key, label in (
        ("layout", "The layout"),
        ("lighting", "Natural lighting"),
        ("flow", "Traffic flow"),
    ):
        dimension: DimensionAssessment = getattr(result, key)
        sentence = f"{label} scores {dimension.score} out of 100"
        if dimension.feedback:
            sentence += f", {dimension.feedback[0]}"
        sentences.append(sentence + ".")
    return " ".join(sentences)


class ResultsView:
    """State of the results page for one navigation address."""

    def __init__(
        self,
        image_url: str,
        result: AnalysisResult | None,
        *,
        errors: tuple[str, ...] = (),
    ) -> None:
        self.image_url = image_url
        self.result = result
        self.errors = errors
        self.voice_enabled = False
        self.conversation: ConversationPage | None = None

    @classmethod
    def from_location(cls, location: str) -> "ResultsView":
        """Parse and re-validate the analysis carried by ``location``."""
        address = parse_results_location(location)
        if not address.has_analysis:
            logger.error("Results address carries no analysis")
            return cls(address.image_url, None, errors=("analysis: missing",))
        if address.decode_error is not None:
            logger.error("Failed to parse analysis results: %s", address.decode_error)
            return cls(
                address.image_url, None, errors=(f"analysis: {address.decode_error}",)
            )

        outcome = validate_analysis(address.analysis)
        if not outcome.accepted:
            logger.error("Invalid analysis format: %s", "; ".join(outcome.errors))
        return cls(address.image_url, outcome.result, errors=outcome.errors)

    @property
    def status(self) -> ViewStatus:
        return ViewStatus.READY if self.result is not None else ViewStatus.UNAVAILABLE

    @property
    def message(self) -> str | None:
        return None if self.result is not None else UNAVAILABLE_MESSAGE

    def dimensions(self) -> list[DimensionRow]:
        if self.result is None:
            return []
        rows = []
        for key, title in _DIMENSIONS:
            dimension: DimensionAssessment = getattr(self.result, key)
            rows.append(
                DimensionRow(
                    key=key,
                    title=title,
                    score=dimension.score,
                    band=score_band(dimension.score),
                    feedback=tuple(str(item) for item in dimension.feedback),
                )
            )
        return rows

    def open_conversation(
        self,
        api: ChatApi,
        *,
        narration: Narration | None = None,
        dictation: Dictation | None = None,
    ) -> ConversationPage | None:
        """Create the conversation once; ``None`` while no valid analysis exists."""
        if self.result is None:
            return None
        if self.conversation is None:
            self.conversation = ConversationPage(
                self.result,
                api,
                narration=narration,
                dictation=dictation,
                voice_enabled=self.voice_enabled,
            )
        return self.conversation

    def toggle_voice(self, narration: Narration) -> bool:
        """Flip narration; enabling it speaks the summary, disabling cancels speech."""
        self.voice_enabled = not self.voice_enabled
        if self.conversation is not None:
            self.conversation.voice_enabled = self.voice_enabled

        if self.voice_enabled and self.result is not None:
            narration.speak(build_narration_summary(self.result))
        else:
            narration.cancel()
        return self.voice_enabled


__all__ = [
    "DimensionRow",
    "ResultsView",
    "UNAVAILABLE_MESSAGE",
    "ViewStatus",
    "build_narration_summary",
    "score_band",
]
