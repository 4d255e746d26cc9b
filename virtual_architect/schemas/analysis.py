"""
Pydantic models for floorplan analysis payloads and the HTTP API envelopes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DimensionAssessment(BaseModel):
    """Score and ordered feedback for one evaluated dimension of a floorplan."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    score: int | float = Field(..., description="Model-assigned score, nominally 0-100.")
    feedback: tuple[Any, ...] = Field(
        ..., description="Ordered feedback statements backing the score."
    )

    @field_validator("score", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> Any:
        # bool is an int subclass; "72" would be coerced in lax mode.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        return value

    @field_validator("feedback", mode="before")
    @classmethod
    def _require_ordered_sequence(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValueError("feedback must be an ordered sequence")
        return tuple(value)


class AnalysisResult(BaseModel):
    """Three-dimensional evaluation of a floorplan image."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    layout: DimensionAssessment
    lighting: DimensionAssessment
    flow: DimensionAssessment

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible shape the analysis endpoint produces."""
        return {
            name: {"score": dimension.score, "feedback": list(dimension.feedback)}
            for name, dimension in (
                ("layout", self.layout),
                ("lighting", self.lighting),
                ("flow", self.flow),
            )
        }


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(_CamelModel):
    """Reference to a stored floorplan asset."""

    image_url: str = Field(..., alias="imageUrl")
    filename: str = Field(..., description="Name of the asset in the store.")
    media_type: str = Field(..., alias="mediaType")
    size_bytes: int = Field(..., alias="sizeBytes")


class AnalyzeRequest(_CamelModel):
    """Payload requesting analysis of a stored floorplan."""

    image_url: str = Field(..., alias="imageUrl", min_length=1)


class ChatRequest(_CamelModel):
    """One user utterance plus the grounding analysis context."""

    message: str = Field(..., min_length=1)
    analysis_context: str = Field(..., alias="analysisContext")


class ChatReply(BaseModel):
    """Single assistant reply for a chat turn."""

    content: str


__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "ChatReply",
    "ChatRequest",
    "DimensionAssessment",
    "UploadResponse",
]
