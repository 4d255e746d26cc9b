"""Public schema exports."""

from .analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ChatReply,
    ChatRequest,
    DimensionAssessment,
    UploadResponse,
)

__all__ = [
    "AnalysisResult",
    "AnalyzeRequest",
    "ChatReply",
    "ChatRequest",
    "DimensionAssessment",
    "UploadResponse",
]
