"""Service layer exports."""

from .analysis_context import build_analysis_context
from .architect_chat import ArchitectChatService
from .floorplan_analysis import (
    ANALYSIS_PROMPT,
    AssetNotFoundError,
    FloorplanAnalysisService,
    ImageFetchError,
)
from .result_validator import ValidationOutcome, validate_analysis

__all__ = [
    "ANALYSIS_PROMPT",
    "ArchitectChatService",
    "AssetNotFoundError",
    "FloorplanAnalysisService",
    "ImageFetchError",
    "ValidationOutcome",
    "build_analysis_context",
    "validate_analysis",
]
