"""Page-level state for the upload, results and conversation flow."""

from .chat import (
    FALLBACK_MESSAGE,
    WELCOME_MESSAGE,
    ChatTurnExecutor,
    ConversationPage,
    Message,
    TurnState,
)
from .navigation import (
    HistoryNavigator,
    Navigator,
    build_results_location,
    parse_results_location,
)
from .results import ResultsView, ViewStatus, build_narration_summary
from .submission import GENERIC_FAILURE_MESSAGE, SubmissionOutcome, SubmissionPipeline
from .uploader import UploadCollector, UploadedFile
from .voice import Dictation, LoggingNarration, Narration

__all__ = [
    "ChatTurnExecutor",
    "ConversationPage",
    "Dictation",
    "FALLBACK_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "HistoryNavigator",
    "LoggingNarration",
    "Message",
    "Narration",
    "Navigator",
    "ResultsView",
    "SubmissionOutcome",
    "SubmissionPipeline",
    "TurnState",
    "UploadCollector",
    "UploadedFile",
    "ViewStatus",
    "WELCOME_MESSAGE",
    "build_narration_summary",
    "build_results_location",
    "parse_results_location",
]
