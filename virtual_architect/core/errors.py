"""
Error kinds raised by the session layer when talking to the HTTP API.

The result validator reports a rejected payload through ``ValidationOutcome``
rather than raising one of these.
"""


class ArchitectClientError(RuntimeError):
    """Base class for failures of a call to the Virtual Architect API."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UploadError(ArchitectClientError):
    """The store step did not return a usable asset reference."""


class AnalysisError(ArchitectClientError):
    """The analyze step failed or returned a body that is not valid JSON."""


class ChatError(ArchitectClientError):
    """A chat turn could not be completed by the remote model."""


__all__ = ["AnalysisError", "ArchitectClientError", "ChatError", "UploadError"]
