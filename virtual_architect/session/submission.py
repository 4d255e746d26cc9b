"""Store-then-analyze flow that hands a fresh analysis to the results view."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from virtual_architect.core.errors import AnalysisError, UploadError
from virtual_architect.session.navigation import Navigator, build_results_location
from virtual_architect.session.uploader import UploadCollector

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "We couldn't analyze your floorplan. Please try again."

PROGRESS_STORED = 50
PROGRESS_ANALYZED = 100


class SubmissionApi(Protocol):
    async def store_asset(self, *, filename: str, content: bytes, media_type: str) -> str: ...

    async def analyze(self, image_url: str) -> Any: ...

    async def discard_asset(self, image_url: str) -> None: ...


@dataclass(frozen=True, slots=True)
class SubmissionOutcome:
    """Result of one submission attempt.

    ``error`` keeps the failing step for logs and tests; users only ever see
    ``failure_message``.
    """

    location: str | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.location is not None

    @property
    def failure_message(self) -> str | None:
        return None if self.error is None else GENERIC_FAILURE_MESSAGE


class SubmissionPipeline:
    """Submit the collector's file: store it, analyze it, navigate to results."""

    def __init__(
        self,
        api: SubmissionApi,
        collector: UploadCollector,
        navigator: Navigator,
        *,
        discard_orphaned_assets: bool = True,
    ) -> None:
        self._api = api
        self._collector = collector
        self._navigator = navigator
        self._discard_orphans = discard_orphaned_assets
        self.uploading = False

    async def submit(self) -> SubmissionOutcome | None:
        """Run the flow once; returns ``None`` when there is nothing to do.

        A call while a submission is in flight, or without a selected file, is
        ignored.
        """
        file = self._collector.file
        if file is None or self.uploading:
            return None

        self.uploading = True
        image_url: str | None = None
        try:
            try:
                image_url = await self._api.store_asset(
                    filename=file.filename,
                    content=file.content,
                    media_type=file.media_type,
                )
                self._collector.progress = PROGRESS_STORED

                analysis = await self._api.analyze(image_url)
                self._collector.progress = PROGRESS_ANALYZED
            except (UploadError, AnalysisError) as exc:
                logger.error("Upload/analysis failed: %s", exc)
                return await self._fail(exc, image_url)
            except Exception as exc:
                logger.exception("Unexpected failure submitting %s", file.filename)
                return await self._fail(exc, image_url)

            location = build_results_location(image_url, analysis)
            self._navigator.push(location)
            self._collector.clear()
            return SubmissionOutcome(location=location)
        finally:
            self.uploading = False

    async def _fail(self, error: Exception, image_url: str | None) -> SubmissionOutcome:
        self._collector.progress = 0
        # A URL means the store step succeeded and the asset is now orphaned.
        if image_url is not None:
            await self._discard(image_url)
        return SubmissionOutcome(error=error)

    async def _discard(self, image_url: str) -> None:
        if not self._discard_orphans:
            logger.info("Leaving orphaned asset %s in place", image_url)
            return
        try:
            await self._api.discard_asset(image_url)
        except Exception as exc:
            logger.warning("Could not discard orphaned asset %s: %s", image_url, exc)


__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "SubmissionOutcome",
    "SubmissionPipeline",
]
