"""Async client for the Virtual Architect HTTP API used by the session layer."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Type

import httpx

from virtual_architect.core.config import ClientSettings
from virtual_architect.core.errors import (
    AnalysisError,
    ArchitectClientError,
    ChatError,
    UploadError,
)
from virtual_architect.utils.http import RetryConfig, request_with_retry

logger = logging.getLogger(__name__)


class ArchitectApiClient:
    """Wrap the store, analyze and chat endpoints with typed failures."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 60.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds
        )
        self._retry = retry_config or RetryConfig()

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "ArchitectApiClient":
        return cls(
            settings.api_base_url,
            http_client=http_client,
            timeout_seconds=settings.timeout_seconds,
            retry_config=RetryConfig(attempts=settings.retry_attempts),
        )

    async def __aenter__(self) -> "ArchitectApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def store_asset(self, *, filename: str, content: bytes, media_type: str) -> str:
        """Upload raw file bytes and return the stable URL of the stored asset."""
        response = await self._send(
            UploadError,
            "Upload failed",
            self._http.post,
            "/api/upload",
            files={"file": (filename, content, media_type)},
        )
        body = _json_body(response, UploadError, "Upload failed")
        image_url = body.get("imageUrl") if isinstance(body, dict) else None
        if not isinstance(image_url, str) or not image_url:
            raise UploadError("Upload failed: response carried no imageUrl")
        return image_url

    async def analyze(self, image_url: str) -> Any:
        """Request analysis of a stored floorplan; the payload is not validated here."""
        response = await self._send(
            AnalysisError,
            "Analysis failed",
            self._http.post,
            "/api/analyze",
            json={"imageUrl": image_url},
        )
        return _json_body(response, AnalysisError, "Analysis failed")

    async def chat(self, *, message: str, analysis_context: str) -> str:
        """Send one user message with its grounding context and return the reply."""
        response = await self._send(
            ChatError,
            "Failed to generate response",
            self._http.post,
            "/api/chat",
            json={"message": message, "analysisContext": analysis_context},
        )
        body = _json_body(response, ChatError, "Failed to generate response")
        content = body.get("content") if isinstance(body, dict) else None
        if not isinstance(content, str) or not content:
            raise ChatError("Failed to generate response: empty content")
        return content

    async def discard_asset(self, image_url: str) -> None:
        """Delete a stored asset that will never be analyzed."""
        await self._send(
            UploadError,
            "Discard failed",
            self._http.delete,
            image_url,
        )

    async def _send(
        self,
        error_type: Type[ArchitectClientError],
        message: str,
        func: Callable[..., Awaitable[httpx.Response]],
        *args: Any,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            return await request_with_retry(
                func, *args, retry_config=self._retry, **kwargs
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("%s with HTTP %s", message, status_code)
            raise error_type(
                f"{message}: HTTP {status_code}", status_code=status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s: %s", message, exc)
            raise error_type(f"{message}: {exc}") from exc


def _json_body(
    response: httpx.Response,
    error_type: Type[ArchitectClientError],
    message: str,
) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise error_type(
            f"{message}: response was not valid JSON",
            status_code=response.status_code,
        ) from exc


__all__ = ["ArchitectApiClient"]
