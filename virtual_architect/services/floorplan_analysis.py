"""Service that forwards a stored floorplan to the Gemini vision model for scoring."""

from __future__ import annotations

import logging
import mimetypes
from textwrap import dedent
from typing import Any

import httpx

from virtual_architect.clients import GeminiClient, LocalAssetStore
from virtual_architect.clients.gemini import GeminiResponseError
from virtual_architect.services.result_validator import validate_analysis

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = dedent(
    """
    Analyze this floorplan and provide detailed feedback on:
    1) Layout efficiency (score out of 100 and specific feedback)
    2) Natural lighting assessment (score out of 100 and feedback)
    3) Traffic flow analysis (score out of 100 and feedback)

    Respond strictly in JSON with the schema:
    {"layout": {"score": integer, "feedback": [string]},
     "lighting": {"score": integer, "feedback": [string]},
     "flow": {"score": integer, "feedback": [string]}}
    Order feedback from most to least important. Do not include prose outside
    the JSON object.
    """
).strip()


class AssetNotFoundError(LookupError):
    """The image URL points into the local store but no such asset exists."""


class ImageFetchError(RuntimeError):
    """A remote image URL could not be downloaded."""


class FloorplanAnalysisService:
    """Load floorplan bytes for an image URL and ask Gemini to score them."""

    def __init__(
        self,
        gemini_client: GeminiClient,
        asset_store: LocalAssetStore,
        *,
        http_client: httpx.AsyncClient | None = None,
        download_timeout_seconds: float = 30.0,
    ) -> None:
        self._gemini = gemini_client
        self._store = asset_store
        self._http_client = http_client
        self._download_timeout = download_timeout_seconds

    async def analyze(self, image_url: str) -> Any:
        """Return the decoded model answer for ``image_url`` without trusting its shape."""
        image_bytes, mime_type = await self._load_image(image_url)
        payload = await self._gemini.vision_json(
            prompt=ANALYSIS_PROMPT,
            image_bytes=image_bytes,
            mime_type=mime_type,
        )
        if not isinstance(payload, dict):
            raise GeminiResponseError("Gemini analysis was not a JSON object.")

        outcome = validate_analysis(payload)
        if not outcome.accepted:
            logger.warning(
                "Model analysis for %s does not match the expected shape: %s",
                image_url,
                "; ".join(outcome.errors),
            )
        return payload

    async def _load_image(self, image_url: str) -> tuple[bytes, str]:
        asset_name = self._store.name_from_url(image_url)
        if asset_name is not None:
            content = await self._store.read(asset_name)
            if content is None:
                raise AssetNotFoundError(f"No stored asset named {asset_name}")
            return content, self._store.media_type_for(asset_name)
        return await self._download(image_url)

    async def _download(self, image_url: str) -> tuple[bytes, str]:
        try:
            if self._http_client is not None:
                response = await self._http_client.get(image_url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._download_timeout, follow_redirects=True
                ) as client:
                    response = await client.get(image_url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageFetchError(f"Unable to download {image_url}: {exc}") from exc

        mime_type = response.headers.get("content-type", "").split(";")[0].strip()
        if not mime_type:
            mime_type = mimetypes.guess_type(image_url)[0] or "image/png"
        return response.content, mime_type


__all__ = [
    "ANALYSIS_PROMPT",
    "AssetNotFoundError",
    "FloorplanAnalysisService",
    "ImageFetchError",
]
