"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Iterable

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPICallError, NotFound

from virtual_architect.core.config import GeminiSettings


_TEXT_FALLBACKS: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.0-flash",
)
_VISION_FALLBACKS: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.0-flash",
)
_JSON_GENERATION_CONFIG = {"response_mime_type": "application/json"}

logger = logging.getLogger(__name__)


class GeminiModelError(RuntimeError):
    """Raised when Gemini cannot fulfill a request due to configuration issues."""


class GeminiResponseError(GeminiModelError):
    """Raised when Gemini answers with something other than the requested JSON."""


class GeminiClient:
    """Provide helper methods for floorplan vision scoring and conversation."""

    def __init__(self, settings: GeminiSettings) -> None:
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)

    async def generate_reply(self, *, system_instruction: str, message: str) -> str:
        """Produce a free-form reply to ``message`` under ``system_instruction``."""

        def _invoke() -> str:
            response = self._invoke_with_models(
                models=self._text_model_candidates(),
                env_var="GEMINI_MODEL_NAME",
                error_prefix="Gemini chat generate_content failed",
                system_instruction=system_instruction,
                call=lambda model: model.generate_content(message),
            )
            return _response_text(response)

        return await asyncio.to_thread(_invoke)

    async def vision_json(
        self,
        *,
        prompt: str,
        image_bytes: bytes,
        mime_type: str = "image/png",
    ) -> Any:
        """Ask the vision model about an image and decode its JSON answer."""

        def _invoke() -> str:
            response = self._invoke_with_models(
                models=self._vision_model_candidates(),
                env_var="GEMINI_VISION_MODEL_NAME",
                error_prefix="Gemini vision generate_content failed",
                call=lambda model: model.generate_content(
                    [
                        prompt,
                        {
                            "mime_type": mime_type,
                            "data": image_bytes,
                        },
                    ],
                    generation_config=_JSON_GENERATION_CONFIG,
                ),
            )
            return _response_text(response)

        raw = await asyncio.to_thread(_invoke)
        return _parse_json_response(raw)

    def _invoke_with_models(
        self,
        *,
        models: Iterable[str],
        env_var: str,
        error_prefix: str,
        call: Callable[[genai.GenerativeModel], Any],
        system_instruction: str | None = None,
    ) -> Any:
        """Try the configured model followed by fallbacks when available."""

        model_sequence = list(models)
        last_not_found: NotFound | None = None
        for index, model_name in enumerate(model_sequence):
            generative_model = genai.GenerativeModel(
                model_name, system_instruction=system_instruction
            )
            try:
                return call(generative_model)
            except NotFound as exc:  # pragma: no cover - network call
                last_not_found = exc
                logger.warning(
                    "Gemini model '%s' not found (attempt %d/%d); trying fallback.",
                    model_name,
                    index + 1,
                    len(model_sequence),
                )
                continue
            except GoogleAPICallError as exc:  # pragma: no cover - network call
                raise GeminiModelError(f"{error_prefix}: {exc.message}") from exc

        if last_not_found is not None:
            primary = model_sequence[0] if model_sequence else "unknown"
            raise GeminiModelError(
                "Gemini model '"
                f"{primary}"
                "' is not available. Update "
                f"{env_var} to a supported value."
            ) from last_not_found

        raise GeminiModelError(f"{error_prefix}: Unknown error invoking Gemini.")

    def _text_model_candidates(self) -> list[str]:
        return self._collect_candidates(
            self._settings.model_name,
            _TEXT_FALLBACKS,
        )

    def _vision_model_candidates(self) -> list[str]:
        return self._collect_candidates(
            self._settings.vision_model_name,
            _VISION_FALLBACKS,
        )

    @staticmethod
    def _collect_candidates(
        configured: str | None,
        fallbacks: tuple[str, ...],
    ) -> list[str]:
        """Return distinct model names prioritizing the configured value."""
        seen: set[str] = set()
        candidates: list[str] = []
        for name in (configured, *fallbacks):
            if not name:
                continue
            cleaned = name.strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            candidates.append(cleaned)
        return candidates


def _response_text(response: Any) -> str:
    # ``.text`` raises when the candidate was blocked or carries no parts.
    try:
        return response.text or ""
    except ValueError:
        logger.warning("Gemini response carried no text parts.")
        return ""


def _strip_code_fence(payload: str) -> str:
    if payload.startswith("```json"):
        payload = payload[7:]
    elif payload.startswith("```"):
        payload = payload[3:]
    if payload.endswith("```"):
        payload = payload[:-3]
    return payload.strip()


def _parse_json_response(payload: str) -> Any:
    payload = _strip_code_fence(payload.strip())
    if not payload:
        raise GeminiResponseError("Gemini returned an empty response.")
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise GeminiResponseError(f"Gemini returned malformed JSON: {exc.msg}") from exc


__all__ = ["GeminiClient", "GeminiModelError", "GeminiResponseError"]
