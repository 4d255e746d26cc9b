"""Carries an analysis from the upload flow to the results view via its address."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import parse_qs, urlencode, urlsplit

RESULTS_PATH = "/analysis"
PLACEHOLDER_IMAGE = "/placeholder.svg"


class Navigator(Protocol):
    """Moves the session to another view."""

    def push(self, location: str) -> None: ...


class HistoryNavigator:
    """Navigator that records visited locations, newest last."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None

    def push(self, location: str) -> None:
        self.history.append(location)


@dataclass(frozen=True, slots=True)
class ResultsAddress:
    """Decoded parameters of a results-view address.

    ``analysis`` is whatever JSON the address carried and is still untrusted.
    ``decode_error`` is set when the parameter was present but not valid JSON.
    """

    image_url: str
    analysis: Any = None
    has_analysis: bool = False
    decode_error: str | None = None


def build_results_location(image_url: str, analysis: Any) -> str:
    """Serialize the image reference and raw analysis payload into an address."""
    query = urlencode({"image": image_url, "analysis": json.dumps(analysis)})
    return f"{RESULTS_PATH}?{query}"


def parse_results_location(location: str) -> ResultsAddress:
    params = parse_qs(urlsplit(location).query)
    image_url = (params.get("image") or [""])[0] or PLACEHOLDER_IMAGE

    raw_values = params.get("analysis")
    if not raw_values:
        return ResultsAddress(image_url=image_url)
    try:
        analysis = json.loads(raw_values[0])
    except json.JSONDecodeError as exc:
        return ResultsAddress(
            image_url=image_url, has_analysis=True, decode_error=exc.msg
        )
    return ResultsAddress(image_url=image_url, analysis=analysis, has_analysis=True)


__all__ = [
    "HistoryNavigator",
    "Navigator",
    "PLACEHOLDER_IMAGE",
    "RESULTS_PATH",
    "ResultsAddress",
    "build_results_location",
    "parse_results_location",
]
