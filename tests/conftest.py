"""Pytest configuration shared across the suite."""

import copy

import pytest

SCENARIO_PAYLOAD = {
    "layout": {"score": 72, "feedback": ["Open kitchen merges into living space"]},
    "lighting": {"score": 55, "feedback": ["South-facing windows limited to bedroom"]},
    "flow": {"score": 80, "feedback": ["Clear path from entry to common areas"]},
}


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def analysis_payload() -> dict:
    """A well-formed analysis as the model would return it."""
    return copy.deepcopy(SCENARIO_PAYLOAD)
