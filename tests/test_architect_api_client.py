try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from virtual_architect.clients import ArchitectApiClient
from virtual_architect.core.errors import AnalysisError, ChatError, UploadError
from virtual_architect.utils.http import RetryConfig

BASE_URL = "http://architect.test"


def _client(handler, retry_config: RetryConfig | None = None) -> ArchitectApiClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url=BASE_URL
    )
    return ArchitectApiClient(BASE_URL, http_client=http_client, retry_config=retry_config)


@pytest.mark.asyncio
async def test_store_asset_posts_multipart_and_returns_image_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"imageUrl": f"{BASE_URL}/api/assets/abc.png"})

    api = _client(handler)
    image_url = await api.store_asset(
        filename="plan.png", content=b"\x89PNG", media_type="image/png"
    )

    assert image_url == f"{BASE_URL}/api/assets/abc.png"
    assert seen[0].url.path == "/api/upload"
    assert seen[0].headers["content-type"].startswith("multipart/form-data")
    assert b"plan.png" in seen[0].content


@pytest.mark.asyncio
async def test_store_asset_non_success_raises_upload_error() -> None:
    api = _client(lambda request: httpx.Response(500, json={"detail": "boom"}))

    with pytest.raises(UploadError) as excinfo:
        await api.store_asset(filename="plan.png", content=b"x", media_type="image/png")

    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_store_asset_without_image_url_raises_upload_error() -> None:
    api = _client(lambda request: httpx.Response(201, json={"filename": "abc.png"}))

    with pytest.raises(UploadError):
        await api.store_asset(filename="plan.png", content=b"x", media_type="image/png")


@pytest.mark.asyncio
async def test_analyze_returns_raw_payload_unvalidated() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"imageUrl": "http://x/plan.png"}
        return httpx.Response(200, json={"layout": "not a dimension"})

    api = _client(handler)

    assert await api.analyze("http://x/plan.png") == {"layout": "not a dimension"}


@pytest.mark.asyncio
async def test_analyze_malformed_json_raises_analysis_error() -> None:
    api = _client(lambda request: httpx.Response(200, text="{not json"))

    with pytest.raises(AnalysisError):
        await api.analyze("http://x/plan.png")


@pytest.mark.asyncio
async def test_analyze_non_success_raises_analysis_error() -> None:
    api = _client(lambda request: httpx.Response(502, json={"detail": "Analysis failed"}))

    with pytest.raises(AnalysisError) as excinfo:
        await api.analyze("http://x/plan.png")

    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_chat_sends_message_and_context_only() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"content": "Move the pantry."})

    api = _client(handler)
    reply = await api.chat(message="Where is storage?", analysis_context="ctx")

    assert reply == "Move the pantry."
    assert bodies == [{"message": "Where is storage?", "analysisContext": "ctx"}]


@pytest.mark.asyncio
async def test_chat_network_failure_raises_chat_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = _client(handler)

    with pytest.raises(ChatError):
        await api.chat(message="Hi", analysis_context="ctx")


@pytest.mark.asyncio
async def test_requests_are_not_retried_by_default() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    api = _client(handler)

    with pytest.raises(ChatError):
        await api.chat(message="Hi", analysis_context="ctx")
    assert calls == 1


@pytest.mark.asyncio
async def test_opt_in_retry_recovers_from_transient_failure() -> None:
    responses = [httpx.Response(503), httpx.Response(200, json={"content": "ok"})]

    api = _client(
        lambda request: responses.pop(0),
        retry_config=RetryConfig(attempts=2, backoff_seconds=0),
    )

    assert await api.chat(message="Hi", analysis_context="ctx") == "ok"
    assert responses == []


@pytest.mark.asyncio
async def test_discard_asset_deletes_absolute_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    api = _client(handler)
    await api.discard_asset(f"{BASE_URL}/api/assets/abc.png")

    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/assets/abc.png"


@pytest.mark.asyncio
async def test_client_errors_are_not_retried_even_when_enabled() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(413, json={"detail": "File too large."})

    api = _client(handler, retry_config=RetryConfig(attempts=3, backoff_seconds=0))

    with pytest.raises(UploadError) as excinfo:
        await api.store_asset(filename="plan.png", content=b"x", media_type="image/png")

    assert excinfo.value.status_code == 413
    assert calls == 1
