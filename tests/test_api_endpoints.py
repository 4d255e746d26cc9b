try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from typing import Any

import httpx
import pytest

from virtual_architect.clients import LocalAssetStore
from virtual_architect.clients.gemini import GeminiModelError
from virtual_architect.core.config import AppSettings, StorageSettings
from virtual_architect.main import app
from virtual_architect.services import AssetNotFoundError


class StubAnalysisService:
    def __init__(self) -> None:
        self.payload: Any = None
        self.error: Exception | None = None
        self.image_urls: list[str] = []

    async def analyze(self, image_url: str) -> Any:
        self.image_urls.append(image_url)
        if self.error is not None:
            raise self.error
        return self.payload


class StubChatService:
    def __init__(self) -> None:
        self.reply_text = "Consider a skylight over the hallway."
        self.error: Exception | None = None
        self.calls: list[dict[str, str]] = []

    async def reply(self, *, message: str, analysis_context: str) -> str:
        self.calls.append({"message": message, "analysis_context": analysis_context})
        if self.error is not None:
            raise self.error
        return self.reply_text


pytestmark = pytest.mark.anyio("asyncio")


@pytest.fixture()
def store(tmp_path) -> LocalAssetStore:
    return LocalAssetStore(tmp_path / "uploads", public_base_url="http://testserver")


@pytest.fixture()
def overrides(store: LocalAssetStore):
    from virtual_architect import dependencies

    analysis = StubAnalysisService()
    chat = StubChatService()
    settings = AppSettings(storage=StorageSettings(max_upload_size_mb=1))

    app.dependency_overrides.clear()
    app.dependency_overrides.update(
        {
            dependencies.get_asset_store: lambda: store,
            dependencies.get_app_settings: lambda: settings,
            dependencies.get_floorplan_analysis_service: lambda: analysis,
            dependencies.get_architect_chat_service: lambda: chat,
        }
    )
    yield {"analysis": analysis, "chat": chat, "store": store}
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(overrides):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def test_health(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_upload_stores_file_and_returns_public_url(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        files={"file": ("plan.png", b"\x89PNG floorplan", "image/png")},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["imageUrl"].startswith("http://testserver/api/assets/")
    assert body["imageUrl"].endswith(".png")
    assert body["mediaType"] == "image/png"
    assert body["sizeBytes"] == len(b"\x89PNG floorplan")

    served = await client.get(body["imageUrl"])
    assert served.status_code == 200
    assert served.content == b"\x89PNG floorplan"
    assert served.headers["content-type"] == "image/png"


async def test_upload_infers_type_from_filename(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        files={"file": ("plan.pdf", b"%PDF-1.7", "application/octet-stream")},
    )

    assert response.status_code == 201
    assert response.json()["mediaType"] == "application/pdf"


async def test_upload_rejects_unsupported_type(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        files={"file": ("notes.txt", b"not a floorplan", "text/plain")},
    )

    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["detail"]


async def test_upload_rejects_oversized_file(client: httpx.AsyncClient, store) -> None:
    oversized = b"0" * (1024 * 1024 + 1)

    response = await client.post(
        "/api/upload",
        files={"file": ("plan.jpg", oversized, "image/jpeg")},
    )

    assert response.status_code == 413


async def test_upload_rejects_empty_file(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/upload",
        files={"file": ("plan.png", b"", "image/png")},
    )

    assert response.status_code == 400


async def test_asset_lookup_rejects_unknown_names(client: httpx.AsyncClient) -> None:
    assert (await client.get("/api/assets/../secrets.env")).status_code == 404
    assert (await client.get(f"/api/assets/{'0' * 32}.png")).status_code == 404


async def test_delete_asset_discards_stored_file(client: httpx.AsyncClient, store) -> None:
    asset = await store.save(content=b"plan", media_type="image/png")

    response = await client.delete(f"/api/assets/{asset.name}")

    assert response.status_code == 204
    assert store.path_for(asset.name) is None
    assert (await client.delete(f"/api/assets/{asset.name}")).status_code == 404


async def test_analyze_returns_model_payload_unchanged(
    client: httpx.AsyncClient, overrides
) -> None:
    overrides["analysis"].payload = {"layout": {"score": "high"}}

    response = await client.post("/api/analyze", json={"imageUrl": "http://x/plan.png"})

    assert response.status_code == 200
    assert response.json() == {"layout": {"score": "high"}}
    assert overrides["analysis"].image_urls == ["http://x/plan.png"]


async def test_analyze_missing_asset_returns_404(client: httpx.AsyncClient, overrides) -> None:
    overrides["analysis"].error = AssetNotFoundError("No stored asset named x.png")

    response = await client.post("/api/analyze", json={"imageUrl": "/api/assets/x.png"})

    assert response.status_code == 404


async def test_analyze_model_failure_returns_502(client: httpx.AsyncClient, overrides) -> None:
    overrides["analysis"].error = GeminiModelError("quota exceeded")

    response = await client.post("/api/analyze", json={"imageUrl": "http://x/plan.png"})

    assert response.status_code == 502
    assert response.json() == {"detail": "Analysis failed"}


async def test_analyze_requires_image_url(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/analyze", json={})

    assert response.status_code == 422


async def test_chat_returns_reply_content(client: httpx.AsyncClient, overrides) -> None:
    response = await client.post(
        "/api/chat",
        json={"message": "Where does light fall?", "analysisContext": "ctx"},
    )

    assert response.status_code == 200
    assert response.json() == {"content": "Consider a skylight over the hallway."}
    assert overrides["chat"].calls == [
        {"message": "Where does light fall?", "analysis_context": "ctx"}
    ]


async def test_chat_model_failure_returns_502(client: httpx.AsyncClient, overrides) -> None:
    overrides["chat"].error = GeminiModelError("model unavailable")

    response = await client.post(
        "/api/chat", json={"message": "Hello", "analysisContext": "ctx"}
    )

    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to generate response"}
