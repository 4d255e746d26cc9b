"""
Factory functions to provide settings, shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from virtual_architect.clients import GeminiClient, LocalAssetStore
from virtual_architect.core.config import AppSettings, get_settings
from virtual_architect.services import ArchitectChatService, FloorplanAnalysisService


def get_app_settings() -> AppSettings:
    """Settings for route handlers; overridable in tests."""
    return get_settings()


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """Provide Gemini client instance."""
    return GeminiClient(get_settings().gemini)


@lru_cache()
def get_asset_store() -> LocalAssetStore:
    """Provide the local floorplan asset store."""
    storage = get_settings().storage
    return LocalAssetStore(storage.upload_dir, public_base_url=storage.public_base_url)


def get_floorplan_analysis_service() -> FloorplanAnalysisService:
    """Build a floorplan analysis service using Gemini vision."""
    return FloorplanAnalysisService(get_gemini_client(), get_asset_store())


def get_architect_chat_service() -> ArchitectChatService:
    """Build the conversational service using Gemini."""
    return ArchitectChatService(get_gemini_client())


__all__ = [
    "get_app_settings",
    "get_architect_chat_service",
    "get_asset_store",
    "get_floorplan_analysis_service",
    "get_gemini_client",
]
