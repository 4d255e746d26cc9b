"""Expose constructed client wrappers."""

from .architect_api import ArchitectApiClient
from .asset_store import LocalAssetStore, StoredAsset
from .gemini import GeminiClient

__all__ = [
    "ArchitectApiClient",
    "GeminiClient",
    "LocalAssetStore",
    "StoredAsset",
]
