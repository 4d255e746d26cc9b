"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_app_settings,
    get_architect_chat_service,
    get_asset_store,
    get_floorplan_analysis_service,
    get_gemini_client,
)

__all__ = [
    "get_app_settings",
    "get_architect_chat_service",
    "get_asset_store",
    "get_floorplan_analysis_service",
    "get_gemini_client",
]
