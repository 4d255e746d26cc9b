"""
FastAPI routes for the Virtual Architect.
"""

from __future__ import annotations

import logging
import mimetypes
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import FileResponse

from virtual_architect.clients.gemini import GeminiModelError
from virtual_architect.dependencies import (
    get_app_settings,
    get_architect_chat_service,
    get_asset_store,
    get_floorplan_analysis_service,
)
from virtual_architect.schemas import (
    AnalyzeRequest,
    ChatReply,
    ChatRequest,
    UploadResponse,
)
from virtual_architect.services import AssetNotFoundError, ImageFetchError

router = APIRouter()
logger = logging.getLogger(__name__)

_READ_CHUNK_BYTES = 1024 * 1024


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=HTTPStatus.CREATED,
)
async def upload_floorplan(
    store: Annotated[Any, Depends(get_asset_store)],
    settings: Annotated[Any, Depends(get_app_settings)],
    file: UploadFile = File(..., description="Floorplan image or PDF."),
) -> UploadResponse:
    """Store an uploaded floorplan and return the URL it can be analyzed from."""
    media_type = _resolve_media_type(file)
    allowed = settings.storage.allowed_media_types
    if media_type not in allowed:
        logger.warning("Rejected upload %s with media type %s", file.filename, media_type)
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Unsupported file type. Allowed types: {', '.join(allowed)}",
        )

    max_bytes = settings.storage.max_upload_bytes
    content = bytearray()
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        content.extend(chunk)
        if len(content) > max_bytes:
            logger.warning("Rejected upload %s: larger than %d bytes", file.filename, max_bytes)
            raise HTTPException(
                status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum size is {settings.storage.max_upload_size_mb}MB.",
            )

    if not content:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Uploaded file is empty.")

    asset = await store.save(
        content=bytes(content),
        media_type=media_type,
        original_name=file.filename,
    )
    return UploadResponse(
        image_url=asset.url,
        filename=asset.name,
        media_type=asset.media_type,
        size_bytes=asset.size_bytes,
    )


@router.get("/assets/{name}", status_code=HTTPStatus.OK)
async def get_asset(
    name: str,
    store: Annotated[Any, Depends(get_asset_store)],
) -> FileResponse:
    """Serve a stored floorplan."""
    path = store.path_for(name)
    if path is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Asset not found.")
    return FileResponse(str(path), media_type=store.media_type_for(name))


@router.delete("/assets/{name}", status_code=HTTPStatus.NO_CONTENT)
async def delete_asset(
    name: str,
    store: Annotated[Any, Depends(get_asset_store)],
) -> Response:
    """Discard a stored floorplan, e.g. after its analysis failed."""
    if not await store.delete(name):
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Asset not found.")
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/analyze", status_code=HTTPStatus.OK)
async def analyze_floorplan(
    payload: AnalyzeRequest,
    service: Annotated[Any, Depends(get_floorplan_analysis_service)],
) -> Any:
    """Score a floorplan; the model's JSON is returned as-is for the caller to validate."""
    try:
        return await service.analyze(payload.image_url)
    except AssetNotFoundError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc)) from exc
    except (ImageFetchError, GeminiModelError) as exc:
        logger.error("Analysis failed for %s: %s", payload.image_url, exc)
        raise HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY, detail="Analysis failed"
        ) from exc


@router.post("/chat", response_model=ChatReply, status_code=HTTPStatus.OK)
async def chat_turn(
    payload: ChatRequest,
    service: Annotated[Any, Depends(get_architect_chat_service)],
) -> ChatReply:
    """Answer one question about the analyzed floorplan."""
    try:
        content = await service.reply(
            message=payload.message,
            analysis_context=payload.analysis_context,
        )
    except GeminiModelError as exc:
        logger.error("Chat error: %s", exc)
        raise HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY, detail="Failed to generate response"
        ) from exc
    return ChatReply(content=content)


def _resolve_media_type(file: UploadFile) -> str:
    declared = (file.content_type or "").split(";")[0].strip().lower()
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(file.filename or "")
    return guessed or "application/octet-stream"


__all__ = ["router"]
