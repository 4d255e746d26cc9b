"""Local filesystem storage for uploaded floorplans."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ASSET_ROUTE = "/api/assets"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "application/pdf": ".pdf",
}
_ASSET_NAME = re.compile(r"^[0-9a-f]{32}\.[a-z0-9]{1,5}$")


@dataclass(frozen=True, slots=True)
class StoredAsset:
    """Metadata describing a floorplan held by the store."""

    name: str
    media_type: str
    size_bytes: int
    url: str


class LocalAssetStore:
    """Persist uploads under a directory and address them by public URL."""

    def __init__(self, root: Path | str, public_base_url: str) -> None:
        self._root = Path(root)
        self._public_base_url = public_base_url.rstrip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    async def save(
        self,
        *,
        content: bytes,
        media_type: str,
        original_name: str | None = None,
    ) -> StoredAsset:
        """Write ``content`` under a fresh random name and return its reference."""
        extension = _EXTENSIONS.get(media_type) or _extension_from_name(original_name)
        name = f"{uuid.uuid4().hex}{extension}"
        path = self._root / name

        await asyncio.to_thread(path.write_bytes, content)
        logger.info("Stored asset %s (%d bytes, %s)", name, len(content), media_type)
        return StoredAsset(
            name=name,
            media_type=media_type,
            size_bytes=len(content),
            url=self.asset_url(name),
        )

    def asset_url(self, name: str) -> str:
        return f"{self._public_base_url}{ASSET_ROUTE}/{name}"

    def name_from_url(self, url: str) -> str | None:
        """Return the asset name when ``url`` points into this store."""
        prefix = f"{self._public_base_url}{ASSET_ROUTE}/"
        if url.startswith(prefix):
            candidate = url[len(prefix):]
        elif url.startswith(f"{ASSET_ROUTE}/"):
            candidate = url[len(ASSET_ROUTE) + 1:]
        else:
            return None
        return candidate if _ASSET_NAME.match(candidate) else None

    def path_for(self, name: str) -> Path | None:
        """Resolve a stored asset path, rejecting names this store never issues."""
        if not _ASSET_NAME.match(name):
            return None
        path = self._root / name
        return path if path.is_file() else None

    def media_type_for(self, name: str) -> str:
        guessed, _ = mimetypes.guess_type(name)
        return guessed or "application/octet-stream"

    async def read(self, name: str) -> bytes | None:
        path = self.path_for(name)
        if path is None:
            return None
        return await asyncio.to_thread(path.read_bytes)

    async def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if path is None:
            return False
        await asyncio.to_thread(path.unlink)
        logger.info("Discarded asset %s", name)
        return True


def _extension_from_name(filename: str | None) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if re.fullmatch(r"\.[a-z0-9]{1,5}", suffix) else ".bin"


__all__ = ["ASSET_ROUTE", "LocalAssetStore", "StoredAsset"]
