"""Collects the floorplan a user picked or dropped, with an async preview."""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A user-selected file awaiting submission."""

    filename: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def size_label(self) -> str:
        return f"{self.size / (1024 * 1024):.2f} MB"

    @classmethod
    def from_path(cls, path: Path | str, media_type: str | None = None) -> "UploadedFile":
        file_path = Path(path)
        guessed, _ = mimetypes.guess_type(file_path.name)
        return cls(
            filename=file_path.name,
            content=file_path.read_bytes(),
            media_type=media_type or guessed or "application/octet-stream",
        )


def encode_preview(file: UploadedFile) -> str:
    """Return a ``data:`` URL rendering of ``file``."""
    encoded = base64.b64encode(file.content).decode("ascii")
    return f"data:{file.media_type};base64,{encoded}"


class UploadCollector:
    """Holds at most one selected file plus its preview and upload progress.

    Must be driven from a running event loop: previews are decoded in a worker
    thread so selection never blocks.
    """

    def __init__(self) -> None:
        self.file: UploadedFile | None = None
        self.preview: str | None = None
        self.progress: int = 0
        self._preview_task: asyncio.Task[None] | None = None

    def select(self, files: Sequence[UploadedFile]) -> bool:
        """Handle a file-picker selection; only the first file is kept."""
        return self._accept(files)

    def drop(self, files: Sequence[UploadedFile]) -> bool:
        """Handle files dropped onto the upload area."""
        return self._accept(files)

    def clear(self) -> None:
        """Forget the current file and preview and reset progress."""
        self._cancel_preview()
        self.file = None
        self.preview = None
        self.progress = 0

    async def wait_for_preview(self) -> str | None:
        """Wait until the pending preview (if any) is published."""
        task = self._preview_task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self.preview

    def _accept(self, files: Sequence[UploadedFile]) -> bool:
        if not files:
            return False
        selected = files[0]
        self._cancel_preview()
        self.file = selected
        self.preview = None
        self._preview_task = asyncio.get_running_loop().create_task(
            self._decode_preview(selected)
        )
        logger.debug("Selected %s (%s)", selected.filename, selected.size_label)
        return True

    async def _decode_preview(self, file: UploadedFile) -> None:
        preview = await asyncio.to_thread(encode_preview, file)
        # A replaced or cleared selection must not receive a stale preview.
        if self.file is file:
            self.preview = preview

    def _cancel_preview(self) -> None:
        if self._preview_task is not None and not self._preview_task.done():
            self._preview_task.cancel()
        self._preview_task = None


__all__ = ["UploadCollector", "UploadedFile", "encode_preview"]
