# src/organizer/storage/blob_store.py

from __future__ import annotations

import contextlib
import logging
import shutil
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


class DirectoryBlobStore:
    """
    Copies uploaded files under a local directory and hands out opaque refs.

    A ref is the blob's file name inside root; release() deletes it.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    def put(self, src: Path) -> str:
        src = Path(src)
        if not src.is_file():
            raise FileNotFoundError(f"not a file: {src}")
        ref = f"{uuid.uuid4().hex}{src.suffix}"
        shutil.copyfile(src, self._root / ref)
        logger.debug("blob stored ref=%s src=%s", ref, src)
        return ref

    def open_path(self, content_ref: str) -> Path | None:
        if not content_ref:
            return None
        path = self._root / Path(content_ref).name
        return path if path.is_file() else None

    def release(self, content_ref: str) -> None:
        path = self.open_path(content_ref)
        if path is None:
            logger.debug("blob release: ref=%s already gone", content_ref)
            return
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
        logger.debug("blob released ref=%s", content_ref)
