# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from organizer.core.ports import BlobStore


@dataclass(slots=True)
class FakeBlobStore(BlobStore):
    """
    In-memory BlobStore used by file tree tests.

    - put() hands out sequential refs without copying anything
    - release() records refs so tests can assert the release obligation
    """

    stored: dict[str, Path] = field(default_factory=dict)
    released: list[str] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    puts: int = 0

    def put(self, src: Path) -> str:
        src = Path(src)
        if src.name in self.fail_on:
            raise FileNotFoundError(f"not a file: {src}")
        ref = f"blob-{self.puts}"
        self.puts += 1
        self.stored[ref] = src
        return ref

    def release(self, content_ref: str) -> None:
        self.stored.pop(content_ref, None)
        self.released.append(content_ref)

    def open_path(self, content_ref: str) -> Path | None:
        return self.stored.get(content_ref)
