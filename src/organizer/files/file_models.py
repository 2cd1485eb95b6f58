# src/organizer/files/file_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FolderRecord:
    id: str
    name: str
    parent_id: str | None = None
    type: Literal["folder"] = "folder"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type, "parentId": self.parent_id}


@dataclass(frozen=True, slots=True)
class FileRecord:
    id: str
    name: str
    parent_id: str | None = None
    date: str = ""
    content_ref: str | None = None
    type: Literal["file"] = "file"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "parentId": self.parent_id,
            "date": self.date,
            "contentRef": self.content_ref,
        }


Item = Union[FileRecord, FolderRecord]


def record_from_dict(raw: Any) -> Item | None:
    """Validate one persisted file/folder record; None if unusable."""
    if not isinstance(raw, dict):
        logger.warning("Dropping non-object file record: %r", raw)
        return None

    item_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(item_id, str) or not item_id or not isinstance(name, str):
        logger.warning("Dropping file record without id/name: %r", raw)
        return None

    parent = raw.get("parentId")
    parent_id = parent if isinstance(parent, str) and parent else None

    kind = raw.get("type")
    if kind == "folder":
        return FolderRecord(id=item_id, name=name, parent_id=parent_id)
    if kind == "file":
        ref = raw.get("contentRef")
        return FileRecord(
            id=item_id,
            name=name,
            parent_id=parent_id,
            date=str(raw.get("date") or ""),
            content_ref=ref if isinstance(ref, str) and ref else None,
        )

    logger.warning("Dropping file record with unknown type %r", kind)
    return None
