"""Product comment storage: in-memory or a single JSON file."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Protocol

from rtcatalog.config import get_settings
from rtcatalog.store.models import ProductComment

logger = logging.getLogger(__name__)


class CommentStore(Protocol):
    def add(self, product_id: str, text: str, author: str = "anonymous") -> ProductComment: ...
    def list_for(self, product_id: str) -> list[ProductComment]: ...


def _new_comment(product_id: str, text: str, author: str) -> ProductComment:
    return ProductComment(
        comment_id=f"cmt_{uuid.uuid4().hex[:12]}",
        product_id=product_id,
        author=author,
        text=text,
    )


class InMemoryCommentStore:
    def __init__(self) -> None:
        self._comments: dict[str, list[ProductComment]] = {}

    def add(self, product_id: str, text: str, author: str = "anonymous") -> ProductComment:
        comment = _new_comment(product_id, text, author)
        self._comments.setdefault(product_id, []).append(comment)
        return comment

    def list_for(self, product_id: str) -> list[ProductComment]:
        return list(self._comments.get(product_id, []))


class FileCommentStore:
    """All comments in <data_dir>/comments.json, keyed by product id."""

    def __init__(self, data_dir: Path):
        self._path = Path(data_dir) / "comments.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[str, list[dict]]:
        if not self._path.exists():
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data: dict[str, list[dict]]) -> None:
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

    def add(self, product_id: str, text: str, author: str = "anonymous") -> ProductComment:
        comment = _new_comment(product_id, text, author)
        data = self._load()
        data.setdefault(product_id, []).append(comment.model_dump(mode="json"))
        self._save(data)
        return comment

    def list_for(self, product_id: str) -> list[ProductComment]:
        return [ProductComment.model_validate(c) for c in self._load().get(product_id, [])]


_store: CommentStore | None = None


def get_comment_store() -> CommentStore:
    """Return the singleton file-backed comment store under RTCAT_DATA_DIR."""
    global _store
    if _store is None:
        _store = FileCommentStore(get_settings().data_dir)
        logger.info("Using file-based comment store (RTCAT_DATA_DIR/comments.json)")
    return _store
