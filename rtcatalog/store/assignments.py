"""Review assignment storage (product id -> reviewer), in-memory or a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from rtcatalog.config import get_settings
from rtcatalog.store.models import ReviewAssignment

logger = logging.getLogger(__name__)


class AssignmentStore(Protocol):
    def assign(self, product_id: str, reviewer: str) -> ReviewAssignment: ...
    def get(self, product_id: str) -> ReviewAssignment | None: ...
    def all(self) -> dict[str, ReviewAssignment]: ...


class InMemoryAssignmentStore:
    def __init__(self) -> None:
        self._assignments: dict[str, ReviewAssignment] = {}

    def assign(self, product_id: str, reviewer: str) -> ReviewAssignment:
        assignment = ReviewAssignment(product_id=product_id, reviewer=reviewer)
        self._assignments[product_id] = assignment
        return assignment

    def get(self, product_id: str) -> ReviewAssignment | None:
        return self._assignments.get(product_id)

    def all(self) -> dict[str, ReviewAssignment]:
        return dict(self._assignments)


class FileAssignmentStore:
    """Assignments in <data_dir>/assignments.json. Reassigning overwrites."""

    def __init__(self, data_dir: Path):
        self._path = Path(data_dir) / "assignments.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[str, dict]:
        if not self._path.exists():
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            return json.load(f)

    def assign(self, product_id: str, reviewer: str) -> ReviewAssignment:
        assignment = ReviewAssignment(product_id=product_id, reviewer=reviewer)
        data = self._load()
        data[product_id] = assignment.model_dump(mode="json")
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return assignment

    def get(self, product_id: str) -> ReviewAssignment | None:
        raw = self._load().get(product_id)
        return ReviewAssignment.model_validate(raw) if raw else None

    def all(self) -> dict[str, ReviewAssignment]:
        return {pid: ReviewAssignment.model_validate(a) for pid, a in self._load().items()}


_store: AssignmentStore | None = None


def get_assignment_store() -> AssignmentStore:
    global _store
    if _store is None:
        _store = FileAssignmentStore(get_settings().data_dir)
        logger.info("Using file-based assignment store (RTCAT_DATA_DIR/assignments.json)")
    return _store
