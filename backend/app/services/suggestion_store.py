from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from threading import Lock
from typing import Iterator
import uuid

from app.core.exceptions import ResourceNotFoundError
from app.schemas.suggestion import ApprovalUpdate, SchedulePlan, ScheduleSuggestionOut

logger = logging.getLogger(__name__)


@dataclass
class _LockEntry:
    lock: Lock = field(default_factory=Lock)
    holders: int = 0


class GenerationLocks:
    """One lock per (course, semester) so runs on the same snapshot key never race.

    A key's lock lives only while some run holds or waits on it.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], _LockEntry] = {}
        self._guard = Lock()

    @contextmanager
    def hold(self, course_id: str, semester: str) -> Iterator[None]:
        key = (course_id, semester)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _LockEntry()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0 and self._entries.get(key) is entry:
                    del self._entries[key]

    def active_keys(self) -> list[tuple[str, str]]:
        with self._guard:
            return sorted(self._entries)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()


class InMemorySuggestionStore:
    def __init__(self) -> None:
        self._records: dict[str, ScheduleSuggestionOut] = {}
        self._lock = Lock()
        self.generation_locks = GenerationLocks()

    def save(self, plan: SchedulePlan, *, created_by: str | None = None) -> ScheduleSuggestionOut:
        record = ScheduleSuggestionOut(
            id=str(uuid.uuid4()),
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
            plan=plan,
        )
        with self._lock:
            self._records[record.id] = record
        return record

    def get(self, suggestion_id: str) -> ScheduleSuggestionOut:
        with self._lock:
            record = self._records.get(suggestion_id)
        if record is None:
            raise ResourceNotFoundError("Schedule suggestion", suggestion_id)
        return record

    def list_suggestions(
        self,
        *,
        course_id: str | None = None,
        semester: str | None = None,
        approval_status: str | None = None,
    ) -> list[ScheduleSuggestionOut]:
        with self._lock:
            records = list(self._records.values())
        if course_id:
            records = [item for item in records if item.plan.course_id == course_id]
        if semester:
            records = [item for item in records if item.plan.semester == semester]
        if approval_status:
            records = [item for item in records if item.approval_status == approval_status]
        # Insertion order is creation order; newest first.
        return records[::-1]

    def update_approval(self, suggestion_id: str, payload: ApprovalUpdate) -> ScheduleSuggestionOut:
        with self._lock:
            record = self._records.get(suggestion_id)
            if record is None:
                raise ResourceNotFoundError("Schedule suggestion", suggestion_id)
            updated = record.model_copy(
                update={
                    "approval_status": payload.approval_status,
                    "comments": payload.comments or "",
                    "reviewed_by": payload.reviewed_by,
                    "reviewed_at": datetime.now(timezone.utc),
                }
            )
            self._records[suggestion_id] = updated
        logger.info("Schedule suggestion %s | id=%s", payload.approval_status, suggestion_id)
        return updated

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
        self.generation_locks.clear()


_store = InMemorySuggestionStore()


def get_suggestion_store() -> InMemorySuggestionStore:
    return _store
