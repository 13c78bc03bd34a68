import logging

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_engine_settings, get_store
from app.core.config import Settings
from app.schemas.suggestion import (
    ApprovalStatus,
    ApprovalUpdate,
    GenerateSuggestionRequest,
    ScheduleSuggestionOut,
)
from app.services.suggestion_engine import generate_schedule_plan
from app.services.suggestion_store import InMemorySuggestionStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=ScheduleSuggestionOut, status_code=status.HTTP_201_CREATED)
def create_schedule_suggestion(
    payload: GenerateSuggestionRequest,
    store: InMemorySuggestionStore = Depends(get_store),
    settings: Settings = Depends(get_engine_settings),
) -> ScheduleSuggestionOut:
    with store.generation_locks.hold(payload.course_id, payload.semester):
        plan = generate_schedule_plan(
            course_id=payload.course_id,
            semester=payload.semester,
            interests=payload.student_interests,
            availabilities=payload.professor_availabilities,
            subjects=payload.subjects,
            constraints=payload.constraints,
            settings=settings,
        )
        record = store.save(plan, created_by=payload.created_by)
    logger.info(
        "Stored schedule suggestion | id=%s course_id=%s semester=%s items=%s",
        record.id,
        payload.course_id,
        payload.semester,
        len(plan.items),
    )
    return record


@router.get("/", response_model=list[ScheduleSuggestionOut])
def list_schedule_suggestions(
    course_id: str | None = Query(default=None),
    semester: str | None = Query(default=None),
    approval_status: ApprovalStatus | None = Query(default=None, alias="status"),
    store: InMemorySuggestionStore = Depends(get_store),
) -> list[ScheduleSuggestionOut]:
    return store.list_suggestions(course_id=course_id, semester=semester, approval_status=approval_status)


@router.get("/{suggestion_id}", response_model=ScheduleSuggestionOut)
def get_schedule_suggestion(
    suggestion_id: str,
    store: InMemorySuggestionStore = Depends(get_store),
) -> ScheduleSuggestionOut:
    return store.get(suggestion_id)


@router.patch("/{suggestion_id}/approval", response_model=ScheduleSuggestionOut)
def update_schedule_approval(
    suggestion_id: str,
    payload: ApprovalUpdate,
    store: InMemorySuggestionStore = Depends(get_store),
) -> ScheduleSuggestionOut:
    return store.update_approval(suggestion_id, payload)
