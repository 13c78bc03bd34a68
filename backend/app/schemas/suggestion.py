from __future__ import annotations

import re
from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

Shift = Literal["Morning", "Afternoon", "Evening"]
Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
ApprovalStatus = Literal["pending", "approved", "rejected", "modified"]
ReviewDecision = Literal["approved", "rejected", "modified"]

SEMESTER_PATTERN = r"^\d{4}/[12]$"
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def _dedupe(values: list[str]) -> list[str]:
    # Keep first occurrence; order drives tie-breaks downstream.
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


class SubjectMeta(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    credits: int = Field(default=4, ge=0, le=40)
    campus: str = Field(min_length=1, max_length=100)
    is_active: bool = True


class StudentInterest(BaseModel):
    student_id: str = Field(min_length=1, max_length=64)
    subject_id: str = Field(min_length=1, max_length=64)
    semester: str = Field(pattern=SEMESTER_PATTERN)
    preferred_shifts: list[Shift] = Field(min_length=1)
    preferred_days: list[Weekday] = Field(default_factory=list)
    priority: int = Field(default=1, ge=1, le=8)

    @field_validator("preferred_shifts", "preferred_days")
    @classmethod
    def dedupe_preferences(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class WillingToTeach(BaseModel):
    willing: Literal[True]
    available_shifts: list[Shift] = Field(min_length=1)
    available_days: list[Weekday] = Field(min_length=1)
    priority: int = Field(default=5, ge=1, le=10)
    comments: str | None = Field(default=None, max_length=500)

    @field_validator("available_shifts", "available_days")
    @classmethod
    def dedupe_availability(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class NotWillingToTeach(BaseModel):
    willing: Literal[False]
    reason: str | None = Field(default=None, max_length=500)


class ProfessorAvailability(BaseModel):
    professor_id: str = Field(min_length=1, max_length=64)
    subject_id: str = Field(min_length=1, max_length=64)
    semester: str = Field(pattern=SEMESTER_PATTERN)
    response: Union[WillingToTeach, NotWillingToTeach]

    @property
    def is_willing(self) -> bool:
        return isinstance(self.response, WillingToTeach)


class ShiftWindow(BaseModel):
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value

    @model_validator(mode="after")
    def validate_time_order(self) -> "ShiftWindow":
        if parse_time_to_minutes(self.end_time) <= parse_time_to_minutes(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


DEFAULT_SHIFT_WINDOWS: dict[str, ShiftWindow] = {
    "Morning": ShiftWindow(start_time="08:00", end_time="11:30"),
    "Afternoon": ShiftWindow(start_time="13:30", end_time="17:00"),
    "Evening": ShiftWindow(start_time="19:00", end_time="22:30"),
}


class GenerationConstraints(BaseModel):
    min_demand_threshold: int | None = Field(default=None, ge=1, le=10_000)
    max_professor_load: int | None = Field(default=None, ge=1, le=1_000)
    shift_windows: dict[Shift, ShiftWindow] | None = None


class ResolvedConstraints(BaseModel):
    model_config = {"frozen": True}

    min_demand_threshold: int
    max_professor_load: int


class ScheduleItem(BaseModel):
    model_config = {"frozen": True}

    subject_id: str
    professor_id: str
    day: Weekday
    shift: Shift
    start_time: str
    end_time: str
    campus: str
    estimated_enrollment: int = Field(ge=0)


class PlanMetadata(BaseModel):
    model_config = {"frozen": True}

    student_interests_count: int = Field(ge=0)
    professor_availability_count: int = Field(ge=0)
    viable_subjects_count: int = Field(ge=0)
    generation_algorithm: str = "greedy"
    score: int = Field(ge=0, le=100)
    constraints: ResolvedConstraints
    unmatched_subject_ids: tuple[str, ...] = ()
    unplaced_subject_ids: tuple[str, ...] = ()


class SchedulePlan(BaseModel):
    model_config = {"frozen": True}

    course_id: str
    semester: str
    items: tuple[ScheduleItem, ...]
    metadata: PlanMetadata


class GenerateSuggestionRequest(BaseModel):
    course_id: str = Field(min_length=1, max_length=64)
    semester: str = Field(pattern=SEMESTER_PATTERN)
    created_by: str | None = Field(default=None, max_length=64)
    student_interests: list[StudentInterest] = Field(default_factory=list)
    professor_availabilities: list[ProfessorAvailability] = Field(default_factory=list)
    subjects: list[SubjectMeta] = Field(default_factory=list)
    constraints: GenerationConstraints | None = None


class ScheduleSuggestionOut(BaseModel):
    id: str
    created_by: str | None = None
    created_at: datetime
    plan: SchedulePlan
    approval_status: ApprovalStatus = "pending"
    comments: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None


class ApprovalUpdate(BaseModel):
    approval_status: ReviewDecision
    comments: str | None = Field(default=None, max_length=2000)
    reviewed_by: str | None = Field(default=None, max_length=64)
