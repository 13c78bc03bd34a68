from __future__ import annotations

from enum import Enum
import logging
from time import perf_counter
from typing import Sequence

from app.core.config import Settings, get_settings
from app.core.exceptions import InsufficientDemand, InsufficientInputData, SchedulerError
from app.schemas.suggestion import (
    DEFAULT_SHIFT_WINDOWS,
    GenerationConstraints,
    PlanMetadata,
    ProfessorAvailability,
    ResolvedConstraints,
    SchedulePlan,
    StudentInterest,
    SubjectMeta,
)
from app.services.interest_aggregator import aggregate_interests
from app.services.plan_scorer import score_plan
from app.services.professor_matcher import match_professors
from app.services.slot_selector import OccupancyLedger, assign_slots
from app.services.viability import filter_viable

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    fetching = "fetching"
    aggregating = "aggregating"
    filtering = "filtering"
    matching = "matching"
    slot_selecting = "slot_selecting"
    scoring = "scoring"
    complete = "complete"
    failed = "failed"


_NEXT_STATE = {
    GenerationState.fetching: GenerationState.aggregating,
    GenerationState.aggregating: GenerationState.filtering,
    GenerationState.filtering: GenerationState.matching,
    GenerationState.matching: GenerationState.slot_selecting,
    GenerationState.slot_selecting: GenerationState.scoring,
    GenerationState.scoring: GenerationState.complete,
}


class ScheduleSuggestionEngine:
    """One single-pass generation run for a (course, semester) snapshot.

    The instance owns the per-run load and occupancy ledgers, so it is used
    for exactly one ``run`` call. Concurrent runs for the same course and
    semester must be serialized by the caller.
    """

    def __init__(
        self,
        *,
        course_id: str,
        semester: str,
        constraints: GenerationConstraints | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        constraints = constraints or GenerationConstraints()
        self.course_id = course_id
        self.semester = semester
        self.min_demand = constraints.min_demand_threshold or settings.min_demand_threshold
        self.max_load = constraints.max_professor_load or settings.max_professor_load
        self.shift_windows = {**DEFAULT_SHIFT_WINDOWS, **(constraints.shift_windows or {})}
        self.state = GenerationState.fetching
        self.history: list[GenerationState] = [self.state]

    def _advance(self) -> None:
        self.state = _NEXT_STATE[self.state]
        self.history.append(self.state)

    def _fail(self, error: SchedulerError) -> SchedulerError:
        logger.warning(
            "Schedule suggestion failed | course_id=%s semester=%s state=%s reason=%s",
            self.course_id,
            self.semester,
            self.state.value,
            error.message,
        )
        self.state = GenerationState.failed
        self.history.append(self.state)
        return error

    def run(
        self,
        interests: Sequence[StudentInterest],
        availabilities: Sequence[ProfessorAvailability],
        subjects: Sequence[SubjectMeta],
    ) -> SchedulePlan:
        if self.state is not GenerationState.fetching:
            raise SchedulerError(
                "Generation run already executed; create a new engine to regenerate",
                details={"state": self.state.value},
            )
        started = perf_counter()
        logger.info(
            "Generating schedule suggestion | course_id=%s semester=%s", self.course_id, self.semester
        )

        interests = [record for record in interests if record.semester == self.semester]
        availabilities = [
            record
            for record in availabilities
            if record.semester == self.semester and record.is_willing
        ]
        subjects_by_id = {subject.id: subject for subject in subjects if subject.is_active}
        if not interests or not availabilities:
            raise self._fail(
                InsufficientInputData(
                    self.course_id,
                    self.semester,
                    interests=len(interests),
                    availabilities=len(availabilities),
                )
            )

        self._advance()
        demand = aggregate_interests(interests)

        self._advance()
        viable = filter_viable(demand, subjects_by_id, self.min_demand)
        if not viable:
            raise self._fail(InsufficientDemand(self.course_id, self.semester, min_demand=self.min_demand))

        self._advance()
        matched = match_professors(viable, availabilities, self.max_load)

        self._advance()
        items, unplaced = assign_slots(matched.matches, OccupancyLedger(), self.shift_windows)

        self._advance()
        score = score_plan(items, interests)
        plan = SchedulePlan(
            course_id=self.course_id,
            semester=self.semester,
            items=tuple(items),
            metadata=PlanMetadata(
                student_interests_count=len(interests),
                professor_availability_count=len(availabilities),
                viable_subjects_count=len(viable),
                score=score,
                constraints=ResolvedConstraints(
                    min_demand_threshold=self.min_demand,
                    max_professor_load=self.max_load,
                ),
                unmatched_subject_ids=tuple(matched.unmatched_subject_ids),
                unplaced_subject_ids=tuple(unplaced),
            ),
        )

        self._advance()
        logger.info(
            "Schedule suggestion generated | course_id=%s semester=%s viable=%s scheduled=%s score=%s elapsed_ms=%.1f",
            self.course_id,
            self.semester,
            len(viable),
            len(items),
            score,
            (perf_counter() - started) * 1000,
        )
        return plan


def generate_schedule_plan(
    *,
    course_id: str,
    semester: str,
    interests: Sequence[StudentInterest],
    availabilities: Sequence[ProfessorAvailability],
    subjects: Sequence[SubjectMeta],
    constraints: GenerationConstraints | None = None,
    settings: Settings | None = None,
) -> SchedulePlan:
    engine = ScheduleSuggestionEngine(
        course_id=course_id,
        semester=semester,
        constraints=constraints,
        settings=settings,
    )
    return engine.run(interests, availabilities, subjects)
