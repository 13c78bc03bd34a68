from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Mapping, Sequence

from app.core.exceptions import ConfigurationError
from app.schemas.suggestion import DEFAULT_SHIFT_WINDOWS, ScheduleItem, ShiftWindow
from app.services.interest_aggregator import DemandRecord
from app.services.professor_matcher import ProfessorSubjectMatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotChoice:
    day: str
    shift: str


class OccupancyLedger:
    """Per-professor (day, shift) pairs already claimed within one generation run."""

    def __init__(self) -> None:
        self._taken: dict[str, set[tuple[str, str]]] = defaultdict(set)

    def is_free(self, professor_id: str, day: str, shift: str) -> bool:
        return (day, shift) not in self._taken.get(professor_id, ())

    def claim(self, professor_id: str, day: str, shift: str) -> None:
        slot = (day, shift)
        if slot in self._taken[professor_id]:
            raise ValueError(f"Slot {day}/{shift} already taken for professor {professor_id}")
        self._taken[professor_id].add(slot)

    def slots_for(self, professor_id: str) -> frozenset[tuple[str, str]]:
        return frozenset(self._taken.get(professor_id, ()))


def shift_times(shift: str, windows: Mapping[str, ShiftWindow] | None = None) -> tuple[str, str]:
    table = windows if windows is not None else DEFAULT_SHIFT_WINDOWS
    window = table.get(shift)
    if window is None:
        raise ConfigurationError(f"No time window configured for shift {shift!r}")
    return window.start_time, window.end_time


def select_slot(
    match: ProfessorSubjectMatch,
    demand: DemandRecord,
    occupied: OccupancyLedger,
) -> SlotChoice | None:
    availability = match.availability

    # max() keeps the first maximal element, i.e. the professor's declared order.
    optimal_shift = max(
        availability.available_shifts,
        key=lambda shift: demand.shift_preferences.get(shift, 0),
    )

    free_days = [
        day
        for day in availability.available_days
        if occupied.is_free(match.professor_id, day, optimal_shift)
    ]
    if not free_days:
        return None

    preferred_free = [day for day in free_days if demand.day_preferences.get(day, 0) > 0]
    if preferred_free:
        optimal_day = max(preferred_free, key=lambda day: demand.day_preferences[day])
    else:
        optimal_day = free_days[0]
    return SlotChoice(day=optimal_day, shift=optimal_shift)


def assign_slots(
    matches: Sequence[ProfessorSubjectMatch],
    occupied: OccupancyLedger,
    shift_windows: Mapping[str, ShiftWindow] | None = None,
) -> tuple[list[ScheduleItem], list[str]]:
    """Place each match in order, claiming slots as they are chosen.

    Returns the schedule items and the ids of subjects that found no free slot.
    """
    items: list[ScheduleItem] = []
    unplaced: list[str] = []
    for match in matches:
        viable_subject = match.viable_subject
        choice = select_slot(match, viable_subject.demand, occupied)
        if choice is None:
            logger.debug(
                "No free slot | subject_id=%s professor_id=%s",
                viable_subject.subject_id,
                match.professor_id,
            )
            unplaced.append(viable_subject.subject_id)
            continue

        start_time, end_time = shift_times(choice.shift, shift_windows)
        occupied.claim(match.professor_id, choice.day, choice.shift)
        items.append(
            ScheduleItem(
                subject_id=viable_subject.subject_id,
                professor_id=match.professor_id,
                day=choice.day,
                shift=choice.shift,
                start_time=start_time,
                end_time=end_time,
                campus=viable_subject.subject.campus,
                estimated_enrollment=viable_subject.demand_count,
            )
        )
    return items, unplaced
