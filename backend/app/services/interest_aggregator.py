from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from app.schemas.suggestion import StudentInterest


@dataclass
class DemandRecord:
    """Aggregated demand for one subject.

    A single interest can add to several shift and day buckets at once; the
    histograms are preference tallies, not single-choice votes.
    """

    subject_id: str
    count: int = 0
    shift_preferences: Counter[str] = field(default_factory=Counter)
    day_preferences: Counter[str] = field(default_factory=Counter)


def aggregate_interests(interests: Iterable[StudentInterest]) -> dict[str, DemandRecord]:
    demand: dict[str, DemandRecord] = {}
    for interest in interests:
        record = demand.get(interest.subject_id)
        if record is None:
            record = DemandRecord(subject_id=interest.subject_id)
            demand[interest.subject_id] = record
        record.count += 1
        for shift in interest.preferred_shifts:
            record.shift_preferences[shift] += 1
        for day in interest.preferred_days:
            record.day_preferences[day] += 1
    return demand
