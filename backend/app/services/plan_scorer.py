from __future__ import annotations

from collections import Counter, defaultdict
import math
from typing import Sequence

from app.schemas.suggestion import ScheduleItem, StudentInterest

BASE_SCORE = 70
COVERAGE_WEIGHT = 15
BALANCE_WEIGHT = 10
BALANCE_STDDEV_FACTOR = 2
SATISFACTION_WEIGHT = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _population_stddev(values: Sequence[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def coverage_ratio(items: Sequence[ScheduleItem], interests: Sequence[StudentInterest]) -> float:
    requested = {interest.subject_id for interest in interests}
    if not requested:
        return 0.0
    scheduled = {item.subject_id for item in items}
    return len(scheduled & requested) / len(requested)


def satisfaction_rate(items: Sequence[ScheduleItem], interests: Sequence[StudentInterest]) -> float | None:
    """Share of interests in scheduled subjects whose preferred shifts include the scheduled one.

    ``None`` when no interest refers to a scheduled subject.
    """
    shifts_by_subject: dict[str, set[str]] = defaultdict(set)
    for item in items:
        shifts_by_subject[item.subject_id].add(item.shift)

    total = 0
    satisfied = 0
    for interest in interests:
        scheduled_shifts = shifts_by_subject.get(interest.subject_id)
        if scheduled_shifts is None:
            continue
        total += 1
        if scheduled_shifts.intersection(interest.preferred_shifts):
            satisfied += 1
    if total == 0:
        return None
    return satisfied / total


def score_plan(items: Sequence[ScheduleItem], interests: Sequence[StudentInterest]) -> int:
    score = BASE_SCORE
    score += _round_half_up(coverage_ratio(items, interests) * COVERAGE_WEIGHT)

    if items:
        per_professor = Counter(item.professor_id for item in items)
        stddev = _population_stddev(list(per_professor.values()))
        score += _round_half_up(max(0.0, BALANCE_WEIGHT - BALANCE_STDDEV_FACTOR * stddev))

    rate = satisfaction_rate(items, interests)
    if rate is not None:
        score += _round_half_up(rate * SATISFACTION_WEIGHT)

    return min(100, max(0, score))
