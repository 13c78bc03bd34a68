from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from app.schemas.suggestion import ProfessorAvailability, WillingToTeach
from app.services.viability import ViableSubject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfessorSubjectMatch:
    viable_subject: ViableSubject
    professor_id: str
    availability: WillingToTeach


@dataclass
class MatchResult:
    matches: list[ProfessorSubjectMatch]
    unmatched_subject_ids: list[str]
    load: dict[str, int]


def match_professors(
    viable: Sequence[ViableSubject],
    availabilities: Sequence[ProfessorAvailability],
    max_load: int = 10,
) -> MatchResult:
    """Greedy single-pass assignment of one professor per viable subject.

    Subjects are visited by ascending id. Among willing candidates under
    ``max_load`` the least-loaded wins; ties go to the candidate that comes
    first in ``availabilities``. No backtracking.
    """
    load: dict[str, int] = {}
    for record in availabilities:
        load.setdefault(record.professor_id, 0)

    matches: list[ProfessorSubjectMatch] = []
    unmatched: list[str] = []
    for viable_subject in sorted(viable, key=lambda item: item.subject_id):
        candidates = [
            record
            for record in availabilities
            if record.subject_id == viable_subject.subject_id
            and isinstance(record.response, WillingToTeach)
            and load[record.professor_id] < max_load
        ]
        if not candidates:
            logger.debug("No professor available | subject_id=%s", viable_subject.subject_id)
            unmatched.append(viable_subject.subject_id)
            continue

        # min() keeps the first of equal keys, which gives the input-order tie-break.
        chosen = min(candidates, key=lambda record: load[record.professor_id])
        load[chosen.professor_id] += 1
        matches.append(
            ProfessorSubjectMatch(
                viable_subject=viable_subject,
                professor_id=chosen.professor_id,
                availability=chosen.response,
            )
        )
    return MatchResult(matches=matches, unmatched_subject_ids=unmatched, load=load)
