from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Mapping

from app.schemas.suggestion import SubjectMeta
from app.services.interest_aggregator import DemandRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViableSubject:
    subject: SubjectMeta
    demand: DemandRecord

    @property
    def subject_id(self) -> str:
        return self.subject.id

    @property
    def demand_count(self) -> int:
        return self.demand.count


def filter_viable(
    demand: Mapping[str, DemandRecord],
    subjects_by_id: Mapping[str, SubjectMeta],
    min_demand: int = 10,
) -> list[ViableSubject]:
    """Subjects meeting ``min_demand`` that also have metadata, sorted by subject id."""
    viable: list[ViableSubject] = []
    for subject_id in sorted(demand):
        record = demand[subject_id]
        if record.count < min_demand:
            continue
        subject = subjects_by_id.get(subject_id)
        if subject is None:
            logger.warning(
                "Excluding demand for unknown subject | subject_id=%s interests=%s",
                subject_id,
                record.count,
            )
            continue
        viable.append(ViableSubject(subject=subject, demand=record))
    return viable
