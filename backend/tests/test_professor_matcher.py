from app.schemas.suggestion import NotWillingToTeach, ProfessorAvailability, SubjectMeta, WillingToTeach
from app.services.interest_aggregator import DemandRecord
from app.services.professor_matcher import match_professors
from app.services.viability import ViableSubject


def viable(subject_id, count=12):
    return ViableSubject(
        subject=SubjectMeta(id=subject_id, name=subject_id, code=subject_id.upper(), campus="Online"),
        demand=DemandRecord(subject_id=subject_id, count=count),
    )


def willing(professor_id, subject_id, shifts=("Morning",), days=("Monday",)):
    return ProfessorAvailability(
        professor_id=professor_id,
        subject_id=subject_id,
        semester="2025/1",
        response=WillingToTeach(willing=True, available_shifts=list(shifts), available_days=list(days)),
    )


def not_willing(professor_id, subject_id):
    return ProfessorAvailability(
        professor_id=professor_id,
        subject_id=subject_id,
        semester="2025/1",
        response=NotWillingToTeach(willing=False, reason="Sabbatical"),
    )


def pairs(result):
    return [(match.viable_subject.subject_id, match.professor_id) for match in result.matches]


def test_least_loaded_professor_wins_with_input_order_tie_break():
    availabilities = [
        willing("p1", "a"),
        willing("p2", "a"),
        willing("p1", "b"),
        willing("p2", "b"),
        willing("p1", "c"),
    ]
    result = match_professors([viable("a"), viable("b"), viable("c")], availabilities)
    assert pairs(result) == [("a", "p1"), ("b", "p2"), ("c", "p1")]
    assert result.load == {"p1": 2, "p2": 1}


def test_tie_goes_to_first_candidate_in_input_order():
    result = match_professors([viable("a")], [willing("p2", "a"), willing("p1", "a")])
    assert pairs(result) == [("a", "p2")]


def test_subjects_processed_by_ascending_id():
    availabilities = [willing("p1", "b"), willing("p1", "a")]
    result = match_professors([viable("b"), viable("a")], availabilities, max_load=1)
    assert pairs(result) == [("a", "p1")]
    assert result.unmatched_subject_ids == ["b"]


def test_not_willing_records_are_never_matched():
    result = match_professors([viable("a")], [not_willing("p1", "a"), willing("p2", "a")])
    assert pairs(result) == [("a", "p2")]
    assert result.load == {"p1": 0, "p2": 1}


def test_subject_without_candidates_is_skipped():
    result = match_professors([viable("a"), viable("b")], [willing("p1", "a")])
    assert pairs(result) == [("a", "p1")]
    assert result.unmatched_subject_ids == ["b"]


def test_max_load_caps_assignments():
    subjects = [viable(name) for name in ("a", "b", "c")]
    availabilities = [willing("p1", name) for name in ("a", "b", "c")]
    result = match_professors(subjects, availabilities, max_load=2)
    assert pairs(result) == [("a", "p1"), ("b", "p1")]
    assert result.unmatched_subject_ids == ["c"]
    assert max(result.load.values()) <= 2


def test_match_keeps_the_availability_used():
    result = match_professors([viable("a")], [willing("p1", "a", shifts=("Evening",), days=("Friday",))])
    match = result.matches[0]
    assert match.availability.available_shifts == ["Evening"]
    assert match.availability.available_days == ["Friday"]
