from app.schemas.suggestion import StudentInterest, SubjectMeta
from app.services.interest_aggregator import DemandRecord, aggregate_interests
from app.services.viability import filter_viable


def interest(student_id, subject_id, shifts, days=()):
    return StudentInterest(
        student_id=student_id,
        subject_id=subject_id,
        semester="2025/1",
        preferred_shifts=list(shifts),
        preferred_days=list(days),
    )


def subject(subject_id):
    return SubjectMeta(id=subject_id, name=f"Subject {subject_id}", code=subject_id.upper(), campus="Online")


def test_aggregate_counts_every_preference_bucket():
    demand = aggregate_interests(
        [
            interest("s1", "calc", ["Morning", "Evening"], ["Monday", "Friday"]),
            interest("s2", "calc", ["Evening"], []),
            interest("s3", "algo", ["Afternoon"], ["Tuesday"]),
        ]
    )
    calc = demand["calc"]
    assert calc.count == 2
    assert calc.shift_preferences == {"Morning": 1, "Evening": 2}
    assert calc.day_preferences == {"Monday": 1, "Friday": 1}
    assert demand["algo"].count == 1


def test_aggregate_empty_input_returns_empty_map():
    assert aggregate_interests([]) == {}


def test_aggregate_keeps_subjects_without_metadata():
    demand = aggregate_interests([interest("s1", "ghost", ["Morning"])])
    assert "ghost" in demand


def test_filter_viable_threshold_is_inclusive():
    demand = {
        "a": DemandRecord(subject_id="a", count=10),
        "b": DemandRecord(subject_id="b", count=9),
    }
    viable = filter_viable(demand, {"a": subject("a"), "b": subject("b")}, min_demand=10)
    assert [item.subject_id for item in viable] == ["a"]
    assert viable[0].demand_count == 10


def test_filter_viable_drops_unknown_subjects_and_sorts_by_id():
    demand = {
        "zeta": DemandRecord(subject_id="zeta", count=15),
        "ghost": DemandRecord(subject_id="ghost", count=40),
        "alpha": DemandRecord(subject_id="alpha", count=12),
    }
    viable = filter_viable(demand, {"zeta": subject("zeta"), "alpha": subject("alpha")})
    assert [item.subject_id for item in viable] == ["alpha", "zeta"]


def test_filter_viable_returns_empty_when_nothing_clears_threshold():
    demand = {"a": DemandRecord(subject_id="a", count=3)}
    assert filter_viable(demand, {"a": subject("a")}) == []
