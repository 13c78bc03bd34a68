from app.schemas.suggestion import ScheduleItem, StudentInterest
from app.services.plan_scorer import coverage_ratio, satisfaction_rate, score_plan


def interest(student_id, subject_id, shifts):
    return StudentInterest(
        student_id=student_id,
        subject_id=subject_id,
        semester="2025/1",
        preferred_shifts=list(shifts),
    )


def item(subject_id, professor_id, shift="Morning", day="Monday"):
    return ScheduleItem(
        subject_id=subject_id,
        professor_id=professor_id,
        day=day,
        shift=shift,
        start_time="08:00",
        end_time="11:30",
        campus="Online",
        estimated_enrollment=10,
    )


def test_empty_plan_scores_base():
    interests = [interest("s1", "a", ["Morning"])]
    assert score_plan([], interests) == 70
    assert score_plan([], []) == 70


def test_single_professor_full_coverage_partial_satisfaction():
    interests = [interest(f"m{i}", "s", ["Morning"]) for i in range(5)]
    interests += [interest(f"a{i}", "s", ["Afternoon"]) for i in range(7)]
    # coverage 15 + balance 10 + round(7/12 * 5) = 3
    assert score_plan([item("s", "p", shift="Afternoon")], interests) == 98


def test_coverage_half_rounds_up():
    interests = [interest("x", "a", ["Morning"]), interest("y", "b", ["Morning"])]
    assert coverage_ratio([item("a", "p")], interests) == 0.5
    # round(0.5 * 15) = 8, balance 10, satisfaction 5
    assert score_plan([item("a", "p")], interests) == 93


def test_unbalanced_load_reduces_score():
    interests = [interest(f"st{name}", name, ["Morning"]) for name in ("a", "b", "c", "d")]
    items = [
        item("a", "p1", day="Monday"),
        item("b", "p1", day="Tuesday"),
        item("c", "p1", day="Wednesday"),
        item("d", "p2", day="Monday"),
    ]
    # loads [3, 1] -> stddev 1 -> 10 - 2 = 8
    assert score_plan(items, interests) == 70 + 15 + 8 + 5


def test_balance_term_floors_at_zero():
    items = [item(f"s{i}", "p1") for i in range(11)]
    items.append(item("s99", "p2"))
    interests = [interest(f"st-{entry.subject_id}", entry.subject_id, ["Morning"]) for entry in items]
    # loads [11, 1] -> stddev 5 -> max(0, 10 - 10) = 0
    assert score_plan(items, interests) == 70 + 15 + 0 + 5


def test_satisfaction_rate_ignores_unscheduled_subjects():
    interests = [
        interest("x", "a", ["Morning"]),
        interest("y", "a", ["Evening"]),
        interest("z", "b", ["Morning"]),
    ]
    assert satisfaction_rate([item("a", "p", shift="Morning")], interests) == 0.5
    assert satisfaction_rate([], interests) is None


def test_score_is_bounded():
    interests = [interest("x", "a", ["Morning"])]
    score = score_plan([item("a", "p")], interests)
    assert 0 <= score <= 100
    assert score == 100
