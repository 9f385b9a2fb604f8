import pytest

from grade_calculator.backend_logic import (
    IMPOSSIBLE_COMMENTARY,
    AssignmentRecord,
    CourseTarget,
    ErrorKind,
    Failure,
    Success,
    evaluate,
)
from grade_calculator.messages import (
    ERROR_MESSAGES,
    error_message,
    format_percent,
    result_message,
)


def test_every_error_kind_has_a_message():
    assert set(ERROR_MESSAGES) == set(ErrorKind)
    for kind in ErrorKind:
        assert error_message(kind).startswith("Error: ")


def test_failure_message():
    assert result_message(Failure(ErrorKind.WEIGHTS_NOT_FULL)) == "Error: weights must add up to 100%"
    assert result_message(Failure(ErrorKind.EMPTY_WEIGHT)) == "Error: a weight was left empty"


def test_message_without_missing_grades():
    result = evaluate(
        [AssignmentRecord(grade=90, weight=50)],
        CourseTarget(pass_grade=70, final_exam_weight=50),
    )
    assert result_message(result) == (
        "You will need 50.0% on the final exam in order to pass this course. "
        "As long as you put some work in I'm sure you'll be fine."
    )


def test_message_with_one_missing_grade():
    result = evaluate(
        [AssignmentRecord(grade=None, weight=30), AssignmentRecord(grade=80, weight=20)],
        CourseTarget(pass_grade=60, final_exam_weight=50),
    )
    assert result_message(result).startswith(
        "You will need an average of 55.0% both on the remaining assignment "
        "and on the final exam in order to pass this course."
    )


def test_message_with_several_missing_grades():
    result = Success(required_final_percent=72.25, missing_count=3, commentary="Hmm.")
    assert result_message(result) == (
        "You will need an average of 72.3% on the remaining 3 assignments and on "
        "the final exam in order to pass this course. Hmm."
    )


def test_message_beyond_100():
    result = Success(
        required_final_percent=105.0, missing_count=0, commentary=IMPOSSIBLE_COMMENTARY
    )
    assert result_message(result).endswith(IMPOSSIBLE_COMMENTARY)
    assert "105.0%" in result_message(result)


@pytest.mark.parametrize(
    "x, expected",
    [(50, "50.0%"), (55.00000000000001, "55.0%"), (66.666, "66.7%"), (-12.34, "-12.3%")],
)
def test_format_percent(x, expected):
    assert format_percent(x) == expected
