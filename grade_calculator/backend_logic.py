import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# ------------------------
# Data model
# ------------------------
class ErrorKind(Enum):
    EMPTY_PASS_GRADE = "EmptyPassGrade"
    INVALID_PASS_GRADE = "InvalidPassGrade"
    INVALID_GRADE = "InvalidGrade"
    EMPTY_WEIGHT = "EmptyWeight"
    INVALID_WEIGHT = "InvalidWeight"
    EMPTY_FINAL_WEIGHT = "EmptyFinalWeight"
    INVALID_FINAL_WEIGHT = "InvalidFinalWeight"
    WEIGHTS_NOT_FULL = "WeightsNotFull"


@dataclass(frozen=True)
class AssignmentRecord:
    """
    One row of the assignments table.

    grade:  None / 0 means the grade has not come back yet.
    weight: percent of the course this assignment is worth.
    """
    weight: Any
    grade: Any = None


@dataclass(frozen=True)
class CourseTarget:
    pass_grade: Any
    final_exam_weight: Any


@dataclass(frozen=True)
class Success:
    required_final_percent: float
    missing_count: int
    commentary: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    reason: ErrorKind

    @property
    def ok(self) -> bool:
        return False


EvaluationResult = Union[Success, Failure]


# ------------------------
# Commentary
# ------------------------
# (upper bound inclusive, commentary); first match wins
COMMENTARY_BANDS: List[Tuple[float, str]] = [
    (0.0, "Wow. You could literally not go to the final exam and still pass. "
          "Not that it's encouraged, but I'm still jealous!"),
    (40.0, "Should be pretty easy, no?"),
    (60.0, "As long as you put some work in I'm sure you'll be fine."),
    (80.0, "You should probably start studying now instead of calculating "
           "what you need on the final to pass lmao."),
    (90.0, "Gonna be tight but I believe in you!"),
    (100.0, "I'll pray for you."),
]
IMPOSSIBLE_COMMENTARY = "Damn, I'd hate to be you right now."


def commentary_for(needed_percent: float) -> str:
    for upper, text in COMMENTARY_BANDS:
        if needed_percent <= upper:
            return text
    return IMPOSSIBLE_COMMENTARY


# ------------------------
# Core logic
# ------------------------
def round_1dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _as_number(value) -> float:
    """
    Coerce a raw form value the way a text box is read.

    Blank (None, "", whitespace, NaN / pd.NA from an empty editor cell) -> 0.0
    Unparseable -> NaN
    """
    if isinstance(value, bool):
        return float("nan")
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return 0.0

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return float("nan")

    try:
        number = float(value)
    except (TypeError, ValueError):
        return float("nan")

    if np.isnan(number):
        return 0.0
    return number


def _is_empty(x: float) -> bool:
    # unparseable text reads as empty for the pass grade and the weights
    return x == 0 or bool(np.isnan(x))


def _out_of_range(x: float) -> bool:
    return bool(np.isnan(x)) or x < 0 or x > 100


def _validate(
    records: List[AssignmentRecord],
    target: CourseTarget,
) -> Tuple[Optional[ErrorKind], float, np.ndarray, np.ndarray, float]:
    """
    Fail-fast validation.

    returns: (error, pass_grade, grades, weights, exam_weight)
             error is None when everything checks out.
    """
    empty = np.zeros(0, dtype=float)

    pass_grade = _as_number(target.pass_grade)
    if _is_empty(pass_grade):
        return ErrorKind.EMPTY_PASS_GRADE, 0.0, empty, empty, 0.0
    if _out_of_range(pass_grade):
        return ErrorKind.INVALID_PASS_GRADE, 0.0, empty, empty, 0.0

    grades: List[float] = []
    weights: List[float] = []
    total_weight = 0.0
    for record in records:
        grade = _as_number(record.grade)
        weight = _as_number(record.weight)
        if _out_of_range(grade):
            return ErrorKind.INVALID_GRADE, 0.0, empty, empty, 0.0
        if _is_empty(weight):
            return ErrorKind.EMPTY_WEIGHT, 0.0, empty, empty, 0.0
        if _out_of_range(weight):
            return ErrorKind.INVALID_WEIGHT, 0.0, empty, empty, 0.0

        grades.append(grade)
        weights.append(weight)
        # summed in input order so the == 100 check sees the same float
        total_weight += weight
        logger.debug("Total weight is now: %s", total_weight)

    exam_weight = _as_number(target.final_exam_weight)
    if _is_empty(exam_weight):
        return ErrorKind.EMPTY_FINAL_WEIGHT, 0.0, empty, empty, 0.0
    if _out_of_range(exam_weight):
        return ErrorKind.INVALID_FINAL_WEIGHT, 0.0, empty, empty, 0.0

    if total_weight + exam_weight != 100:
        logger.debug("Weights add up to %s, not 100", total_weight + exam_weight)
        return ErrorKind.WEIGHTS_NOT_FULL, 0.0, empty, empty, 0.0

    return (
        None,
        pass_grade,
        np.array(grades, dtype=float),
        np.array(weights, dtype=float),
        exam_weight,
    )


def weighted_totals(grades: np.ndarray, weights: np.ndarray) -> Tuple[float, int, float]:
    """
    returns: (total weighted grade, missing count, missing weight)

    A grade of 0 is read as "not back yet": it adds nothing to the total and
    its weight moves to the remaining work.
    """
    if grades.size == 0:
        return 0.0, 0, 0.0

    missing = grades == 0
    missing_count = int(missing.sum())

    # each assignment's grade * weight / 100, added in input order
    total_grade = 0.0
    missing_weight = 0.0
    for grade, weight, is_missing in zip(grades.tolist(), weights.tolist(), missing.tolist()):
        total_grade += grade * weight / 100
        if is_missing:
            missing_weight += weight
    return total_grade, missing_count, missing_weight


def evaluate(records: List[AssignmentRecord], target: CourseTarget) -> EvaluationResult:
    """
    Work out what is needed on the final exam (and on any assignment without
    a grade yet) to reach the passing grade.

    Parameters
    ----------
    records : list of AssignmentRecord
        Completed and outstanding assignments, in the order they were entered.
    target : CourseTarget
        Passing grade and final exam weight, both percents.

    Returns
    -------
    Success or Failure
        Failure carries the first problem found; nothing is raised for bad
        input. The required percent is not clamped to [0, 100].
    """
    error, pass_grade, grades, weights, exam_weight = _validate(records, target)
    if error is not None:
        logger.info("Evaluation rejected: %s", error.value)
        return Failure(error)

    total_grade, missing_count, missing_weight = weighted_totals(grades, weights)
    remaining_grade = pass_grade - total_grade

    if missing_count > 0:
        needed_percent = remaining_grade / (missing_weight + exam_weight) * 100
    else:
        needed_percent = remaining_grade / exam_weight * 100

    return Success(
        required_final_percent=needed_percent,
        missing_count=missing_count,
        commentary=commentary_for(needed_percent),
    )


def check_plan_meets_target(
    records: List[AssignmentRecord],
    target: CourseTarget,
    planned_score: float,
):
    """
    Project the course grade if `planned_score` is achieved on every
    remaining item (assignments without a grade and the final exam).
    """
    error, pass_grade, grades, weights, exam_weight = _validate(records, target)
    if error is not None:
        raise ValueError(f"Cannot plan from invalid input ({error.value})")

    planned = float(planned_score)
    if np.isnan(planned):
        raise ValueError("planned_score must be a number")

    total_grade, missing_count, missing_weight = weighted_totals(grades, weights)
    final_grade = total_grade + planned * (missing_weight + exam_weight) / 100

    return {
        "final_grade": final_grade,
        "final_grade_rounded": round_1dp_half_up(final_grade),
        "pass_grade": pass_grade,
        "meets_pass_grade": final_grade >= pass_grade,
        "delta_to_pass": final_grade - pass_grade,
        "missing_count": missing_count,
    }
