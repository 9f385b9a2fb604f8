from grade_calculator.backend_logic import (
    ErrorKind,
    EvaluationResult,
    Failure,
    round_1dp_half_up,
)

ERROR_MESSAGES = {
    ErrorKind.EMPTY_PASS_GRADE: "Error: passing grade was left empty",
    ErrorKind.INVALID_PASS_GRADE: "Error: passing grade must be a percent between 0 and 100",
    ErrorKind.INVALID_GRADE: "Error: grades must be a percent between 0 and 100",
    ErrorKind.EMPTY_WEIGHT: "Error: a weight was left empty",
    ErrorKind.INVALID_WEIGHT: "Error: weights must be a percent between 0 and 100",
    ErrorKind.EMPTY_FINAL_WEIGHT: "Error: final exam weight was left empty",
    ErrorKind.INVALID_FINAL_WEIGHT: "Error: final exam weight must be a percent between 0 and 100",
    ErrorKind.WEIGHTS_NOT_FULL: "Error: weights must add up to 100%",
}


def error_message(kind: ErrorKind) -> str:
    return ERROR_MESSAGES[kind]


def format_percent(x: float) -> str:
    return f"{round_1dp_half_up(x):.1f}%"


def result_message(result: EvaluationResult) -> str:
    """
    One sentence for the page: the error text, or what is needed plus the
    commentary for that band.
    """
    if isinstance(result, Failure):
        return error_message(result.reason)

    needed = format_percent(result.required_final_percent)

    if result.missing_count > 1:
        head = (
            f"You will need an average of {needed} on the remaining "
            f"{result.missing_count} assignments and on the final exam in order "
            f"to pass this course."
        )
    elif result.missing_count == 1:
        head = (
            f"You will need an average of {needed} both on the remaining "
            f"assignment and on the final exam in order to pass this course."
        )
    else:
        head = f"You will need {needed} on the final exam in order to pass this course."

    return f"{head} {result.commentary}"
