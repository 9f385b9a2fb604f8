import io

import numpy as np
import pandas as pd
import pytest

from grade_calculator.backend_logic import AssignmentRecord, CourseTarget, Success, evaluate
from grade_calculator.io_csv import (
    parse_assignments,
    read_csv_upload,
    validate_assignments_csv,
)


def test_read_csv_normalises_headers():
    csv = io.StringIO(" Grades ,WEIGHTS\n90,50\n")
    df = read_csv_upload(csv)
    assert list(df.columns) == ["grade", "weight"]


def test_read_csv_accepts_score_header():
    csv = io.StringIO("Score,Weight\n75,20\n")
    df = read_csv_upload(csv)
    assert list(df.columns) == ["grade", "weight"]


def test_validate_requires_weight_column():
    df = pd.DataFrame({"grade": [90.0]})
    with pytest.raises(ValueError, match="Missing columns"):
        validate_assignments_csv(df)


def test_validate_adds_missing_grade_column():
    df = pd.DataFrame({"weight": [30.0, 20.0]})
    out = validate_assignments_csv(df)
    assert list(out.columns) == ["Grade", "Weight"]
    assert out["Grade"].isna().all()


def test_validate_drops_extra_columns():
    df = pd.DataFrame({"name": ["Lab 1"], "grade": [88.0], "weight": [10.0]})
    out = validate_assignments_csv(df)
    assert list(out.columns) == ["Grade", "Weight"]


def test_parse_skips_empty_rows_and_keeps_order():
    df = pd.DataFrame(
        {
            "Grade": [90.0, np.nan, np.nan, 70.0],
            "Weight": [20.0, np.nan, 30.0, 10.0],
        }
    )
    records = parse_assignments(df)
    assert records == [
        AssignmentRecord(grade=90.0, weight=20.0),
        AssignmentRecord(grade=None, weight=30.0),
        AssignmentRecord(grade=70.0, weight=10.0),
    ]


def test_parse_keeps_rows_with_grade_but_no_weight():
    df = pd.DataFrame({"Grade": [80.0], "Weight": [np.nan]})
    records = parse_assignments(df)
    assert len(records) == 1
    assert records[0].grade == 80.0


def test_parse_treats_blank_strings_as_empty():
    df = pd.DataFrame({"Grade": ["", " 85 "], "Weight": ["  ", "40"]})
    records = parse_assignments(df)
    assert records == [AssignmentRecord(grade=" 85 ", weight="40")]


def test_uploaded_csv_end_to_end():
    csv = io.StringIO("Grade,Weight\n,30\n80,20\n")
    records = parse_assignments(validate_assignments_csv(read_csv_upload(csv)))
    result = evaluate(records, CourseTarget(pass_grade=60, final_exam_weight=50))

    assert isinstance(result, Success)
    assert result.missing_count == 1
    assert result.required_final_percent == pytest.approx(55.0)
