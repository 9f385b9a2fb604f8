import pandas as pd
from typing import List

from grade_calculator.backend_logic import AssignmentRecord

# ------------------------
# CSV helpers (UI-side)
# ------------------------

COLUMN_ALIASES = {
    "weights": "weight",
    "grades": "grade",
    "score": "grade",
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow plural / "score" headers
    renames = {
        alias: name
        for alias, name in COLUMN_ALIASES.items()
        if alias in df.columns and name not in df.columns
    }
    if renames:
        df = df.rename(columns=renames)
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_assignments_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"weight"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Grade, Weight.")
    out = df.copy()
    if "grade" not in out.columns:
        # weights only: every grade is still outstanding
        out["grade"] = float("nan")
    out = out[["grade", "weight"]]
    out = out.rename(columns={"grade": "Grade", "weight": "Weight"})
    return out


def _is_blank(value) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def parse_assignments(df: pd.DataFrame) -> List[AssignmentRecord]:
    """
    Editor / CSV rows -> AssignmentRecord, in row order.

    Fully empty rows are dropped; anything else is handed to the evaluator
    as-is so it can report what is wrong with it.
    """
    rows = []
    for _, row in df.iterrows():
        grade = row.get("Grade")
        weight = row.get("Weight")
        if _is_blank(grade) and _is_blank(weight):
            continue
        rows.append(
            AssignmentRecord(
                grade=None if _is_blank(grade) else grade,
                weight=weight,
            )
        )
    return rows
