import logging
import os

import pandas as pd
import streamlit as st

from grade_calculator.backend_logic import (
    CourseTarget,
    Failure,
    check_plan_meets_target,
    evaluate,
)
from grade_calculator.io_csv import (
    parse_assignments,
    read_csv_upload,
    validate_assignments_csv,
)
from grade_calculator.messages import format_percent, result_message

logging.basicConfig(
    level=os.environ.get("GRADE_CALCULATOR_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ------------------------
# Streamlit UI (with optional CSV upload)
# ------------------------

st.set_page_config(
    page_title="Final Exam Grade Calculator | What do I need on my final?",
    page_icon="📝",
    layout="centered",
)

st.title("📝 Final Exam Grade Calculator")
st.write(
    "Enter the grades and weights of your assignments, the grade you need to pass "
    "and how much the final exam is worth. The calculator tells you what you need "
    "on the final exam to pass the course."
)

st.markdown(
    "Leave the grade of an assignment **empty** if you haven't got it back yet. "
    "The calculator will then work out the average you need on the remaining "
    "assignments and on the final exam."
)

PLAN_MIN_SCORE = 0.0
PLAN_MAX_SCORE = 100.0

# ------------------------
# Input form
# ------------------------

with st.form("grade_input_form"):
    st.subheader("1. Enter your assignments")

    assignments_csv = st.file_uploader(
        "Optionally upload assignments CSV (Grade, Weight)",
        type=["csv"],
        key="assignments_csv",
    )

    # ---- Defaults (used if no upload) ----
    default_assignments = pd.DataFrame(
        [
            {"Grade": None, "Weight": None},
        ],
        dtype=float,
    )

    # ---- If uploaded, use uploaded data; otherwise use defaults ----
    assignments_seed = default_assignments
    upload_error = None
    if assignments_csv is not None:
        try:
            assignments_seed = validate_assignments_csv(read_csv_upload(assignments_csv))
        except Exception as e:
            upload_error = str(e)

    if upload_error:
        st.error(f"Assignments CSV error: {upload_error}")

    assignments_df = st.data_editor(
        assignments_seed,
        key="assignments_df",
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "Grade": st.column_config.NumberColumn("Grade (%)", step=0.1, format="%.1f"),
            "Weight": st.column_config.NumberColumn("Weight (%)", step=0.1, format="%.1f"),
        },
    )

    st.subheader("2. Course details")
    col_pass, col_final = st.columns(2)
    with col_pass:
        pass_grade = st.number_input("Passing grade (%)", value=None, step=1.0)
    with col_final:
        final_weight = st.number_input("Final exam weight (%)", value=None, step=1.0)

    submitted = st.form_submit_button("Calculate", type="primary")


if submitted:
    # If the upload was invalid, stop early so users don't get confusing results
    if assignments_csv is not None and upload_error:
        st.warning("Please fix the CSV upload error above (or remove the upload) and try again.")
    else:
        records = parse_assignments(assignments_df)
        target = CourseTarget(pass_grade=pass_grade, final_exam_weight=final_weight)
        result = evaluate(records, target)

        # Persist in session_state for the planner
        st.session_state["records"] = records
        st.session_state["target"] = target
        st.session_state["result"] = result


# ------------------------
# Show result if we have it
# ------------------------

if "result" in st.session_state:
    result = st.session_state["result"]
    records = st.session_state["records"]
    target = st.session_state["target"]

    st.markdown("---")
    message = result_message(result)

    if isinstance(result, Failure):
        st.error(message)
    else:
        if result.required_final_percent > 100:
            st.warning(message)
        else:
            st.success(message)

        st.metric("Required on remaining work", format_percent(result.required_final_percent))

        # ------------------------------
        # What-if planner
        # ------------------------------
        st.markdown("---")
        st.subheader("What if: pick a score for everything that's left")

        default_score = float(
            max(PLAN_MIN_SCORE, min(PLAN_MAX_SCORE, result.required_final_percent))
        )
        planned_score = st.slider(
            "Score on the final exam (and on any assignment still without a grade)",
            min_value=PLAN_MIN_SCORE,
            max_value=PLAN_MAX_SCORE,
            step=0.5,
            value=default_score,
            format="%.1f",
        )

        plan = check_plan_meets_target(records, target, planned_score)

        c1, c2 = st.columns(2)
        with c1:
            st.metric("Final course grade", f"{plan['final_grade_rounded']:.1f}%")
        with c2:
            st.metric("Distance to passing grade", f"{plan['delta_to_pass']:+.1f}")

        if plan["meets_pass_grade"]:
            st.success("✅ With this score you **pass** the course.")
        else:
            st.error("❌ With this score you **do not yet pass** the course.")
else:
    st.info("Fill in your assignments and click **Calculate** to get started.")


st.header("FAQ")

st.subheader("How is the required grade calculated?")
st.write(
    "Each graded assignment adds grade × weight / 100 to your course grade. "
    "Whatever is still missing to reach the passing grade has to come from the "
    "final exam, so it is divided by the final exam weight."
)

st.subheader("What if I haven't got all my grades back?")
st.write(
    "Leave those grades empty (or 0). Their weight is added to the final exam weight "
    "and the calculator gives you the average you need across all of the remaining work. "
    "Note that a real grade of 0 is treated the same way."
)

st.subheader("Why do my weights have to add up to 100%?")
st.write(
    "The assignment weights plus the final exam weight make up the whole course. "
    "If they don't add up to exactly 100% the result would be meaningless, so the "
    "calculator asks you to fix them first."
)

st.subheader("What data do you collect or store?")
st.write(
    "This tool does **not** store, save, or transmit your data. "
    "Everything you enter is processed **in your browser session** "
    "and is cleared when you refresh or close the page."
)

# To run:
# streamlit run app.py
