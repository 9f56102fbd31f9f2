"""Tests for the constraint table loader."""

from datetime import date

import pandas as pd
import pytest

from calendar_solver import ConstraintTableError, solve
from calendar_solver.csp.constraints import binary, unary
from calendar_solver.dataio.loader import (
    constraints_from_frame,
    extract_var_id,
    load_constraints,
)


def test_extract_var_id():
    assert extract_var_id("#12") == 12
    assert extract_var_id(" #0 ") == 0
    assert extract_var_id("2024-01-03") is None
    assert extract_var_id("12") is None
    assert extract_var_id(12) is None


def test_load_constraints_from_csv(tmp_path):
    path = tmp_path / "constraints.csv"
    path.write_text(
        "left,op,right\n"
        "#0,!=,#1\n"
        "#0,>=,2024-01-03\n"
        "1, LE ,#2\n"
        "#0,!=,#1\n",
        encoding="utf-8",
    )

    constraints = load_constraints(path)

    assert constraints == [
        binary(0, "!=", 1),
        unary(0, ">=", date(2024, 1, 3)),
        binary(1, "<=", 2),
    ]


def test_loaded_constraints_feed_solve(tmp_path):
    path = tmp_path / "constraints.csv"
    path.write_text("left,op,right\n#0,>,#1\n#1,==,2024-01-02\n", encoding="utf-8")

    result = solve(2, date(2024, 1, 1), date(2024, 1, 5), load_constraints(path))

    assert result == [date(2024, 1, 3), date(2024, 1, 2)]


def test_constraints_from_frame_accepts_integer_left_column():
    df = pd.DataFrame({"left": [0, 2], "op": ["<", "=="], "right": ["#1", "2024-01-01"]})
    assert constraints_from_frame(df) == [
        binary(0, "<", 1),
        unary(2, "==", date(2024, 1, 1)),
    ]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_constraints(tmp_path / "nope.csv")


def test_missing_column_raises():
    df = pd.DataFrame({"left": ["#0"], "op": ["<"]})
    with pytest.raises(ConstraintTableError):
        constraints_from_frame(df)


@pytest.mark.parametrize(
    "row",
    [
        {"left": "#0", "op": "=<", "right": "#1"},
        {"left": "first", "op": "<", "right": "#1"},
        {"left": "#0", "op": "<", "right": "someday"},
        {"left": "#0", "op": "", "right": "#1"},
    ],
)
def test_bad_rows_raise(row):
    with pytest.raises(ConstraintTableError):
        constraints_from_frame(pd.DataFrame([row]))
