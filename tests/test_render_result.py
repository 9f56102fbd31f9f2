"""Tests for result rendering and solution verification."""

from datetime import date

from calendar_solver.csp.constraints import binary, unary
from calendar_solver.csp.domains import DomainStore
from calendar_solver.eval.verify import evaluate_constraints, find_violations
from calendar_solver.postprocess.render_result import (
    build_domain_summary,
    build_result,
    build_schedule_frame,
)
from calendar_solver.types import Problem, SearchStats


def test_build_schedule_frame():
    df = build_schedule_frame([date(2024, 1, 6), date(2024, 1, 1)])
    assert list(df.columns) == ["meeting", "date", "weekday"]
    assert df["meeting"].tolist() == [0, 1]
    assert df["date"].tolist() == ["2024-01-06", "2024-01-01"]
    assert df["weekday"].tolist() == ["Sat", "Mon"]


def test_build_schedule_frame_empty():
    df = build_schedule_frame([])
    assert df.empty
    assert list(df.columns) == ["meeting", "date", "weekday"]


def test_build_domain_summary_handles_empty_domains():
    store = DomainStore.initialize(2, date(2024, 1, 1), date(2024, 1, 3))
    store.restrict(1, [])
    assert build_domain_summary(store) == [
        {"meeting": 0, "size": 3, "first": "2024-01-01", "last": "2024-01-03"},
        {"meeting": 1, "size": 0, "first": None, "last": None},
    ]


def test_build_result_for_zero_meetings():
    problem = Problem.build(0, date(2024, 1, 1), date(2024, 1, 1))
    store = DomainStore.initialize(0, problem.range_start, problem.range_end)
    result = build_result(problem, [], store, SearchStats())
    assert result["status"] == "solved"
    assert result["dates"] == []
    assert result["schedule"] == []
    assert result["domains"] == []


def test_evaluate_constraints_and_find_violations():
    cs = [binary(0, "<", 1), unary(1, "==", date(2024, 1, 2))]
    solution = [date(2024, 1, 3), date(2024, 1, 2)]

    results = evaluate_constraints(solution, cs)
    assert results == [(cs[0], False), (cs[1], True)]
    assert find_violations(solution, cs) == [cs[0]]
    assert find_violations([date(2024, 1, 1), date(2024, 1, 2)], cs) == []


def test_find_violations_flags_constraints_outside_solution():
    assert find_violations([date(2024, 1, 1)], [binary(0, "<", 3)]) == [binary(0, "<", 3)]
