# calendar_solver/eval/verify.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence, Tuple

from ..csp.constraints import DateConstraint
from ..csp.oracle import constraint_holds


def evaluate_constraints(
    solution: Sequence[date],
    constraints: Iterable[DateConstraint],
) -> List[Tuple[DateConstraint, bool]]:
    """
    各制約について、解 solution がそれを満たしているかを評価する。

    会議番号が solution の範囲外の制約は「満たしていない」扱いにする。

    Returns
    -------
    list of (constraint, satisfied)
    """
    assignment = dict(enumerate(solution))

    results: List[Tuple[DateConstraint, bool]] = []
    for c in constraints:
        results.append((c, constraint_holds(c, assignment) is True))
    return results


def find_violations(
    solution: Sequence[date],
    constraints: Iterable[DateConstraint],
) -> List[DateConstraint]:
    """解が破っている制約だけを返す（正しい解なら空リスト）。"""
    return [c for c, ok in evaluate_constraints(solution, constraints) if not ok]
