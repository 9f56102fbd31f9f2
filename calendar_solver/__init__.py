# -*- coding: utf-8 -*-
"""
calendar_solver パッケージの入口となるモジュールです。

api_proto/local_api.py などから:

    from calendar_solver import solve

と呼び出されることを想定しています。

ここでは、会議数・候補期間・日付制約を受け取り、
1. 入力チェック（Problem.build）
2. 会議ごとのドメイン（候補日付）の初期化
3. ノード整合（単項制約によるドメインの絞り込み）
4. アーク整合（二項制約によるドメインの絞り込み）
5. バックトラック探索（またはランダムリスタート探索）
6. 解の最終チェックと表示用の結果構築
を順番に呼び出します。
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import (
    AC_UNTIL_FIXED_POINT,
    SEARCH_ALGORITHM,
    SHORT_CIRCUIT_ON_EMPTY_DOMAIN,
)
from .logging_utils import get_logger
from .exceptions import ConstraintTableError, InvalidProblemError
from .types import Problem, SearchStats
from .csp.constraints import (
    BinaryDateConstraint,
    DateConstraint,
    Operator,
    UnaryDateConstraint,
    binary,
    unary,
)
from .csp.domains import DomainStore
from .csp.propagation import propagate
from .csp.search import backtracking_search
from .csp.search_restart import restart_search
from .dataio.loader import load_constraints
from .eval.verify import find_violations
from .postprocess.render_result import build_result

logger = get_logger()

__all__ = [
    "solve",
    "solve_report",
    "run_solver",
    "Problem",
    "SearchStats",
    "DomainStore",
    "Operator",
    "UnaryDateConstraint",
    "BinaryDateConstraint",
    "unary",
    "binary",
    "load_constraints",
    "InvalidProblemError",
    "ConstraintTableError",
]

SEARCH_ALGORITHMS = ("backtrack", "restart")


def run_solver(
    problem: Problem,
    algorithm: str = SEARCH_ALGORITHM,
    until_fixed_point: bool = AC_UNTIL_FIXED_POINT,
    short_circuit: bool = SHORT_CIRCUIT_ON_EMPTY_DOMAIN,
) -> Tuple[Optional[List[date]], DomainStore, SearchStats]:
    """
    1つの Problem について、フィルタ〜探索までを1回実行するヘルパー関数。

    Returns
    -------
    solution : list[date] or None
        会議番号順の日付リスト。解がなければ None。
    store : DomainStore
        フィルタ後のドメイン（探索では変更されません）。
    stats : SearchStats
        探索の統計情報。
    """
    if algorithm not in SEARCH_ALGORITHMS:
        raise ValueError(
            f"Unknown search algorithm: {algorithm!r} (expected one of {SEARCH_ALGORITHMS})"
        )

    # 1) ドメイン構築
    store = DomainStore.initialize(
        problem.meeting_count, problem.range_start, problem.range_end
    )
    logger.info(
        "Run solver: meetings=%d, days=%d, constraints=%d, algorithm=%s",
        problem.meeting_count, problem.range_days, len(problem.constraints), algorithm,
    )

    # 2) 整合性フィルタ（ノード整合 → アーク整合）
    consistent = propagate(store, problem.constraints, until_fixed_point=until_fixed_point)

    stats = SearchStats()
    if not consistent and short_circuit:
        logger.info("A domain became empty during filtering; no solution.")
        return None, store, stats

    # 3) 探索
    if algorithm == "restart":
        solution = restart_search(problem.meeting_count, store, problem.constraints, stats=stats)
    else:
        solution = backtracking_search(problem.meeting_count, store, problem.constraints, stats=stats)

    logger.info(
        "Search finished: solved=%s, nodes_visited=%d, backtracks=%d, elapsed=%.3fs",
        solution is not None, stats.nodes_visited, stats.backtracks, stats.elapsed_sec,
    )

    # 4) 最終チェック（すべての制約を満たしているか）
    if solution is not None:
        violations = find_violations(solution, problem.constraints)
        if violations:
            for c in violations:
                logger.warning("[WARNING] Solution violates constraint %s", c)
            raise RuntimeError(
                f"Search returned an assignment violating {len(violations)} constraint(s)."
            )

    return solution, store, stats


def solve(
    meeting_count: int,
    range_start,
    range_end,
    constraints: Iterable[DateConstraint] = (),
    algorithm: str = SEARCH_ALGORITHM,
    until_fixed_point: bool = AC_UNTIL_FIXED_POINT,
) -> Optional[List[date]]:
    """
    会議の日程を決めるメイン関数。

    Parameters
    ----------
    meeting_count : int
        会議の数（0 以上）。会議は 0, 1, ..., meeting_count-1 の番号で呼びます。
    range_start, range_end : date
        全会議共通の候補期間（両端を含む）。
    constraints : iterable of DateConstraint
        単項・二項の日付制約。

    Returns
    -------
    list[date] or None
        位置 k が会議 k の日付になっているリスト。
        すべての制約を満たす割り当てが存在しなければ None。

    Raises
    ------
    InvalidProblemError
        期間が逆転している、制約の会議番号が範囲外、などの不正な入力のとき。
    """
    problem = Problem.build(meeting_count, range_start, range_end, constraints)
    solution, _, _ = run_solver(
        problem, algorithm=algorithm, until_fixed_point=until_fixed_point
    )
    return solution


def solve_report(
    meeting_count: int,
    range_start,
    range_end,
    constraints: Iterable[DateConstraint] = (),
    algorithm: str = SEARCH_ALGORITHM,
    until_fixed_point: bool = AC_UNTIL_FIXED_POINT,
) -> Dict[str, Any]:
    """
    solve() と同じ処理を行い、表示用の結果（JSON にできる dict）を返します。
    """
    logger.info("=== solve_report() START ===")

    problem = Problem.build(meeting_count, range_start, range_end, constraints)
    solution, store, stats = run_solver(
        problem, algorithm=algorithm, until_fixed_point=until_fixed_point
    )

    if solution is not None:
        logger.info("--- 会議 → 日付 割り当て ---")
        for k, d in enumerate(solution):
            logger.info("  #%d -> %s", k, d.isoformat())

    result = build_result(problem, solution, store, stats)

    logger.info("=== solve_report() END ===")
    return result
