# -*- coding: utf-8 -*-
"""
ランダムリスタート付きのバックトラック探索を行うモジュールです。

ランダムリスタートの特徴:
- 候補日付の試す順番を乱数でシャッフルしてから探索する
- ノード数に上限を設け、上限に達したら諦めて別の順番でやり直す
- やり直すたびに上限を RESTART_GROWTH 倍に広げる

「たまたま悪い順番で深みにはまる」ケースを避けやすくなります。

結果の意味は通常のバックトラック探索と同じです。
- 解を返すときは、必ずすべての制約を満たしています
- None を返すのは、解が存在しないことが確定したときだけです
  （上限に引っかからずに最後まで調べ終えた場合、または
  　リスタート回数を使い切った後の決定的な探索で解がなかった場合）
"""

from __future__ import annotations

import random
from datetime import date
from typing import Iterable, List, Optional

from ..config import (
    RESTART_GROWTH,
    RESTART_INITIAL_NODES,
    RESTART_MAX_RUNS,
    RESTART_SEED,
    SEARCH_TRACE_ENABLED,
)
from ..logging_utils import get_logger
from ..types import SearchStats
from .constraints import DateConstraint
from .domains import DomainStore
from .search import backtracking_search, is_complete_solution

logger = get_logger()


def _merge_stats(total: SearchStats, run: SearchStats) -> None:
    total.nodes_visited += run.nodes_visited
    total.backtracks += run.backtracks
    total.elapsed_sec += run.elapsed_sec


def restart_search(
    meeting_count: int,
    store: DomainStore,
    constraints: Iterable[DateConstraint],
    stats: Optional[SearchStats] = None,
    initial_nodes: int = RESTART_INITIAL_NODES,
    growth: float = RESTART_GROWTH,
    max_runs: int = RESTART_MAX_RUNS,
    seed: int = RESTART_SEED,
    trace: bool = SEARCH_TRACE_ENABLED,
) -> Optional[List[date]]:
    """
    ランダムリスタート探索のエントリポイントです。

    引数と戻り値の意味は backtracking_search() と同じです。
    乱数は seed で初期化するので、同じ入力なら毎回同じ解が返ります。
    """
    if stats is None:
        stats = SearchStats()
    constraints = list(constraints)

    rng = random.Random(seed)
    limit = float(max(1, initial_nodes))

    for run in range(max_runs):
        run_stats = SearchStats()
        solution = backtracking_search(
            meeting_count,
            store,
            constraints,
            stats=run_stats,
            node_limit=int(limit),
            rng=rng,
            trace=trace,
        )
        _merge_stats(stats, run_stats)
        stats.restarts += 1

        if solution is not None and is_complete_solution(solution, constraints):
            logger.info(
                "[restart] run %d found a solution (limit=%d, nodes=%d)",
                run + 1, int(limit), run_stats.nodes_visited,
            )
            return solution

        if not run_stats.hit_node_limit:
            # 上限に達する前に探索し尽くした = 解なしが確定
            logger.info("[restart] run %d exhausted the search space", run + 1)
            return None

        logger.debug("[restart] run %d hit node limit %d", run + 1, int(limit))
        limit *= growth

    logger.info(
        "[restart] %d randomized run(s) without result; falling back to exhaustive search",
        max_runs,
    )
    final_stats = SearchStats()
    solution = backtracking_search(
        meeting_count, store, constraints, stats=final_stats, trace=trace
    )
    _merge_stats(stats, final_stats)
    return solution
