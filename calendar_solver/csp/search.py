# -*- coding: utf-8 -*-
"""
バックトラック探索で、全会議の日付を決めるモジュールです。

ざっくり流れ
------------
1. まだ日付の決まっていない会議のうち、番号が一番小さいものを選ぶ
2. その会議のドメイン（フィルタ済み）の日付を、先頭から順に仮置きする
3. 仮置きした会議が関わる制約のうち、相手も決まっているものをすべてチェック
4. 矛盾がなければ次の会議へ進む。矛盾があれば次の日付を試す
5. 日付を使い切ったら、その会議の仮置きを取り消して1つ前の会議に戻る
6. 全会議が決まれば解、会議 #0 の候補まで使い切れば「解なし」

再帰の代わりに「会議ごとに、次に試す候補の位置（カーソル）」を持つ
明示的なスタックで実装しているので、会議数が多くても再帰の深さ制限に
引っかかりません。ドメイン自体は探索中に一切書き換えません。
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import LOG_PROGRESS_EVERY, SEARCH_TRACE_ENABLED
from ..logging_utils import get_logger, get_search_trace_logger
from ..types import SearchStats
from .constraints import DateConstraint
from .domains import DomainStore
from .oracle import constraint_holds

logger = get_logger()


@dataclass
class SearchContext:
    """
    探索全体で共有する情報をまとめたクラスです。
    """

    meeting_count: int
    domains: List[List[date]]
    constraints_by_var: Dict[int, List[DateConstraint]]
    stats: SearchStats = field(default_factory=SearchStats)
    node_limit: Optional[int] = None
    log_every: int = LOG_PROGRESS_EVERY
    trace: bool = False


def index_constraints(
    constraints: Iterable[DateConstraint],
) -> Dict[int, List[DateConstraint]]:
    """
    会議番号 -> その会議が関わる制約のリスト を作ります。

    #0 != #0 のように同じ会議が2回出てくる制約も、1回だけ登録します。
    """
    by_var: Dict[int, List[DateConstraint]] = {}
    for c in constraints:
        for var in set(c.variables()):
            by_var.setdefault(var, []).append(c)
    return by_var


def is_consistent(
    var: int,
    assignment: Mapping[int, date],
    constraints_by_var: Mapping[int, List[DateConstraint]],
) -> bool:
    """
    会議 var に日付を仮置きした直後の割り当てが、矛盾していないかを調べます。

    var が関わる制約のうち、すべての会議の日付が決まっているものだけを評価し、
    まだ決まっていない会議を含む制約はスキップします。
    仮置きの前の割り当ては矛盾がないことが分かっているので、
    var が関わらない制約を調べ直す必要はありません。
    """
    for c in constraints_by_var.get(var, ()):
        if constraint_holds(c, assignment) is False:
            return False
    return True


def is_complete_solution(
    solution: Sequence[date],
    constraints: Iterable[DateConstraint],
) -> bool:
    """解 solution（会議番号順の日付リスト）がすべての制約を満たすかどうか。"""
    assignment = dict(enumerate(solution))
    for c in constraints:
        if constraint_holds(c, assignment) is not True:
            return False
    return True


def _run(ctx: SearchContext) -> Optional[List[date]]:
    """明示的なスタックによるバックトラック探索の本体です。"""
    n = ctx.meeting_count
    stats = ctx.stats
    trace_logger = get_search_trace_logger() if ctx.trace else None

    assignment: Dict[int, date] = {}
    cursors = [0] * n
    var = 0

    while 0 <= var < n:
        domain = ctx.domains[var]
        placed = False

        while cursors[var] < len(domain):
            if ctx.node_limit is not None and stats.nodes_visited >= ctx.node_limit:
                stats.hit_node_limit = True
                return None

            value = domain[cursors[var]]
            cursors[var] += 1
            stats.nodes_visited += 1

            if ctx.log_every and stats.nodes_visited % ctx.log_every == 0:
                logger.info(
                    "[search] nodes_visited = %d, depth = %d, backtracks = %d",
                    stats.nodes_visited, var, stats.backtracks,
                )

            assignment[var] = value
            if is_consistent(var, assignment, ctx.constraints_by_var):
                if trace_logger:
                    trace_logger.debug("assign #%d = %s", var, value.isoformat())
                placed = True
                break
            del assignment[var]

        if placed:
            var += 1
            continue

        # 候補を使い切った: カーソルを戻して1つ前の会議の仮置きを取り消す
        cursors[var] = 0
        var -= 1
        stats.backtracks += 1
        if var >= 0:
            if trace_logger:
                trace_logger.debug("undo #%d = %s", var, assignment[var].isoformat())
            del assignment[var]

    if var < 0:
        return None
    return [assignment[k] for k in range(n)]


def backtracking_search(
    meeting_count: int,
    store: DomainStore,
    constraints: Iterable[DateConstraint],
    stats: Optional[SearchStats] = None,
    node_limit: Optional[int] = None,
    rng: Optional[random.Random] = None,
    trace: bool = SEARCH_TRACE_ENABLED,
) -> Optional[List[date]]:
    """
    バックトラック探索のエントリポイントです。

    Parameters
    ----------
    meeting_count : int
        会議の数。0 のときは空リストを返します。
    store : DomainStore
        整合性フィルタ済みのドメイン。探索では読むだけで変更しません。
    constraints : iterable of DateConstraint
        すべての制約。
    stats : SearchStats, optional
        統計情報の書き込み先。省略時は新しく作ります。
    node_limit : int, optional
        試すノード数の上限。None なら無制限（最後まで調べ尽くす）。
        上限に達した場合は stats.hit_node_limit が True になり、None を返します。
    rng : random.Random, optional
        指定した場合、各会議の候補日付をこの乱数でシャッフルしてから試します。

    Returns
    -------
    list[date] or None
        位置 k が会議 k の日付になっている解。解がなければ None。
    """
    if stats is None:
        stats = SearchStats()

    domains = [list(store.get(v)) for v in range(meeting_count)]
    if rng is not None:
        for dom in domains:
            rng.shuffle(dom)

    ctx = SearchContext(
        meeting_count=meeting_count,
        domains=domains,
        constraints_by_var=index_constraints(constraints),
        stats=stats,
        node_limit=node_limit,
        trace=trace,
    )

    started = time.perf_counter()
    solution = _run(ctx)
    stats.elapsed_sec += time.perf_counter() - started

    logger.debug(
        "[search] finished: solved=%s, nodes_visited=%d, backtracks=%d",
        solution is not None, stats.nodes_visited, stats.backtracks,
    )
    return solution
