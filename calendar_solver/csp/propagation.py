# -*- coding: utf-8 -*-
"""
整合性フィルタ（制約伝播）を行うモジュールです。

探索の前に、明らかに使えない日付をドメインから取り除いておきます。
ここでドメインを小さくしておくほど、バックトラック探索で試す値が減ります。
ただし、フィルタは「解の有無」を変えることはありません。

- ノード整合（node consistency）:
  単項制約だけを見て、その会議のドメインを絞ります。
- アーク整合（arc consistency）:
  二項制約 (i, op, j) ごとに、
  「相手のドメインに1つも相棒がいない値」を両方向から取り除きます。
  逆向き (j -> i) を調べるときは、演算子も左右反転させます（> なら <）。

ノード整合を先に行うのは、アーク整合がすでに小さくなったドメインの上で
動くようにするためです（逆順でも結果は正しいですが遅くなります）。
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from ..config import AC_UNTIL_FIXED_POINT
from ..logging_utils import get_logger
from .constraints import BinaryDateConstraint, DateConstraint, Operator, UnaryDateConstraint
from .domains import DomainStore
from .oracle import reverse_operator, satisfies

logger = get_logger()


def node_consistency(
    store: DomainStore,
    constraints: Iterable[DateConstraint],
) -> int:
    """
    単項制約に合わない日付をドメインから取り除きます。

    Returns
    -------
    int
        取り除いた候補の総数。
    """
    removed_total = 0

    for c in constraints:
        if not isinstance(c, UnaryDateConstraint):
            continue

        keep = [d for d in store.get(c.left) if satisfies(d, c.value, c.op)]
        removed = store.restrict(c.left, keep)
        if removed:
            logger.debug("[node] %s removed %d value(s) from #%d", c, removed, c.left)
        removed_total += removed

    return removed_total


def _has_support(value: date, head_domain: List[date], op: Operator) -> bool:
    """head_domain の中に「value op h」を満たす h が1つでもあるか。"""
    for h in head_domain:
        if satisfies(value, h, op):
            return True
    return False


def revise(store: DomainStore, tail: int, head: int, op: Operator) -> bool:
    """
    アーク (tail -> head, op) について、tail のドメインを絞ります。

    tail のドメインの値 t のうち、head のドメインに
    satisfies(t, h, op) となる h が1つもないものを取り除きます。

    tail と head が同じ会議の場合（#0 < #0 のような制約）は、
    「同じ日付どうし」で比べるしかないので satisfies(d, d, op) で判定します。

    Returns
    -------
    bool
        ドメインが変化したら True。
    """
    tail_domain = store.get(tail)

    if tail == head:
        keep = [d for d in tail_domain if satisfies(d, d, op)]
    else:
        head_domain = store.get(head)
        keep = [t for t in tail_domain if _has_support(t, head_domain, op)]

    removed = store.restrict(tail, keep)
    if removed:
        logger.debug(
            "[arc] #%d %s #%d removed %d value(s) from #%d",
            tail, op.symbol, head, removed, tail,
        )
    return removed > 0


def arc_consistency(
    store: DomainStore,
    constraints: Iterable[DateConstraint],
    until_fixed_point: bool = AC_UNTIL_FIXED_POINT,
) -> int:
    """
    二項制約ごとに、順方向と逆方向の両方のアークで revise() を行います。

    Parameters
    ----------
    until_fixed_point : bool
        False なら全制約を1回ずつ処理して終わります。
        True なら、どのドメインも変化しなくなるまで繰り返します。
        （#0 < #1, #1 < #2 のように制約が連鎖すると、
        　後の制約で #1 が縮んだ結果 #0 の値が支えを失うことがあるため）

    Returns
    -------
    int
        取り除いた候補の総数。
    """
    binaries = [c for c in constraints if isinstance(c, BinaryDateConstraint)]
    if not binaries:
        return 0

    before = store.total_size()
    passes = 0

    while True:
        passes += 1
        changed = False
        for c in binaries:
            # 順方向: left -> right はそのままの演算子
            if revise(store, c.left, c.right, c.op):
                changed = True
            # 逆方向: right -> left は演算子を反転させる
            if revise(store, c.right, c.left, reverse_operator(c.op)):
                changed = True

        if not until_fixed_point or not changed:
            break

    removed = before - store.total_size()
    logger.debug("[arc] %d pass(es), removed %d value(s)", passes, removed)
    return removed


def propagate(
    store: DomainStore,
    constraints: Iterable[DateConstraint],
    until_fixed_point: bool = AC_UNTIL_FIXED_POINT,
) -> bool:
    """
    整合性フィルタをまとめて行うヘルパー関数です。

    1. ノード整合（単項制約）
    2. アーク整合（二項制約）

    Returns
    -------
    bool
        すべての会議のドメインが空でなければ True。
        どれかが空になった（= 解なしが確定した）場合は False。
    """
    constraints = list(constraints)

    removed_node = node_consistency(store, constraints)
    removed_arc = arc_consistency(store, constraints, until_fixed_point=until_fixed_point)

    logger.info(
        "Propagation: node removed %d, arc removed %d, remaining %d value(s)",
        removed_node, removed_arc, store.total_size(),
    )

    empty = store.empty_variables()
    if empty:
        logger.info("Propagation wiped out domain(s) of meeting(s): %s", empty)
        return False
    return True
