# -*- coding: utf-8 -*-
"""
2つの日付が比較演算子を満たすかどうかを判定するモジュールです。

整合性フィルタ（propagation.py）と探索（search.py）の両方から使われます。
"""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from .constraints import DateConstraint, Operator, UnaryDateConstraint

# 左右を入れ替えたときの演算子の対応表
_REVERSED = {
    Operator.EQ: Operator.EQ,
    Operator.NEQ: Operator.NEQ,
    Operator.GT: Operator.LT,
    Operator.LT: Operator.GT,
    Operator.GE: Operator.LE,
    Operator.LE: Operator.GE,
}


def satisfies(left: date, right: date, op: Operator) -> bool:
    """
    「left op right」が成り立つかどうかを返します。

    例: satisfies(1月1日, 1月2日, Operator.LT) -> True
    """
    if op is Operator.EQ:
        return left == right
    if op is Operator.NEQ:
        return left != right
    if op is Operator.GT:
        return left > right
    if op is Operator.LT:
        return left < right
    if op is Operator.GE:
        return left >= right
    if op is Operator.LE:
        return left <= right
    raise ValueError(f"Unknown comparison operator: {op!r}")


def reverse_operator(op: Operator) -> Operator:
    """
    被演算子の左右を入れ替えたときの演算子を返します。

    satisfies(a, b, op) と satisfies(b, a, reverse_operator(op)) は
    常に同じ結果になります。
    """
    return _REVERSED[op]


def constraint_holds(
    constraint: DateConstraint,
    assignment: Mapping[int, date],
) -> Optional[bool]:
    """
    1つの制約を（部分的な）割り当てに対して評価します。

    Returns
    -------
    bool or None
        制約を満たせば True、破っていれば False。
        まだ日付が決まっていない会議が含まれる場合は None。
    """
    left_value = assignment.get(constraint.left)
    if left_value is None:
        return None

    if isinstance(constraint, UnaryDateConstraint):
        right_value = constraint.value
    else:
        right_value = assignment.get(constraint.right)
        if right_value is None:
            return None

    return satisfies(left_value, right_value, constraint.op)
