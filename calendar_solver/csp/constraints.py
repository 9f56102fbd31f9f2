# -*- coding: utf-8 -*-
"""
日付制約（DateConstraint）を表すモジュールです。

制約は次の2種類だけです。

- 単項制約 UnaryDateConstraint  : 「会議 #i の日付 op 固定の日付」
  例: #0 >= 2024-01-03
- 二項制約 BinaryDateConstraint : 「会議 #i の日付 op 会議 #j の日付」
  例: #0 != #1

比較演算子は文字列ではなく Operator 列挙型で持つので、
"=<" のような打ち間違いは制約を作る時点で ValueError になります。
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Tuple, Union


class Operator(Enum):
    """日付どうしの比較演算子。値は表示用の記号です。"""

    EQ = "=="
    NEQ = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, text: Union[str, "Operator"]) -> "Operator":
        """
        "==" などの記号、または "EQ" などの名前から Operator を返します。

        どちらにも当てはまらない場合は ValueError を送出します。
        """
        if isinstance(text, Operator):
            return text

        s = str(text).strip()
        for op in cls:
            if s == op.value or s.upper() == op.name:
                return op
        raise ValueError(f"Unknown comparison operator: {text!r}")

    def reversed(self) -> "Operator":
        """左右の被演算子を入れ替えたときの演算子を返します（> なら <）。"""
        from .oracle import reverse_operator

        return reverse_operator(self)


@dataclass(frozen=True)
class UnaryDateConstraint:
    """
    会議1つと固定の日付との比較制約です。

    Attributes
    ----------
    left : int
        制約される会議（変数）の番号。
    op : Operator
        比較演算子。
    value : datetime.date
        比較相手の日付。
    """

    left: int
    op: Operator
    value: date

    def arity(self) -> int:
        return 1

    def variables(self) -> Tuple[int, ...]:
        return (self.left,)

    def describe(self) -> str:
        return f"#{self.left} {self.op.symbol} {self.value.isoformat()}"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class BinaryDateConstraint:
    """
    会議2つの日付どうしの比較制約です。

    評価するときは常に「left の日付 op right の日付」の順で比べます。
    """

    left: int
    op: Operator
    right: int

    def arity(self) -> int:
        return 2

    def variables(self) -> Tuple[int, ...]:
        return (self.left, self.right)

    def describe(self) -> str:
        return f"#{self.left} {self.op.symbol} #{self.right}"

    def __str__(self) -> str:
        return self.describe()


DateConstraint = Union[UnaryDateConstraint, BinaryDateConstraint]


def unary(left: int, op: Union[str, Operator], value) -> UnaryDateConstraint:
    """単項制約を作るヘルパー関数。op は記号文字列でも構いません。"""
    from .domains import normalize_date

    return UnaryDateConstraint(int(left), Operator.from_symbol(op), normalize_date(value))


def binary(left: int, op: Union[str, Operator], right: int) -> BinaryDateConstraint:
    """二項制約を作るヘルパー関数。"""
    return BinaryDateConstraint(int(left), Operator.from_symbol(op), int(right))


def _sort_key(c: DateConstraint):
    if isinstance(c, UnaryDateConstraint):
        return (1, c.left, c.op.value, c.value.toordinal())
    return (2, c.left, c.op.value, c.right)


def canonical_order(constraints: Iterable[DateConstraint]) -> Tuple[DateConstraint, ...]:
    """
    制約の集合を、実行のたびに変わらない順番のタプルに並べ替えます。

    set の反復順はハッシュ値次第で変わるため、
    ログやフィルタの処理順を再現可能にする目的で使います。
    重複した制約は1つにまとめます。
    """
    return tuple(sorted(set(constraints), key=_sort_key))
