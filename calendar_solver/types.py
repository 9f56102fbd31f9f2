# -*- coding: utf-8 -*-
"""
calendar_solver で使う主なデータ構造（型）をまとめたモジュールです。

dataclass を使うことで、
「この構造体はどんなフィールドを持っているのか」を
分かりやすく表現しています。
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Iterable, Tuple

from .csp.constraints import (
    BinaryDateConstraint,
    DateConstraint,
    UnaryDateConstraint,
    canonical_order,
)
from .csp.domains import normalize_date
from .exceptions import InvalidProblemError


@dataclass(frozen=True)
class Problem:
    """
    1つのスケジューリング問題を表すクラスです。

    Attributes
    ----------
    meeting_count : int
        スケジュールする会議の数 N。会議は 0, 1, ..., N-1 の番号で呼びます。
    range_start : datetime.date
        全会議共通の候補期間の開始日（この日を含む）。
    range_end : datetime.date
        候補期間の終了日（この日を含む）。
    constraints : tuple of DateConstraint
        単項・二項の日付制約。並び順は canonical_order() で固定されています。
    """

    meeting_count: int
    range_start: date
    range_end: date
    constraints: Tuple[DateConstraint, ...]

    @classmethod
    def build(
        cls,
        meeting_count: int,
        range_start,
        range_end,
        constraints: Iterable[DateConstraint] = (),
    ) -> "Problem":
        """
        入力をチェックしてから Problem を作ります。

        前提条件を満たさない入力は、ここで InvalidProblemError にします。
        - 会議数が 0 以上の整数であること
        - range_start <= range_end であること
        - すべての制約の会議番号が [0, meeting_count) に入っていること
        """
        if isinstance(meeting_count, bool) or not isinstance(meeting_count, int):
            raise InvalidProblemError(
                f"meeting_count must be an integer, got {meeting_count!r}"
            )
        if meeting_count < 0:
            raise InvalidProblemError(f"meeting_count must be >= 0, got {meeting_count}")

        start = normalize_date(range_start)
        end = normalize_date(range_end)
        if start > end:
            raise InvalidProblemError(
                f"Date range is inverted: start={start.isoformat()} > end={end.isoformat()}"
            )

        checked = []
        for c in constraints:
            if not isinstance(c, (UnaryDateConstraint, BinaryDateConstraint)):
                raise InvalidProblemError(f"Not a date constraint: {c!r}")
            for var in c.variables():
                if not 0 <= var < meeting_count:
                    raise InvalidProblemError(
                        f"Constraint {c} refers to meeting #{var}, "
                        f"but only {meeting_count} meetings exist."
                    )
            checked.append(c)

        return cls(
            meeting_count=meeting_count,
            range_start=start,
            range_end=end,
            constraints=canonical_order(checked),
        )

    @property
    def range_days(self) -> int:
        """候補期間の日数（両端を含む）。"""
        return (self.range_end - self.range_start).days + 1


@dataclass
class SearchStats:
    """
    探索の統計情報です。ログ出力と結果表示に使います。

    Attributes
    ----------
    nodes_visited : int
        試した（会議, 日付）の組の数。
    backtracks : int
        候補を使い切って1つ前の会議に戻った回数。
    restarts : int
        ランダムリスタートを行った回数（restart 探索のときだけ増えます）。
    hit_node_limit : bool
        ノード上限に達して探索を打ち切ったかどうか。
    elapsed_sec : float
        探索にかかった時間（秒）。
    """

    nodes_visited: int = 0
    backtracks: int = 0
    restarts: int = 0
    hit_node_limit: bool = False
    elapsed_sec: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
