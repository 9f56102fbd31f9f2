# -*- coding: utf-8 -*-
"""
会議（変数）ごとのドメイン（候補日付のリスト）を管理するモジュールです。

- 初期ドメインは、指定された期間 [range_start, range_end] のすべての日付です
  （両端を含みます）。
- ドメインは整合性フィルタ（propagation.py）によって小さくなるだけで、
  探索中に書き換えられることはありません。
- 候補日付は「日付順のリスト」で持つので、探索で値を試す順番も日付順になります。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List

import pandas as pd

from ..exceptions import InvalidProblemError


def normalize_date(value) -> date:
    """
    いろいろな形式の日付を datetime.date に揃えます。

    受け付ける形式:
    - datetime.date
    - datetime.datetime / pandas.Timestamp（時刻は切り捨て）
    - "2024-01-03" のような ISO 形式の文字列
    """
    if value is None or value is pd.NaT:
        raise InvalidProblemError("Date value is missing.")

    # datetime は date のサブクラスなので先に判定する
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        ts = pd.Timestamp(str(value).strip())
    except ValueError as e:
        raise InvalidProblemError(f"Cannot parse date: {value!r}") from e
    if pd.isna(ts):
        raise InvalidProblemError(f"Cannot parse date: {value!r}")
    return ts.date()


def build_date_range(start, end) -> List[date]:
    """
    start から end までの日付を1日刻みで並べたリストを返します（両端を含む）。

    例: 1/1 〜 1/3 -> [1/1, 1/2, 1/3]
    """
    start_d = normalize_date(start)
    end_d = normalize_date(end)
    if start_d > end_d:
        raise InvalidProblemError(
            f"Date range is inverted: start={start_d.isoformat()} > end={end_d.isoformat()}"
        )
    return [ts.date() for ts in pd.date_range(start_d, end_d, freq="D")]


@dataclass
class DomainStore:
    """
    会議番号 -> 候補日付リスト の対応を持つクラスです。

    Attributes
    ----------
    domains : dict[int, list[date]]
        各会議の候補日付（日付順・重複なし）。
    """

    domains: Dict[int, List[date]] = field(default_factory=dict)

    @classmethod
    def initialize(cls, n: int, start, end) -> "DomainStore":
        """
        n 個の会議すべてに、期間内の全日付をドメインとして与えます。

        リストは会議ごとに別々のコピーにしておきます
        （ある会議のドメインを削っても、他の会議に影響しないように）。
        """
        full_range = build_date_range(start, end)
        return cls(domains={i: list(full_range) for i in range(n)})

    def get(self, var: int) -> List[date]:
        return self.domains[var]

    def restrict(self, var: int, values: Iterable[date]) -> int:
        """
        会議 var のドメインを values だけに絞ります（元の順番は保ちます）。

        values に元のドメインにない日付が含まれていても追加はしません。
        ドメインは小さくなる一方です。

        Returns
        -------
        int
            取り除かれた候補の数。
        """
        keep = set(values)
        old = self.domains[var]
        new = [d for d in old if d in keep]
        self.domains[var] = new
        return len(old) - len(new)

    def sizes(self) -> Dict[int, int]:
        return {v: len(dom) for v, dom in self.domains.items()}

    def total_size(self) -> int:
        return sum(len(dom) for dom in self.domains.values())

    def empty_variables(self) -> List[int]:
        return [v for v, dom in sorted(self.domains.items()) if not dom]

    def has_empty_domain(self) -> bool:
        return any(not dom for dom in self.domains.values())

    def copy(self) -> "DomainStore":
        return DomainStore(domains={v: list(dom) for v, dom in self.domains.items()})

    def __len__(self) -> int:
        return len(self.domains)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.domains))
