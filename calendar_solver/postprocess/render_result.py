# -*- coding: utf-8 -*-
"""
探索結果をもとに表示用の情報を構築するモジュールです。
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..config import DATE_FORMAT
from ..csp.domains import DomainStore
from ..types import Problem, SearchStats


def build_schedule_frame(solution: Sequence[date]) -> pd.DataFrame:
    """
    解（会議番号順の日付リスト）を表形式にまとめます。

    Returns
    -------
    pandas.DataFrame
        'meeting', 'date', 'weekday' 列を持つ DataFrame。
        date は DATE_FORMAT の文字列、weekday は "Mon" などの曜日名。
    """
    if len(solution) == 0:
        return pd.DataFrame(columns=["meeting", "date", "weekday"])

    ts = pd.to_datetime(pd.Series(list(solution), dtype=object))
    return pd.DataFrame(
        {
            "meeting": range(len(solution)),
            "date": ts.dt.strftime(DATE_FORMAT),
            "weekday": ts.dt.strftime("%a"),
        }
    )


def build_domain_summary(store: DomainStore) -> List[Dict[str, Any]]:
    """
    フィルタ後のドメインの大きさと範囲を、会議ごとにまとめます。

    ドメインが空の会議は first / last が None になります。
    """
    items: List[Dict[str, Any]] = []
    for var in store:
        dom = store.get(var)
        items.append({
            "meeting": var,
            "size": len(dom),
            "first": dom[0].strftime(DATE_FORMAT) if dom else None,
            "last": dom[-1].strftime(DATE_FORMAT) if dom else None,
        })
    return items


def build_result(
    problem: Problem,
    solution: Optional[Sequence[date]],
    store: DomainStore,
    stats: SearchStats,
) -> Dict[str, Any]:

    if solution is None:
        schedule: List[Dict[str, Any]] = []
        dates = None
    else:
        schedule = build_schedule_frame(solution).to_dict(orient="records")
        dates = [d.strftime(DATE_FORMAT) for d in solution]

    return {
        "status": "solved" if solution is not None else "unsatisfiable",
        "meeting_count": problem.meeting_count,
        "range": {
            "start": problem.range_start.strftime(DATE_FORMAT),
            "end": problem.range_end.strftime(DATE_FORMAT),
            "days": problem.range_days,
        },
        "constraints": [str(c) for c in problem.constraints],
        "dates": dates,
        "schedule": schedule,  # ★ DataFrameを返さない
        "domains": build_domain_summary(store),
        "stats": stats.to_dict(),
    }
