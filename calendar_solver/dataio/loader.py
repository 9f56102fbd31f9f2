# -*- coding: utf-8 -*-
"""
制約表（CSV）を読み込むモジュールです。

今回の仕様：
- CSV に必ず 'left', 'op', 'right' の3列がある
- left  : 会議番号。"#3" または "3"
- op    : 比較演算子。"==", "!=", ">", "<", ">=", "<="（"LE" などの名前も可）
- right : "#5" のように # 付きなら会議番号（二項制約）、
          それ以外は日付（単項制約）。例: 2024-01-03

例:

    left,op,right
    #0,!=,#1
    #0,>=,2024-01-03

戻り値：
- DateConstraint のリスト（重複行は除外）
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List

import pandas as pd

from ..csp.constraints import DateConstraint, binary, unary
from ..exceptions import ConstraintTableError, InvalidProblemError

# "#12" のような形式から会議番号を取り出すための正規表現
VAR_RE = re.compile(r"^#(\d+)$")

REQUIRED_COLUMNS = ("left", "op", "right")


def extract_var_id(cell: Any) -> int | None:
    """
    セル文字列から会議番号を取り出します。

    例:
    - "#12"        -> 12
    - "2024-01-03" -> None
    """
    if not isinstance(cell, str):
        return None
    m = VAR_RE.match(cell.strip())
    if not m:
        return None
    return int(m.group(1))


def _parse_left(cell: Any, row_no: int) -> int:
    vid = extract_var_id(cell)
    if vid is not None:
        return vid
    s = str(cell).strip()
    if s.isdigit():
        return int(s)
    raise ConstraintTableError(f"Row {row_no}: 'left' must be a meeting index, got {cell!r}")


def constraints_from_frame(df: pd.DataFrame) -> List[DateConstraint]:
    """
    制約表の DataFrame を DateConstraint のリストに変換します。

    Parameters
    ----------
    df : pandas.DataFrame
        'left', 'op', 'right' 列を持つ DataFrame。

    Returns
    -------
    list of DateConstraint
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ConstraintTableError(f"Constraint table is missing column(s): {missing}")

    # 前後の空白を落としてから、重複行を削除
    table = df[list(REQUIRED_COLUMNS)].astype(str).apply(lambda col: col.str.strip())
    table = table.drop_duplicates(keep="first").reset_index(drop=True)

    constraints: List[DateConstraint] = []
    for row_no, row in table.iterrows():
        left = _parse_left(row["left"], row_no)

        try:
            right_var = extract_var_id(row["right"])
            if right_var is not None:
                constraints.append(binary(left, row["op"], right_var))
            else:
                constraints.append(unary(left, row["op"], row["right"]))
        except (InvalidProblemError, ValueError) as e:
            raise ConstraintTableError(f"Row {row_no}: {e}") from e

    return constraints


def load_constraints(path: str | Path) -> List[DateConstraint]:
    """
    制約表 CSV を読み込み、DateConstraint のリストにして返します。

    Parameters
    ----------
    path : str or Path
        CSV ファイルのパス。
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Constraint CSV not found: {p}")

    df = pd.read_csv(p, encoding="utf-8-sig", dtype=str, keep_default_na=False)
    return constraints_from_frame(df)
