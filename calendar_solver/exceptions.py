# -*- coding: utf-8 -*-
"""
calendar_solver で使う例外クラスをまとめたモジュールです。

「解なし」は例外ではなく、solve() が None を返すことで表します。
ここにあるのは「入力そのものがおかしい」場合の例外だけです。
"""


class InvalidProblemError(ValueError):
    """問題定義（会議数・日付範囲・制約の添字など）が前提条件を満たさないときに送出されます。"""

    pass


class ConstraintTableError(ValueError):
    """制約表（CSV / DataFrame）の列や行の内容が想定と異なるときに送出されます。"""

    pass


# API で返す HTTP ステータスコードとの対応表
ERROR_STATUS_CODES = {
    InvalidProblemError: 400,
    ConstraintTableError: 400,
}
