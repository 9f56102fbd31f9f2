# -*- coding: utf-8 -*-
"""
calendar_solver 全体で共通して使う設定値をまとめたモジュールです。

実運用時には、ここを編集することで
- アーク整合を不動点まで繰り返すかどうか
- 探索アルゴリズムの種類
- ランダムリスタートのパラメータ
- 探索ログの出力先
などを簡単に変更できます。

各値は solve() / run_solver() などのキーワード引数で
呼び出しごとに上書きすることもできます。
"""

from __future__ import annotations

# ==== 整合性フィルタ関連 ===================================================

# アーク整合を「1パス」で終えるか、変化がなくなるまで繰り返すか。
# True にすると、制約が連鎖する場合（#0 < #1, #1 < #2 など）でも
# フィルタ後のドメインが冪等（もう一度かけても変わらない）になります。
AC_UNTIL_FIXED_POINT: bool = True

# フィルタの結果ドメインが空になった変数があれば、
# 探索に入らずに「解なし」を返すかどうか。
SHORT_CIRCUIT_ON_EMPTY_DOMAIN: bool = True


# ==== 探索関連 =============================================================

# 探索アルゴリズムの選択: "backtrack", "restart"
SEARCH_ALGORITHM: str = "backtrack"

# 何ノードごとに進捗ログを出すか。
LOG_PROGRESS_EVERY: int = 10000


# ==== ランダムリスタート関連 ===============================================

# 1回目のリスタートで許すノード数。
RESTART_INITIAL_NODES: int = 200

# リスタートごとにノード上限を何倍にするか。
RESTART_GROWTH: float = 2.0

# ランダムリスタートの最大回数。
# これを使い切ったら、決定的なバックトラック探索で最後まで調べます。
RESTART_MAX_RUNS: int = 8

# 値の並べ替えに使う乱数シード（再現性のため固定）
RESTART_SEED: int = 0


# ==== ログ関連 =============================================================

# ノードごとの詳細トレースをファイルに出すかどうか。
# 大きな問題ではファイルが非常に大きくなるので、デバッグ時だけ有効にします。
SEARCH_TRACE_ENABLED: bool = False

# 詳細トレースの出力先
SEARCH_TRACE_LOG_PATH: str = "logs/search_trace.log"


# ==== 入出力関連 ===========================================================

# 結果表示や CSV 読み込みで使う日付フォーマット
DATE_FORMAT: str = "%Y-%m-%d"
