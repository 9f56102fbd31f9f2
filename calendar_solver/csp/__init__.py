# -*- coding: utf-8 -*-
"""
calendar_solver.csp パッケージ

日付制約充足問題（CSP）を解くための処理をまとめています。

主に以下の役割を持つモジュールから構成されています。
- constraints.py    : 単項・二項の日付制約と比較演算子
- oracle.py         : 2つの日付が演算子を満たすかの判定
- domains.py        : 会議ごとのドメイン（候補日付リスト）の管理
- propagation.py    : ノード整合・アーク整合によるドメインの絞り込み
- search.py         : バックトラック探索
- search_restart.py : ランダムリスタート付きの探索
"""
