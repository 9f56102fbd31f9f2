# -*- coding: utf-8 -*-
"""
calendar_solver.dataio パッケージ

制約表（CSV / DataFrame）の読み込みをまとめたサブパッケージです。
- loader.py : 制約表から DateConstraint のリストへの変換
"""
