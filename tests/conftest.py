from datetime import date, timedelta

import pytest

START = date(2024, 1, 1)


def make_days(n, start=START):
    """start から n 日分の日付リスト。"""
    return [start + timedelta(days=i) for i in range(n)]


@pytest.fixture
def days():
    return make_days
