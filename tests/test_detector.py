"""Tests for boundary change detection."""

import pytest

from conftest import TZ, at
from goaltrio.engine.detector import BoundaryChange, detect
from goaltrio.errors import InvalidTimestamp


def test_never_checked_never_fires():
    for now in (at(2025, 12, 26), at(2030, 1, 1), 1):
        for w in range(1, 8):
            assert detect(0, now, w, TZ) == BoundaryChange(False, False)


def test_same_week_no_change():
    change = detect(at(2025, 12, 22, 9), at(2025, 12, 26, 18), 2, TZ)
    assert change == (False, False)
    assert not change.any


def test_new_week_same_month():
    change = detect(at(2025, 12, 28, 23), at(2025, 12, 29, 0, 1), 2, TZ)
    assert change == BoundaryChange(weekly_changed=True, monthly_changed=False)
    assert change.any


def test_new_month_same_week():
    """Wed 2025-12-31 -> Thu 2026-01-01 is one Monday-week but two months."""
    change = detect(at(2025, 12, 31, 20), at(2026, 1, 1, 8), 2, TZ)
    assert change == BoundaryChange(weekly_changed=False, monthly_changed=True)


def test_both_change():
    change = detect(at(2026, 1, 30), at(2026, 2, 2), 2, TZ)
    assert change == BoundaryChange(True, True)


def test_week_start_setting_moves_the_boundary():
    saturday = at(2025, 12, 27, 12)
    sunday = at(2025, 12, 28, 12)

    assert detect(saturday, sunday, 1, TZ).weekly_changed
    assert not detect(saturday, sunday, 2, TZ).weekly_changed


def test_invalid_timestamp_propagates():
    with pytest.raises(InvalidTimestamp):
        detect(10**20, at(2025, 12, 26), 2, TZ)
