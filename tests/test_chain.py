import copy

import pytest

from momentum.entities import Goal
from momentum.services.chain import generate_chain, month_chain, rolling_chain


def make_goal(start, history):
    return Goal(id="g1", name="Read", color="#00f", start_date=start, history=dict(history))


def filled_keys(cells):
    return [c.date_key for c in cells if c.filled]


def test_month_chain_covers_the_whole_month_in_order():
    cells = month_chain(make_goal("2024-02-01", {}), "2024-02-10")
    keys = [c.date_key for c in cells]
    assert len(cells) == 29
    assert keys[0] == "2024-02-01" and keys[-1] == "2024-02-29"
    assert keys == sorted(keys)


def test_month_chain_started_mid_month_fills_only_start_day():
    g = make_goal("2024-01-10", {
        "2024-01-05": True,      # before start: never shown
        "2024-01-10": True,
    })
    assert filled_keys(month_chain(g, "2024-01-15")) == ["2024-01-10"]


def test_month_chain_ignores_days_after_today():
    g = make_goal("2024-01-01", {"2024-01-14": True, "2024-01-20": True})
    assert filled_keys(month_chain(g, "2024-01-15")) == ["2024-01-14"]


def test_month_chain_false_entries_stay_unfilled():
    g = make_goal("2024-01-01", {"2024-01-02": False, "2024-01-03": True})
    assert filled_keys(month_chain(g, "2024-01-03")) == ["2024-01-03"]


def test_rolling_chain_ends_today():
    g = make_goal("2023-12-01", {"2023-12-20": True, "2024-01-03": True, "2023-12-01": True})
    cells = rolling_chain(g, "2024-01-03", window=30)
    assert len(cells) == 30
    assert cells[0].date_key == "2023-12-05"
    assert cells[-1].date_key == "2024-01-03"
    assert filled_keys(cells) == ["2023-12-20", "2024-01-03"]


def test_rolling_chain_respects_start_date():
    g = make_goal("2024-01-02", {"2024-01-01": True, "2024-01-02": True})
    assert filled_keys(rolling_chain(g, "2024-01-03", window=5)) == ["2024-01-02"]


def test_rolling_chain_needs_a_window():
    with pytest.raises(ValueError):
        rolling_chain(make_goal("2024-01-01", {}), "2024-01-03", window=0)


@pytest.mark.parametrize("mode", ["month", "rolling"])
def test_chain_is_deterministic_and_read_only(mode):
    g = make_goal("2024-01-01", {"2024-01-02": True, "2024-01-09": True, "2024-02-01": True})
    before = copy.deepcopy(g)
    first = generate_chain(g, "2024-01-10", mode=mode)
    second = generate_chain(g, "2024-01-10", mode=mode)
    assert first == second
    assert g == before


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        generate_chain(make_goal("2024-01-01", {}), "2024-01-10", mode="weekly")
