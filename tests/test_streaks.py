import pytest

from momentum.calendar_utils import add_days
from momentum.entities import Goal
from momentum.services.streaks import compute_streak


def make_goal(start="2024-01-01", history=None, best=0):
    return Goal(id="g1", name="Run", color="#ff0000", start_date=start, history=dict(history or {}), best_streak=best)


def test_empty_history_has_no_streak():
    assert compute_streak(make_goal(), "2024-01-10") == (0, 0)


def test_unfinished_today_is_tolerated():
    # scenario: two done days, today explicitly false
    g = make_goal(history={"2024-01-01": True, "2024-01-02": True, "2024-01-03": False})
    assert compute_streak(g, "2024-01-03").current == 2


@pytest.mark.parametrize("days", [1, 2, 7, 31, 400])
def test_every_day_since_start_counts_inclusive(days):
    start = "2023-12-01"
    today = add_days(start, days - 1)
    g = make_goal(start=start, history={add_days(start, i): True for i in range(days)})
    assert compute_streak(g, today).current == days


def test_one_gap_inside_the_run_is_tolerated():
    g = make_goal(history={"2024-01-10": True, "2024-01-08": True, "2024-01-07": True})
    assert compute_streak(g, "2024-01-10").current == 3


def test_second_miss_ends_the_walk():
    g = make_goal(history={"2024-01-10": True, "2024-01-08": True, "2024-01-06": True, "2024-01-05": True})
    assert compute_streak(g, "2024-01-10").current == 2


def test_today_and_yesterday_missing_means_zero():
    g = make_goal(history={"2024-01-08": True, "2024-01-07": True})
    assert compute_streak(g, "2024-01-10").current == 0


def test_walk_crosses_year_boundary():
    g = make_goal(start="2023-12-30", history={"2023-12-30": True, "2023-12-31": True, "2024-01-01": True})
    assert compute_streak(g, "2024-01-01").current == 3


def test_best_never_goes_down():
    g = make_goal(history={"2024-01-10": True}, best=9)
    assert compute_streak(g, "2024-01-10") == (1, 9)


def test_best_follows_a_longer_current():
    g = make_goal(history={"2024-01-09": True, "2024-01-10": True}, best=1)
    result = compute_streak(g, "2024-01-10")
    assert result.best == 2
    assert g.best_streak == 1
