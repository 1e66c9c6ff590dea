import pytest

from backend.app.services.intervals import overlap, percent_of, seconds_to_hours, to_epoch

INTERVALS = [
    (0, 10),
    (5, 15),
    (10, 20),
    (20, 30),
    (-5, 100),
    (7, 7),
]


@pytest.mark.parametrize("a", INTERVALS)
@pytest.mark.parametrize("b", INTERVALS)
def test_overlap_is_symmetric(a, b):
    assert overlap(*a, *b) == overlap(*b, *a)


@pytest.mark.parametrize("a", INTERVALS)
@pytest.mark.parametrize("b", INTERVALS)
def test_overlap_is_bounded(a, b):
    result = overlap(*a, *b)
    assert 0 <= result <= min(a[1] - a[0], b[1] - b[0])


def test_overlap_partial_and_contained():
    assert overlap(0, 10, 5, 15) == 5
    assert overlap(0, 100, 10, 20) == 10
    assert overlap(10, 20, 0, 100) == 10


def test_overlap_touching_ranges_share_nothing():
    assert overlap(0, 10, 10, 20) == 0
    assert overlap(10, 20, 0, 10) == 0


def test_overlap_clamps_reversed_and_disjoint_inputs():
    assert overlap(0, 10, 50, 60) == 0
    assert overlap(10, 0, 0, 10) == 0
    assert overlap(0, 10, 10, 0) == 0


def test_seconds_to_hours_rounds_to_one_decimal():
    assert seconds_to_hours(0) == 0.0
    assert seconds_to_hours(3600) == 1.0
    assert seconds_to_hours(5400) == 1.5
    # 1.25h rounds half up
    assert seconds_to_hours(4500) == 1.3
    assert seconds_to_hours(1000) == 0.3


def test_percent_of_rounds_half_up_and_guards_zero():
    assert percent_of(1, 2) == 50
    assert percent_of(1, 3) == 33
    assert percent_of(2, 3) == 67
    assert percent_of(1, 8) == 13
    assert percent_of(5, 0) == 0


def test_to_epoch_reads_upstream_bounds():
    assert to_epoch(1700000000) == 1700000000
    assert to_epoch("1700000000") == 1700000000
    assert to_epoch(1700000000.9) == 1700000000
    assert to_epoch(None) is None
    assert to_epoch("") is None
    assert to_epoch(0) is None
    assert to_epoch("soon") is None
    assert to_epoch(True) is None
