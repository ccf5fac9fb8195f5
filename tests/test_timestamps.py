import pytest

from sens_checker.core.statuses import TimestampStatus
from sens_checker.validate.timestamps import TimestampTracker


def _status(stream):
    t = TimestampTracker()
    for ts in stream:
        t.update(ts)
    return t.status


def test_empty_stream_is_not_available():
    assert _status([]) == TimestampStatus.NOT_AVAILABLE


def test_all_zero_is_not_available():
    assert _status([0, 0, 0]) == TimestampStatus.NOT_AVAILABLE


def test_decrease_is_not_monotonic():
    assert _status([100, 200, 150]) == TimestampStatus.NOT_MONOTONIC


def test_repeats_stay_monotonic():
    assert _status([5, 5, 5, 6, 6]) == TimestampStatus.GOOD


def test_drop_to_zero_after_values_is_not_monotonic():
    assert _status([10, 20, 0]) == TimestampStatus.NOT_MONOTONIC


def test_leading_zeros_then_values_are_good():
    assert _status([0, 0, 7, 9]) == TimestampStatus.GOOD


@pytest.mark.parametrize("stream,expected", [
    ([1], TimestampStatus.GOOD),
    ([3, 2], TimestampStatus.NOT_MONOTONIC),
    ([2 ** 64 - 1, 2 ** 64 - 1], TimestampStatus.GOOD),
])
def test_small_streams(stream, expected):
    assert _status(stream) == expected


def test_status_matches_definition_on_random_streams():
    import random
    rng = random.Random(3)
    for _ in range(200):
        stream = [rng.choice([0, 1, 2, 3]) for _ in range(rng.randint(1, 6))]
        monotonic = all(b >= a for a, b in zip(stream, stream[1:]))
        if max(stream) == 0:
            expected = TimestampStatus.NOT_AVAILABLE
        elif monotonic:
            expected = TimestampStatus.GOOD
        else:
            expected = TimestampStatus.NOT_MONOTONIC
        assert _status(stream) == expected, stream
