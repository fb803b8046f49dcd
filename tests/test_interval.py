"""Tests for Interval float ranges."""

import sys
import pytest

from raytrace.interval import Interval, EMPTY, UNIVERSE, UNIT


class TestIntervalEmptiness:
    """Test the empty-range representation."""

    def test_default_is_empty(self):
        interval = Interval()
        assert interval.is_empty
        assert interval.min == sys.float_info.max
        assert interval.max == -sys.float_info.max

    @pytest.mark.parametrize("value", [0.0, 1.0, -1.0, 1e300, -1e300])
    def test_default_contains_nothing(self, value):
        assert not EMPTY.contains(value)
        assert not EMPTY.surrounds(value)

    @pytest.mark.parametrize("a,b", [(1.0, 0.0), (5.0, -5.0), (0.001, 0.0)])
    def test_inverted_interval_contains_nothing(self, a, b):
        interval = Interval(a, b)
        assert interval.is_empty
        for value in (a, b, (a + b) / 2, 0.0):
            assert not interval.contains(value)

    def test_single_point_not_empty(self):
        interval = Interval(2.0, 2.0)
        assert not interval.is_empty
        assert interval.contains(2.0)
        assert not interval.surrounds(2.0)


class TestIntervalMembership:
    """Test contains/surrounds."""

    def test_contains_is_closed(self):
        assert UNIT.contains(0.0)
        assert UNIT.contains(1.0)
        assert UNIT.contains(0.5)
        assert not UNIT.contains(1.0000001)

    def test_surrounds_is_open(self):
        assert not UNIT.surrounds(0.0)
        assert not UNIT.surrounds(1.0)
        assert UNIT.surrounds(0.5)

    def test_universe(self):
        assert UNIVERSE.contains(1e308)
        assert UNIVERSE.contains(-1e308)
        assert not UNIVERSE.is_empty


class TestIntervalOperations:
    """Test clamp, size and with_max."""

    def test_clamp(self):
        assert UNIT.clamp(-0.5) == 0.0
        assert UNIT.clamp(0.25) == 0.25
        assert UNIT.clamp(7.0) == 1.0

    def test_clamp_empty_raises(self):
        with pytest.raises(ValueError):
            EMPTY.clamp(0.0)

    def test_size(self):
        assert Interval(1.0, 4.0).size == 3.0
        assert EMPTY.size < 0

    def test_with_max(self):
        shrunk = Interval(0.001, float('inf')).with_max(3.0)
        assert shrunk == Interval(0.001, 3.0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            UNIT.min = 5.0
