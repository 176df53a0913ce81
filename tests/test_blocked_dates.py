"""Tests for blocked-date expansion."""

from datetime import date

import pytest

from src.availability.blocked_dates import BlockedDateSet, build_blocked_dates
from src.schemas.booking_schema import BufferPolicy
from tests.conftest import d, make_blocked


class TestBuildBlockedDates:
    def test_buffer_on_both_sides(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")])
        assert list(blocked)[0] == d("2025-01-07")
        assert list(blocked)[-1] == d("2025-01-15")
        assert len(blocked) == 9

    def test_days_just_outside_buffer_are_free(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")])
        assert d("2025-01-06") not in blocked
        assert d("2025-01-16") not in blocked

    def test_single_day_reservation(self):
        blocked = make_blocked([("2025-05-20", "2025-05-20")])
        assert len(blocked) == 7

    def test_zero_buffer_blocks_only_reserved_days(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")], lead=0, trail=0)
        assert blocked == {d("2025-01-10"), d("2025-01-11"), d("2025-01-12")}

    def test_asymmetric_buffer(self):
        blocked = make_blocked([("2025-01-10", "2025-01-10")], lead=1, trail=2)
        assert list(blocked) == [d("2025-01-09"), d("2025-01-10"),
                                 d("2025-01-11"), d("2025-01-12")]

    def test_overlapping_intervals_are_unioned(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12"), ("2025-01-14", "2025-01-15")])
        assert list(blocked)[0] == d("2025-01-07")
        assert list(blocked)[-1] == d("2025-01-18")
        assert len(blocked) == 12

    def test_duplicate_intervals_are_idempotent(self):
        once = make_blocked([("2025-01-10", "2025-01-12")])
        twice = make_blocked([("2025-01-10", "2025-01-12"), ("2025-01-10", "2025-01-12")])
        assert once == twice

    def test_order_of_intervals_does_not_matter(self):
        a = make_blocked([("2025-02-01", "2025-02-02"), ("2025-03-01", "2025-03-03")])
        b = make_blocked([("2025-03-01", "2025-03-03"), ("2025-02-01", "2025-02-02")])
        assert a == b

    def test_empty_input(self):
        blocked = build_blocked_dates([], BufferPolicy())
        assert len(blocked) == 0
        assert blocked == BlockedDateSet()

    def test_crosses_month_boundary(self):
        blocked = make_blocked([("2025-01-31", "2025-02-01")])
        assert d("2025-01-28") in blocked
        assert d("2025-02-04") in blocked

    def test_negative_buffer_rejected_by_policy(self):
        with pytest.raises(ValueError):
            BufferPolicy(lead_buffer_days=-1)


class TestBlockedDateSet:
    def test_iterates_sorted(self):
        blocked = BlockedDateSet([d("2025-01-03"), d("2025-01-01"), d("2025-01-02")])
        assert list(blocked) == [d("2025-01-01"), d("2025-01-02"), d("2025-01-03")]

    def test_any_within(self):
        blocked = BlockedDateSet([d("2025-02-04")])
        assert blocked.any_within(d("2025-02-01"), d("2025-02-05"))
        assert not blocked.any_within(d("2025-02-05"), d("2025-02-09"))

    def test_first_free_on_or_after(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")])
        assert blocked.first_free_on_or_after(d("2025-01-08")) == d("2025-01-16")
        assert blocked.first_free_on_or_after(d("2025-01-20")) == d("2025-01-20")

    def test_first_free_respects_limit(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")])
        assert blocked.first_free_on_or_after(d("2025-01-08"), limit=d("2025-01-12")) is None

    def test_first_free_on_the_limit_is_found(self):
        blocked = make_blocked([("2025-01-10", "2025-01-12")])
        assert blocked.first_free_on_or_after(d("2025-01-08"), limit=d("2025-01-16")) == d("2025-01-16")

    def test_hashable_and_comparable_to_frozenset(self):
        days = frozenset({date(2025, 1, 1)})
        assert BlockedDateSet(days) == days
        assert hash(BlockedDateSet(days)) == hash(BlockedDateSet(days))
