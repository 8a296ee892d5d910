"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from decimal import Decimal

import pytest

from ticketing.domain import Capacity, EventId, Identity, Money, TicketLookup


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        assert Money(150).amount == 150

    def test_money_accepts_zero(self):
        assert Money.zero() == Money(0)

    def test_money_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Money(-1)

    def test_money_rejects_fractional_amount(self):
        with pytest.raises(TypeError):
            Money(Decimal("1.5"))

    def test_from_major_scales_to_minor_units(self):
        assert Money.from_major(1, 100) == Money(100)
        assert Money.from_major("0.5", 10**18) == Money(5 * 10**17)

    def test_from_major_rounds_half_up(self):
        assert Money.from_major(Decimal("1.005"), 100) == Money(101)
        assert Money.from_major(Decimal("1.004"), 100) == Money(100)

    def test_arithmetic_and_ordering(self):
        assert Money(300) - Money(100) == Money(200)
        assert Money(1) + Money(2) == Money(3)
        assert Money(1) < Money(2)
        assert Money(3) > Money(2)

    def test_subtraction_below_zero_is_rejected(self):
        with pytest.raises(ValueError):
            Money(1) - Money(2)


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-1)


class TestEventId:
    """Tests for EventId value object."""

    def test_from_counter_formats_identifier(self):
        assert EventId.from_counter(1).value == "ev1"
        assert str(EventId.from_counter(42)) == "ev42"

    def test_from_counter_rejects_zero(self):
        with pytest.raises(ValueError):
            EventId.from_counter(0)

    def test_empty_identifier(self):
        assert EventId.from_string("").is_empty()
        assert not EventId.from_string("ev1").is_empty()


class TestIdentity:
    def test_identity_rejects_empty_value(self):
        with pytest.raises(ValueError):
            Identity("")

    def test_identities_compare_by_value(self):
        assert Identity("alice") == Identity("alice")
        assert Identity("alice") != Identity("bob")


def test_missing_ticket_lookup():
    assert TicketLookup.missing() == (False, None, 0)
