"""Tests unitarios para el value object Money."""

from decimal import Decimal

import pytest

from app.domain.value_objects import Money


class TestMoney:
    def test_arithmetic_stays_in_cents(self):
        """Debe sumar y multiplicar en centavos enteros."""
        total = Money(amount_cents=1000) * 2 + Money(amount_cents=500)

        assert total.amount_cents == 2500
        assert total.to_display() == "25.00"
        assert str(total) == "USD 25.00"

    def test_rejects_float_amount(self):
        with pytest.raises(TypeError):
            Money(amount_cents=10.5)

    def test_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Money(amount_cents=-1)

    def test_rejects_mixed_currencies(self):
        with pytest.raises(ValueError):
            Money(amount_cents=100, currency="USD") + Money(amount_cents=100, currency="EUR")

    def test_display_keeps_two_decimals(self):
        assert Money(amount_cents=5).to_display() == "0.05"
        assert Money(amount_cents=1999, currency="EUR").to_decimal() == Decimal("19.99")
