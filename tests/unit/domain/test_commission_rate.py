"""Tests unitarios para el cálculo de comisiones en centavos."""

from decimal import Decimal

import pytest

from app.domain.value_objects import calculate_commission, to_commission_rate


class TestCalculateCommission:
    """Tests para calculate_commission."""

    def test_exact_commission(self):
        """Debe calcular 10% de $20.00 exactamente."""
        assert calculate_commission(2000, Decimal("10")) == 200

    def test_rounds_half_up(self):
        """Debe redondear medio centavo hacia arriba."""
        # 12.5% de 333 = 41.625 -> 42
        assert calculate_commission(333, Decimal("12.5")) == 42
        # 10% de 5 = 0.5 -> 1
        assert calculate_commission(5, Decimal("10")) == 1

    def test_rounds_down_below_half(self):
        """Debe redondear hacia abajo por debajo de medio centavo."""
        # 12.5% de 999 = 124.875 -> 125; 10% de 4 = 0.4 -> 0
        assert calculate_commission(999, Decimal("12.50")) == 125
        assert calculate_commission(4, Decimal("10")) == 0

    def test_accepts_string_and_int_rates(self):
        assert calculate_commission(1000, "7.5") == 75
        assert calculate_commission(1000, 15) == 150

    def test_zero_rate_and_zero_total(self):
        assert calculate_commission(1000, Decimal("0")) == 0
        assert calculate_commission(0, Decimal("10")) == 0

    def test_rejects_float_rate(self):
        """No debe aceptar tasas en punto flotante."""
        with pytest.raises(TypeError):
            calculate_commission(1000, 10.0)

    def test_rejects_float_total(self):
        with pytest.raises(TypeError):
            calculate_commission(10.5, Decimal("10"))

    def test_rejects_negative_total(self):
        with pytest.raises(ValueError):
            calculate_commission(-1, Decimal("10"))


class TestToCommissionRate:
    """Tests para la normalización de tasas."""

    @pytest.mark.parametrize("value", [Decimal("-0.01"), Decimal("100.01"), "abc", "NaN"])
    def test_rejects_out_of_range_or_invalid(self, value):
        with pytest.raises(ValueError):
            to_commission_rate(value)

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            to_commission_rate(True)

    def test_strips_strings(self):
        assert to_commission_rate(" 12.50 ") == Decimal("12.5")

    def test_rounds_to_two_decimals(self):
        """Debe redondear la tasa a dos decimales, la precisión del libro de comisiones."""
        assert to_commission_rate(Decimal("12.345")) == Decimal("12.35")
        assert to_commission_rate("7.124") == Decimal("7.12")
        assert to_commission_rate(Decimal("12.345")).as_tuple().exponent == -2

    def test_commission_uses_rounded_rate(self):
        # 1000 * 12.35% = 123.5 -> 124
        assert calculate_commission(1000, Decimal("12.345")) == 124
