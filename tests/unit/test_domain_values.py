"""Tests for Decimal coercion, rounding and value-object construction."""

from datetime import date
from decimal import Decimal

import pytest

from property_kernel.domain.base_parameters import BaseParameters
from property_kernel.domain.contracts import (
    AdditionalCharge,
    ChargeFrequency,
    Contract,
    IndexationPolicy,
    IndexationType,
    IndexDetails,
    Payment,
    PaymentStatus,
)
from property_kernel.domain.values import CENTS, WHOLE, as_decimal, as_optional_decimal, round_money


class TestAsDecimal:
    def test_decimal_passthrough(self):
        value = Decimal("1.10")
        assert as_decimal(value) is value

    def test_float_goes_through_str(self):
        assert as_decimal(3.85) == Decimal("3.85")

    def test_int_and_str(self):
        assert as_decimal(7) == Decimal("7")
        assert as_decimal("0.12") == Decimal("0.12")

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            as_decimal(True)

    def test_garbage_rejected_with_field_name(self):
        with pytest.raises(ValueError, match="monthly_rent"):
            as_decimal("abc", "monthly_rent")

    def test_optional_none(self):
        assert as_optional_decimal(None) is None


class TestRoundMoney:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("0.005", "0.01"),
            ("-0.005", "-0.01"),
            ("2.344", "2.34"),
            ("2.345", "2.35"),
        ],
    )
    def test_cents_half_away_from_zero(self, raw, expected):
        assert round_money(Decimal(raw)) == Decimal(expected)
        assert round_money(Decimal(raw), CENTS).as_tuple().exponent == -2

    def test_whole_units(self):
        assert round_money(Decimal("2599.5"), WHOLE) == Decimal("2600")
        assert round_money(Decimal("-2599.5"), WHOLE) == Decimal("-2600")


class TestValueObjects:
    def test_payment_coerces_amount_and_status(self):
        payment = Payment(date=date(2024, 1, 1), amount=1500.5, status=PaymentStatus.LATE)
        assert payment.amount == Decimal("1500.5")
        assert payment.status == "late"

    def test_index_paid_flag(self):
        assert not Payment(date=None).is_index_paid
        assert not Payment(date=None, index_details=IndexDetails()).is_index_paid
        assert Payment(date=None, index_details=IndexDetails(is_index_paid=True)).is_index_paid

    def test_indexation_kind_normalized(self):
        assert IndexationPolicy(kind=IndexationType.DOLLAR).kind == "dollar"
        assert IndexationPolicy().kind == "none"

    def test_unknown_kind_kept(self):
        assert IndexationPolicy(kind="gold").kind == "gold"

    def test_contract_sequences_become_tuples(self):
        contract = Contract(
            start_date=date(2024, 1, 1),
            additional_payments=[AdditionalCharge("committee", 120, ChargeFrequency.QUARTERLY, True)],
        )
        assert isinstance(contract.additional_payments, tuple)
        assert contract.additional_payments[0].frequency == "quarterly"
        assert contract.additional_payments[0].amount == Decimal("120")

    def test_base_parameters_currency_codes_lowercased(self):
        params = BaseParameters(consumer_price_index=100, currency_rates={"USD": 3.6})
        assert params.currency_rates == {"usd": Decimal("3.6")}
        assert params.rate("Usd") == Decimal("3.6")
